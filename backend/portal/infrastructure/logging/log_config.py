"""Logging configuration.

Per-category levels come from Settings, so the chatty libraries (botocore
request dumps, SQLAlchemy statements, httpx connection chatter) can be
turned up or down independently of the portal's own loggers.

Usage:
    from portal.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan or a client script
"""

import logging
import sys

from portal.config import Settings, get_settings

# Settings field -> logger names it controls
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_aws": [
        "boto3",
        "botocore",
        "urllib3",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
    ],
    "log_level_uvicorn": [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ],
    "log_level_transport": [
        "portal.application.services.transport_selector",
        "portal.infrastructure.gateways",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Apply root and per-category log levels. Safe to call more than once."""
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn normally installs a handler; scripts and tests may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s, aws=%s, http=%s, uvicorn=%s, transport=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_aws,
        settings.log_level_http,
        settings.log_level_uvicorn,
        settings.log_level_transport,
    )


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, str(raw).upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO

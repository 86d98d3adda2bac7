import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Support Portal API"
    app_version: str = "1.0.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Storage backend: "dynamodb" in production, "sql" for local development
    storage_backend: Literal["dynamodb", "sql"] = "dynamodb"
    database_url: str = "sqlite:///./portal.db"

    # AWS / DynamoDB
    aws_region: str = "ap-southeast-2"
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    dynamodb_endpoint_url: str | None = None

    # Physical table names, one per entity
    dynamodb_clients_table: str = "holdings-ctc-clients"
    dynamodb_tickets_table: str = "holdings-ctc-tickets"
    dynamodb_apps_table: str = "holdings-ctc-apps"
    dynamodb_feature_requests_table: str = "holdings-ctc-feature-requests"
    dynamodb_knowledge_base_table: str = "holdings-ctc-knowledge-base"
    dynamodb_users_table: str = "holdings-ctc-users"
    dynamodb_admin_users_table: str = "holdings-ctc-admin-users"
    dynamodb_recent_updates_table: str = "holdings-ctc-recent-updates"
    dynamodb_popular_topics_table: str = "holdings-ctc-popular-topics"
    dynamodb_invoices_table: str = "holdings-ctc-invoices"
    dynamodb_qr_codes_table: str = "holdings-ctc-qr-codes"

    # API access and authentication. No credential has a usable default:
    # an unset API key rejects every protected call, unset login
    # credentials disable that user type.
    api_key: str = ""
    jwt_secret: str = ""
    jwt_expires_hours: int = 24
    admin_username: str = ""
    admin_password: str = ""
    client_username: str = ""
    client_password: str = ""

    # Client library: where the remote proxy lives
    proxy_base_url: str = "http://localhost:3001"
    proxy_probe_attempts: int = 2

    # Domain behaviour
    ticket_number_prefix: str = "HCTC"
    fixtures_file: str = str(_BACKEND_DIR / "data" / "fixtures.yaml")

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL backend
    log_level_aws: str = "WARNING"           # boto3 / botocore
    log_level_http: str = "WARNING"          # httpx / httpcore: proxy client
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_transport: str = "INFO"        # transport mode selection

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_aws_credentials(self) -> bool:
        return bool(self.aws_access_key_id.strip() and self.aws_secret_access_key.strip())

    def model_post_init(self, __context: object) -> None:
        """Warn about settings that leave protected surfaces unusable."""
        if not self.api_key:
            _config_logger.warning("API_KEY is not configured; all /api calls will be rejected")
        if self.storage_backend == "dynamodb" and not self.has_aws_credentials:
            _config_logger.warning(
                "AWS credentials are not configured; the dynamodb backend cannot start "
                "and clients fall back from direct access to fixtures"
            )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()

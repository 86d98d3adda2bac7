"""Client onboarding QR codes.

A code looks like ``QR_<COMPANY>_<RANDOM>_<epoch ms>`` where ``COMPANY`` is up
to six alphanumerics of the company name and ``RANDOM`` six base-36 chars.
"""

import re
import secrets
import string
import time
from datetime import datetime, timedelta, timezone

QR_CODE_TTL = timedelta(days=30)
QR_CODE_PATTERN = re.compile(r"^QR_[A-Z0-9]+_[A-Z0-9]+_\d+$")

_RANDOM_ALPHABET = string.ascii_uppercase + string.digits


def generate_qr_code(company_name: str, now_ms: int | None = None) -> str:
    """Generate a unique onboarding code for a company."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    company_code = re.sub(r"[^a-zA-Z0-9]", "", company_name)[:6].upper() or "CLIENT"
    random_suffix = "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(6))
    return f"QR_{company_code}_{random_suffix}_{now_ms}"


def is_well_formed(code: str) -> bool:
    return bool(QR_CODE_PATTERN.match(code))


def expiry_for(issued_at: datetime) -> datetime:
    return issued_at + QR_CODE_TTL


def is_expired(expires_at: str | None, now: datetime | None = None) -> bool:
    """True when ``expires_at`` (ISO-8601) lies in the past. No expiry never expires."""
    if not expires_at:
        return False
    now = now or datetime.now(timezone.utc)
    expiry = datetime.fromisoformat(expires_at.replace("Z", "+00:00"))
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return now >= expiry

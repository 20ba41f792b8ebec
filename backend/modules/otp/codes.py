"""
One-time passcode primitives.

Shared by the login step-up, the language change and the audio-upload
flows. A code is a 6-digit decimal string that expires a fixed time after
issuance; verification is an exact string match made before expiry.
"""

import secrets
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

OTP_MIN = 100000
OTP_MAX = 999999
DEFAULT_OTP_TTL = timedelta(minutes=10)


class PendingCode(BaseModel):
    """An outstanding code awaiting verification."""

    code: str = Field(..., min_length=6, max_length=6, description="6-digit code")
    expires_at: datetime = Field(..., description="Last instant the code is accepted")


class CodeCheck(str, Enum):
    """Result of comparing a submitted code with a pending one."""

    VALID = "valid"
    MISMATCH = "mismatch"
    EXPIRED = "expired"
    MISSING = "missing"


def generate_code() -> str:
    """Draw a code uniformly from [100000, 999999]."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def expiry_from(now: datetime, ttl: timedelta = DEFAULT_OTP_TTL) -> datetime:
    return now + ttl


def is_expired(expires_at: datetime, now: datetime) -> bool:
    """A code stays usable up to and including ``expires_at``."""
    return now > expires_at


def check_code(
    pending: Optional[PendingCode],
    submitted: str,
    now: datetime,
) -> CodeCheck:
    """
    Compare ``submitted`` against ``pending`` at time ``now``.

    Expiry is checked before the code so an expired slot is always reported
    as EXPIRED and can be cleared by the caller. A code is accepted while
    ``now <= expires_at``.
    """
    if pending is None or not pending.code:
        return CodeCheck.MISSING
    if is_expired(pending.expires_at, now):
        return CodeCheck.EXPIRED
    if pending.code != submitted:
        return CodeCheck.MISMATCH
    return CodeCheck.VALID


def mask_email(email: str) -> str:
    """Keep the first two characters of the local part: ``jo***@example.com``."""
    local, _, domain = email.partition("@")
    return f"{local[:2]}***@{domain}"

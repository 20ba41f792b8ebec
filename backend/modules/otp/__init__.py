"""
OTP module.

Six-digit one-time codes. ``codes`` holds the primitives shared by every
code-based flow (login step-up, language change); the rest of the module is
the standalone audio-upload code collection.

Public API:
- generate_code, check_code, CodeCheck, PendingCode: Primitives
- IOTPService: Interface for the audio-upload flow
- OTP exceptions
"""

from .codes import CodeCheck, PendingCode, check_code, generate_code, mask_email
from .interfaces import IOTPRepository, IOTPService
from .models import OTPRecord
from .exceptions import (
    InvalidOTPError,
    InvalidOTPFormatError,
    OTPExpiredError,
    OTPNotFoundError,
    OTPRequiredError,
)

__all__ = [
    # Primitives
    "CodeCheck",
    "PendingCode",
    "check_code",
    "generate_code",
    "mask_email",
    # Interfaces
    "IOTPRepository",
    "IOTPService",
    # Models
    "OTPRecord",
    # Exceptions
    "InvalidOTPError",
    "InvalidOTPFormatError",
    "OTPExpiredError",
    "OTPNotFoundError",
    "OTPRequiredError",
]

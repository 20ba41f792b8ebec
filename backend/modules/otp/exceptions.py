"""
OTP exceptions.

Shared by every flow that verifies a one-time code.
"""

from shared.exceptions import AuthorizationError, ValidationError


class OTPNotFoundError(ValidationError):
    """Raised when no outstanding code exists for the subject."""

    def __init__(self, message: str = "No OTP request found. Please request a new OTP."):
        super().__init__(message, code="OTP_NOT_FOUND")


class OTPExpiredError(ValidationError):
    """Raised when the outstanding code has expired (the slot is cleared)."""

    def __init__(self, message: str = "OTP expired. Please request a new one."):
        super().__init__(message, code="OTP_EXPIRED")


class InvalidOTPError(ValidationError):
    """Raised when the submitted code does not match."""

    def __init__(self, message: str = "Invalid OTP. Please try again."):
        super().__init__(message, code="INVALID_OTP")


class OTPRequiredError(AuthorizationError):
    """Raised when an action needs a verified, unexpired code and none is presented."""

    def __init__(self, message: str = "OTP verification required"):
        super().__init__(message, code="OTP_REQUIRED")


class InvalidOTPFormatError(ValidationError):
    def __init__(self):
        super().__init__("Invalid OTP format", code="INVALID_OTP_FORMAT")

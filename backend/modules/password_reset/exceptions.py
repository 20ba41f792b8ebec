"""
Password reset exceptions.
"""

from datetime import datetime

from shared.exceptions import RateLimitedError, ValidationError


class ResetAlreadyRequestedError(RateLimitedError):
    """Raised on a second reset request within the same local day."""

    def __init__(self, next_retry_time: datetime, last_request_time: datetime):
        super().__init__(
            "You have already requested a password reset today. You can only request "
            "once per day. Please check your email for the previous reset link or try "
            "again tomorrow.",
            retry_after=next_retry_time,
            code="RESET_ALREADY_REQUESTED",
            details={
                "can_retry": False,
                "next_retry_time": next_retry_time.isoformat(),
                "last_request_time": last_request_time.isoformat(),
            },
        )


class InvalidResetTokenError(ValidationError):
    def __init__(self):
        super().__init__(
            "Invalid or expired reset token",
            code="INVALID_RESET_TOKEN",
            details={"valid": False},
        )

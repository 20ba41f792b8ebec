"""
Password reset module interfaces.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import (
    PasswordReset,
    PasswordResetRequested,
    ResetAvailability,
    ResetPasswordRequest,
    ResetTokenInfo,
)


@runtime_checkable
class IPasswordResetRepository(Protocol):
    """Storage for reset requests."""

    def create(self, reset: PasswordReset) -> PasswordReset:
        ...

    def get_by_token(self, token: str) -> Optional[PasswordReset]:
        ...

    def get_latest_since(self, user_id: str, since: datetime) -> Optional[PasswordReset]:
        """Newest request for the user created at or after ``since``."""
        ...

    def invalidate_unused(self, user_id: str) -> None:
        """Mark every unused request for the user as used."""
        ...

    def save(self, reset: PasswordReset) -> PasswordReset:
        ...


@runtime_checkable
class IPasswordResetService(Protocol):
    """
    Interface for the forgot-password flow.

    A user may request one reset per local calendar day. The request emails
    a temporary password together with a single-use reset link.
    """

    async def request_reset(self, email: str) -> PasswordResetRequested:
        """
        Issue a reset for the account with this email, if there is one.

        Unknown emails get the same success response as known ones.

        Raises:
            ResetAlreadyRequestedError: If a reset was already issued today
            DeliveryError: If the email could not be sent
        """
        ...

    async def verify_token(self, token: str) -> ResetTokenInfo:
        """
        Raises:
            InvalidResetTokenError: If the token is unknown, used or expired
        """
        ...

    async def reset_password(self, token: str, request: ResetPasswordRequest) -> None:
        """
        Set the account password and spend the token.

        Raises:
            InvalidResetTokenError: If the token is unknown, used or expired
        """
        ...

    async def check_availability(self, email: str) -> ResetAvailability:
        ...

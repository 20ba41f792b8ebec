"""
OTP module interfaces.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import OTPCheckResponse, OTPRecord, OTPRequestResponse, OTPVerifyResponse


@runtime_checkable
class IOTPRepository(Protocol):
    """Storage for standalone audio-upload codes."""

    def create(self, record: OTPRecord) -> OTPRecord:
        ...

    def get_by_id(self, otp_id: str) -> Optional[OTPRecord]:
        ...

    def get_pending(self, user_id: str) -> Optional[OTPRecord]:
        """Most recent unverified code for the user."""
        ...

    def get_verified(self, user_id: str, now: datetime) -> Optional[OTPRecord]:
        """Most recent verified code that has not expired at ``now``."""
        ...

    def delete_unverified(self, user_id: str) -> None:
        ...

    def save(self, record: OTPRecord) -> OTPRecord:
        ...

    def delete(self, otp_id: str) -> None:
        ...


@runtime_checkable
class IOTPService(Protocol):
    """
    Interface for the audio-upload code flow.

    A code is requested, verified once, and the verified code id is then
    redeemed exactly once by the audio upload.
    """

    async def request_otp(self, user_id: str) -> OTPRequestResponse:
        """
        Issue a new code, replacing any unverified one, and email it.

        Raises:
            UserNotFoundError: If the user does not exist
            DeliveryError: If the email could not be sent
        """
        ...

    async def verify_otp(self, user_id: str, otp: str) -> OTPVerifyResponse:
        """
        Verify a code.

        Raises:
            InvalidOTPFormatError: If the code is not 6 characters
            OTPNotFoundError, OTPExpiredError, InvalidOTPError
        """
        ...

    async def check_verification(self, user_id: str) -> OTPCheckResponse:
        ...

    async def require_verified(self, user_id: str, otp_id: Optional[str]) -> OTPRecord:
        """
        Resolve a verified, unexpired code owned by the user.

        Raises:
            OTPRequiredError: If no id was given, or it does not resolve
        """
        ...

    async def consume(self, otp_id: str) -> None:
        """Delete a redeemed code so it cannot be used again."""
        ...

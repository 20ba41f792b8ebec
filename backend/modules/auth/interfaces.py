"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Protocol, runtime_checkable

from modules.users.models import AccountView

from .fingerprint import RequestFingerprint
from .models import (
    AuthResponse,
    LoginHistoryResponse,
    LoginRequest,
    LoginResult,
    RegisterRequest,
    VerifyBrowserOTPRequest,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Every login attempt that passes the credential check ends with exactly
    one new login-history entry, whatever its outcome.
    """

    async def register(
        self,
        request: RegisterRequest,
        fingerprint: RequestFingerprint,
    ) -> AuthResponse:
        """
        Create an account and return a token for it.

        Raises:
            UserAlreadyExistsError: If the email or username is taken
        """
        ...

    async def login(
        self,
        request: LoginRequest,
        fingerprint: RequestFingerprint,
    ) -> LoginResult:
        """
        Authenticate and apply the access policy.

        Returns:
            AuthResponse when access is granted, OTPChallengeResponse when an
            emailed code must be verified first

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            MobileAccessRestrictedError: Mobile login outside allowed hours
            DeliveryError: The step-up code could not be emailed
        """
        ...

    async def verify_browser_otp(
        self,
        request: VerifyBrowserOTPRequest,
        fingerprint: RequestFingerprint,
    ) -> AuthResponse:
        """
        Complete a parked login with the emailed code.

        Raises:
            UserNotFoundError: Unknown user id
            OTPNotFoundError, OTPExpiredError, InvalidOTPError
        """
        ...

    async def get_me(self, user_id: str) -> AccountView:
        ...

    async def get_login_history(self, user_id: str) -> LoginHistoryResponse:
        """Login history newest first, with the current session."""
        ...

    async def logout(self, user_id: str) -> None:
        ...

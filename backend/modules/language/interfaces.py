"""
Language module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from modules.users.models import Language

from .models import (
    CurrentLanguageResponse,
    LanguageChangedResponse,
    LanguageChangeResponse,
    PhoneUpdatedResponse,
)


@runtime_checkable
class ILanguageService(Protocol):
    """
    Interface for changing the preferred language.

    English applies at once. French is verified by an emailed code, every
    other language by an SMS code. A new request replaces any pending code.
    """

    async def get_current(self, user_id: str) -> CurrentLanguageResponse:
        ...

    async def request_change(
        self,
        user_id: str,
        language: Language,
        phone_number: Optional[str] = None,
    ) -> LanguageChangeResponse:
        """
        Start a language change.

        Raises:
            PhoneRequiredError: SMS language without a phone number
            InvalidPhoneNumberError: Phone number is not E.164
            DeliveryError: The code could not be sent
        """
        ...

    async def verify_otp(
        self,
        user_id: str,
        otp: str,
        language: Language,
    ) -> LanguageChangedResponse:
        """
        Apply a pending change. Expired or wrong codes leave the language as is.

        Raises:
            OTPNotFoundError, OTPExpiredError, InvalidOTPError, LanguageMismatchError
        """
        ...

    async def update_phone(self, user_id: str, phone_number: str) -> PhoneUpdatedResponse:
        """Store a new phone number; it is unverified until an SMS code is accepted."""
        ...

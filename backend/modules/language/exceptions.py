"""
Language module exceptions.
"""

from shared.exceptions import ValidationError


class PhoneRequiredError(ValidationError):
    """Raised when an SMS-verified language is requested without a phone number."""

    def __init__(self):
        super().__init__(
            "Phone number required for this language",
            code="PHONE_REQUIRED",
            details={"requires_phone": True},
        )


class InvalidPhoneNumberError(ValidationError):
    def __init__(self):
        super().__init__(
            "Invalid phone number format. Use international format: +1234567890",
            code="INVALID_PHONE_NUMBER",
        )


class LanguageMismatchError(ValidationError):
    """Raised when the code is submitted for a different language than requested."""

    def __init__(self, requested: str, pending: str):
        super().__init__(
            "OTP was issued for a different language",
            code="LANGUAGE_MISMATCH",
            details={"requested": requested, "pending": pending},
        )

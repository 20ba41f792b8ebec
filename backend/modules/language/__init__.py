"""
Language module.

Preferred-language changes verified by email (French) or SMS (other
non-English languages).
"""

from .interfaces import ILanguageService
from .exceptions import InvalidPhoneNumberError, LanguageMismatchError, PhoneRequiredError

__all__ = [
    "ILanguageService",
    "InvalidPhoneNumberError",
    "LanguageMismatchError",
    "PhoneRequiredError",
]

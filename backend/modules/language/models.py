"""
Language module data models.
"""

import re
from typing import Optional

from pydantic import BaseModel, Field

from modules.users.models import Language, OTPChannel

E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


def is_e164(phone_number: str) -> bool:
    return bool(E164_PATTERN.match(phone_number or ""))


def mask_phone(phone_number: str) -> str:
    """
    Keep the ``+`` with the next two digits and the last four.

    ``+919876543210`` becomes ``+91******3210``. Numbers too short to hide
    anything are returned unchanged.
    """
    if len(phone_number) < 8:
        return phone_number
    return f"{phone_number[:3]}******{phone_number[-4:]}"


class CurrentLanguageResponse(BaseModel):
    language: Language
    has_phone_number: bool
    is_phone_verified: bool


class LanguageChangeRequest(BaseModel):
    language: Language
    phone_number: Optional[str] = Field(None, description="E.164 number for SMS verification")


class LanguageChangeResponse(BaseModel):
    """
    Outcome of a change request.

    English is applied immediately (``requires_otp`` false); every other
    language waits for the code sent over ``otp_type``.
    """

    requires_otp: bool
    otp_type: Optional[OTPChannel] = None
    masked_phone: Optional[str] = None
    message: str
    language: Language


class VerifyLanguageOTPRequest(BaseModel):
    otp: str = Field(..., min_length=1)
    language: Language


class LanguageChangedResponse(BaseModel):
    message: str = "Language changed successfully"
    language: Language


class UpdatePhoneRequest(BaseModel):
    phone_number: str


class PhoneUpdatedResponse(BaseModel):
    message: str = "Phone number updated successfully"
    phone_number: str

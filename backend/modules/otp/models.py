"""
OTP module data models.

Standalone one-time codes authorizing an audio upload. Unlike the login and
language codes these are rows of their own, so a verified code can be
redeemed later by id.
"""

from datetime import datetime
from typing import Optional
import uuid

from pydantic import BaseModel, Field

from shared.schedule import utc_now

from .codes import PendingCode

AUDIO_UPLOAD_PURPOSE = "audio_upload"


class OTPRecord(PendingCode):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    email: str
    purpose: str = AUDIO_UPLOAD_PURPOSE
    verified: bool = False
    created_at: datetime = Field(default_factory=utc_now)


class VerifyOTPRequest(BaseModel):
    otp: str = Field(..., description="6-digit code from the email")


class OTPRequestResponse(BaseModel):
    message: str = "OTP sent successfully to your email"
    email: str = Field(..., description="Masked destination address")


class OTPVerifyResponse(BaseModel):
    message: str = "OTP verified successfully"
    verified: bool = True
    otp_id: str


class OTPCheckResponse(BaseModel):
    verified: bool
    otp_id: Optional[str] = None

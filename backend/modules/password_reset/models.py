"""
Password reset data models.
"""

from datetime import datetime
from typing import Optional
import uuid

from pydantic import BaseModel, Field, EmailStr, model_validator

from shared.schedule import utc_now


class PasswordReset(BaseModel):
    """
    One reset request.

    At most one is created per user per local calendar day. The temporary
    password is kept so the reset page can show it; it stops working once
    the record is used or expires.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    email: str
    reset_token: str
    generated_password: str
    is_used: bool = False
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)

    def is_redeemable(self, now: datetime) -> bool:
        return not self.is_used and now < self.expires_at


class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetRequested(BaseModel):
    message: str
    success: bool = True


class ResetTokenInfo(BaseModel):
    valid: bool = True
    email: str
    username: str
    generated_password: str


class ResetPasswordRequest(BaseModel):
    """
    Finish a reset either with the emailed temporary password or with a new
    password typed twice.
    """

    use_generated_password: bool = False
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None

    @model_validator(mode="after")
    def _check_new_password(self) -> "ResetPasswordRequest":
        if self.use_generated_password:
            return self
        if not self.new_password or len(self.new_password) < 6:
            raise ValueError("Password must be at least 6 characters long")
        if self.new_password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class ResetAvailability(BaseModel):
    can_request: bool
    message: str
    next_available_time: Optional[datetime] = None
    last_request_time: Optional[datetime] = None

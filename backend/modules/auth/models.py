"""
Authentication module data models.

Request and response bodies for registration, login, the browser step-up
code and the login-history view.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, EmailStr

from modules.users.models import AccountView, CurrentSession, LoginHistoryEntry


class TokenPayload(BaseModel):
    """Decoded access-token claims."""

    sub: str = Field(..., description="Subject (user ID)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")


class RegisterRequest(BaseModel):
    """Request to create an account."""

    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=50)

    model_config = {"str_strip_whitespace": True}


class LoginRequest(BaseModel):
    """
    Request to log in.

    ``client_browser`` is what the browser reports about itself; only the
    value "Brave" changes the outcome.
    """

    email: EmailStr
    password: str = Field(..., min_length=1)
    client_browser: Optional[str] = Field(None, description="Client-reported browser name")


class VerifyBrowserOTPRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    otp: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """A granted login: access token plus the account."""

    token: str
    user: AccountView


class OTPChallengeResponse(BaseModel):
    """A login parked until the emailed code is verified."""

    requires_otp: Literal[True] = True
    message: str = "OTP sent to your email"
    user_id: str
    browser_type: str = "chrome"


LoginResult = Union[AuthResponse, OTPChallengeResponse]


class LoginHistoryResponse(BaseModel):
    current_session: Optional[CurrentSession] = None
    login_history: list[LoginHistoryEntry]
    total_logins: int

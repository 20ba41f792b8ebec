"""
User module data models.

The User entity carries its own security state: the bounded login-history
ledger, the current-session pointer, the single-slot pending codes for
browser step-up and language change, and the trusted-device list.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from pydantic import BaseModel, Field, EmailStr, field_validator, model_validator

from modules.otp.codes import PendingCode
from shared.schedule import utc_now

LOGIN_HISTORY_LIMIT = 50
DEFAULT_PROFILE_PICTURE = "https://api.dicebear.com/7.x/avataaars/svg?seed=default"


class Language(str, Enum):
    """Supported interface languages."""

    EN = "en"
    ES = "es"
    HI = "hi"
    PT = "pt"
    ZH = "zh"
    FR = "fr"


LANGUAGE_NAMES: dict[Language, str] = {
    Language.EN: "English",
    Language.ES: "Spanish",
    Language.HI: "Hindi",
    Language.PT: "Portuguese",
    Language.ZH: "Chinese",
    Language.FR: "French",
}


class DeviceType(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"
    UNKNOWN = "unknown"


class OTPChannel(str, Enum):
    """Where a language-change code was delivered."""

    EMAIL = "email"
    PHONE = "phone"


class BrowserInfo(BaseModel):
    name: str = "Unknown"
    version: str = "Unknown"
    full_string: str = ""


class OSInfo(BaseModel):
    name: str = "Unknown"
    version: str = "Unknown"
    full_string: str = ""


class Location(BaseModel):
    """Best-effort IP geolocation. Every field is "Unknown" when lookup fails."""

    country: str = "Unknown"
    city: str = "Unknown"
    region: str = "Unknown"
    timezone: str = "Unknown"


class LoginHistoryEntry(BaseModel):
    """
    One login attempt, granted or not.

    Entries are frozen once appended; the only later change is the logout
    stamp, applied by replacing the entry with a copy.
    """

    login_time: datetime = Field(default_factory=utc_now)
    logout_time: Optional[datetime] = None
    ip_address: str
    browser: BrowserInfo = Field(default_factory=BrowserInfo)
    os: OSInfo = Field(default_factory=OSInfo)
    device: DeviceType = DeviceType.UNKNOWN
    location: Location = Field(default_factory=Location)
    access_granted: bool = True
    access_denied_reason: Optional[str] = None
    requires_otp: bool = False
    otp_verified: bool = False
    session_id: Optional[str] = None
    user_agent: Optional[str] = None

    model_config = {"frozen": True}


class CurrentSession(BaseModel):
    session_id: str
    login_time: datetime
    ip_address: str
    browser: str
    device: DeviceType
    last_activity: datetime


class BrowserOTP(PendingCode):
    """Pending login step-up code, with the context it was issued for."""

    browser: str
    ip_address: str
    device: DeviceType = DeviceType.UNKNOWN


class LanguageOTP(PendingCode):
    """Pending language-change code."""

    channel: OTPChannel
    language: Language


class TrustedDevice(BaseModel):
    device_fingerprint: str
    browser: str
    added_at: datetime
    last_used: datetime


class SecuritySettings(BaseModel):
    require_otp_for_chrome: bool = True
    mobile_access_restricted: bool = True
    mobile_access_start_hour: Optional[int] = Field(default=10, ge=0, le=23)
    mobile_access_end_hour: Optional[int] = Field(default=13, ge=1, le=24)

    @model_validator(mode="after")
    def _check_window(self) -> "SecuritySettings":
        start = self.mobile_access_start_hour
        end = self.mobile_access_end_hour
        if start is not None and end is not None and start >= end:
            raise ValueError("mobile_access_start_hour must be before mobile_access_end_hour")
        return self


class User(BaseModel):
    """A registered account, as stored."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str = Field(..., min_length=3)
    email: EmailStr
    password_hash: str
    name: str = Field(..., min_length=1)
    bio: str = Field(default="", max_length=160)
    profile_picture: str = DEFAULT_PROFILE_PICTURE
    cover_picture: str = ""
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)

    preferred_language: Language = Language.EN
    phone_number: Optional[str] = None
    is_phone_verified: bool = False
    language_otp: Optional[LanguageOTP] = None

    login_history: list[LoginHistoryEntry] = Field(default_factory=list)
    current_session: Optional[CurrentSession] = None
    browser_otp: Optional[BrowserOTP] = None
    trusted_devices: list[TrustedDevice] = Field(default_factory=list)
    security_settings: SecuritySettings = Field(default_factory=SecuritySettings)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("username", "email", mode="before")
    @classmethod
    def _normalize_handle(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value

    def add_login_history(
        self,
        entry: LoginHistoryEntry,
        limit: int = LOGIN_HISTORY_LIMIT,
    ) -> None:
        """Append an entry, evicting the oldest ones beyond ``limit``."""
        self.login_history.append(entry)
        overflow = len(self.login_history) - limit
        if overflow > 0:
            del self.login_history[:overflow]

    def open_session(self, session: CurrentSession) -> None:
        self.current_session = session

    def record_logout(self, now: datetime) -> bool:
        """
        Close the current session.

        Stamps ``logout_time`` on the most recent history entry carrying the
        session id, then clears the session. Returns whether an entry was
        stamped; it is not when the entry has already been evicted.
        """
        if self.current_session is None:
            return False

        session_id = self.current_session.session_id
        stamped = False
        for index in range(len(self.login_history) - 1, -1, -1):
            entry = self.login_history[index]
            if entry.session_id == session_id:
                self.login_history[index] = entry.model_copy(update={"logout_time": now})
                stamped = True
                break

        self.current_session = None
        return stamped

    def is_trusted_device(self, fingerprint: str) -> bool:
        return any(d.device_fingerprint == fingerprint for d in self.trusted_devices)

    def add_trusted_device(self, fingerprint: str, browser: str, now: datetime) -> None:
        """Record a device, or refresh ``last_used`` if it is already known."""
        for device in self.trusted_devices:
            if device.device_fingerprint == fingerprint:
                device.last_used = now
                return
        self.trusted_devices.append(
            TrustedDevice(
                device_fingerprint=fingerprint,
                browser=browser,
                added_at=now,
                last_used=now,
            )
        )

    def history_newest_first(self) -> list[LoginHistoryEntry]:
        return sorted(self.login_history, key=lambda e: e.login_time, reverse=True)


# -----------------------------------------------------------------------------
# API views
# -----------------------------------------------------------------------------


class UserSummary(BaseModel):
    """Compact author/follower reference."""

    id: str
    username: str
    name: str
    profile_picture: str = DEFAULT_PROFILE_PICTURE

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            profile_picture=user.profile_picture,
        )


class SearchResult(UserSummary):
    bio: str = ""

    @classmethod
    def from_user(cls, user: User) -> "SearchResult":
        return cls(
            id=user.id,
            username=user.username,
            name=user.name,
            profile_picture=user.profile_picture,
            bio=user.bio,
        )


class AccountView(BaseModel):
    """The signed-in user's own account, without secrets."""

    id: str
    username: str
    email: str
    name: str
    bio: str
    profile_picture: str
    cover_picture: str
    followers: list[str]
    following: list[str]
    preferred_language: Language
    is_phone_verified: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AccountView":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            bio=user.bio,
            profile_picture=user.profile_picture,
            cover_picture=user.cover_picture,
            followers=list(user.followers),
            following=list(user.following),
            preferred_language=user.preferred_language,
            is_phone_verified=user.is_phone_verified,
            created_at=user.created_at,
        )


class PublicProfile(BaseModel):
    """Profile page data, readable without authentication."""

    id: str
    username: str
    name: str
    bio: str
    profile_picture: str
    cover_picture: str
    followers: list[UserSummary]
    following: list[UserSummary]
    created_at: datetime


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    bio: Optional[str] = Field(None, max_length=160)
    profile_picture: Optional[str] = None
    cover_picture: Optional[str] = None

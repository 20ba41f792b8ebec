"""
Audio-upload OTP service.
"""

import logging
from datetime import timedelta
from typing import Optional

from modules.notifications.mailer import Mailer
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository
from shared.config import Settings
from shared.schedule import Clock, ScheduledWindow, utc_now

from .codes import CodeCheck, check_code, expiry_from, generate_code, is_expired, mask_email
from .exceptions import (
    InvalidOTPError,
    InvalidOTPFormatError,
    OTPExpiredError,
    OTPNotFoundError,
    OTPRequiredError,
)
from .interfaces import IOTPRepository, IOTPService
from .models import OTPCheckResponse, OTPRecord, OTPRequestResponse, OTPVerifyResponse

logger = logging.getLogger(__name__)


class OTPService(IOTPService):
    """Issues, verifies and redeems audio-upload codes."""

    def __init__(
        self,
        otps: IOTPRepository,
        users: IUserRepository,
        mailer: Mailer,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._otps = otps
        self._users = users
        self._mailer = mailer
        self._settings = settings
        self._clock = clock

    async def request_otp(self, user_id: str) -> OTPRequestResponse:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        now = self._clock()
        record = OTPRecord(
            user_id=user_id,
            email=user.email,
            code=generate_code(),
            expires_at=expiry_from(now, timedelta(minutes=self._settings.otp_ttl_minutes)),
            created_at=now,
        )

        window = ScheduledWindow(
            self._settings.audio_upload_start_hour,
            self._settings.audio_upload_end_hour,
            self._settings.policy_timezone,
        )
        await self._mailer.send_audio_otp(
            user.email,
            user.name,
            record.code,
            window.describe(),
            self._settings.otp_ttl_minutes,
        )
        self._otps.delete_unverified(user_id)
        self._otps.create(record)
        logger.info(f"Audio upload code issued for {user_id}")
        return OTPRequestResponse(email=mask_email(user.email))

    async def verify_otp(self, user_id: str, otp: str) -> OTPVerifyResponse:
        otp = (otp or "").strip()
        if len(otp) != 6:
            raise InvalidOTPFormatError()

        record = self._otps.get_pending(user_id)
        result = check_code(record, otp, self._clock())

        if result == CodeCheck.MISSING:
            raise OTPNotFoundError()
        if result == CodeCheck.EXPIRED:
            self._otps.delete(record.id)
            raise OTPExpiredError()
        if result == CodeCheck.MISMATCH:
            logger.info(f"Wrong audio upload code for {user_id}")
            raise InvalidOTPError()

        record.verified = True
        self._otps.save(record)
        return OTPVerifyResponse(otp_id=record.id)

    async def check_verification(self, user_id: str) -> OTPCheckResponse:
        record = self._otps.get_verified(user_id, self._clock())
        return OTPCheckResponse(verified=record is not None, otp_id=record.id if record else None)

    async def require_verified(self, user_id: str, otp_id: Optional[str]) -> OTPRecord:
        if not otp_id:
            raise OTPRequiredError("OTP verification required for audio upload")

        record = self._otps.get_by_id(otp_id)
        if (
            record is None
            or record.user_id != user_id
            or not record.verified
            or is_expired(record.expires_at, self._clock())
        ):
            raise OTPRequiredError("Invalid or expired OTP. Please verify again.")
        return record

    async def consume(self, otp_id: str) -> None:
        self._otps.delete(otp_id)

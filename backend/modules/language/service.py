"""
Language change service.
"""

import logging
from datetime import timedelta
from typing import Optional

from modules.notifications.interfaces import ISmsSender
from modules.notifications.mailer import Mailer
from modules.otp.codes import CodeCheck, check_code, expiry_from, generate_code
from modules.otp.exceptions import InvalidOTPError, OTPExpiredError, OTPNotFoundError
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import LANGUAGE_NAMES, Language, LanguageOTP, OTPChannel, User
from shared.config import Settings
from shared.schedule import Clock, utc_now

from .exceptions import InvalidPhoneNumberError, LanguageMismatchError, PhoneRequiredError
from .interfaces import ILanguageService
from .models import (
    CurrentLanguageResponse,
    LanguageChangedResponse,
    LanguageChangeResponse,
    PhoneUpdatedResponse,
    is_e164,
    mask_phone,
)

logger = logging.getLogger(__name__)

EMAIL_VERIFIED_LANGUAGES = {Language.FR}


class LanguageService(ILanguageService):
    """Implementation of the verified language change flow."""

    def __init__(
        self,
        users: IUserRepository,
        mailer: Mailer,
        sms: ISmsSender,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._users = users
        self._mailer = mailer
        self._sms = sms
        self._settings = settings
        self._clock = clock

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    def _new_slot(self, channel: OTPChannel, language: Language) -> LanguageOTP:
        ttl = timedelta(minutes=self._settings.otp_ttl_minutes)
        return LanguageOTP(
            code=generate_code(),
            expires_at=expiry_from(self._clock(), ttl),
            channel=channel,
            language=language,
        )

    async def get_current(self, user_id: str) -> CurrentLanguageResponse:
        user = self._require_user(user_id)
        return CurrentLanguageResponse(
            language=user.preferred_language,
            has_phone_number=bool(user.phone_number),
            is_phone_verified=user.is_phone_verified,
        )

    async def request_change(
        self,
        user_id: str,
        language: Language,
        phone_number: Optional[str] = None,
    ) -> LanguageChangeResponse:
        user = self._require_user(user_id)

        if language == Language.EN:
            user.preferred_language = language
            user.language_otp = None
            user.updated_at = self._clock()
            self._users.save(user)
            return LanguageChangeResponse(
                requires_otp=False,
                message="Language changed to English successfully",
                language=language,
            )

        if language in EMAIL_VERIFIED_LANGUAGES:
            slot = self._new_slot(OTPChannel.EMAIL, language)
            await self._mailer.send_language_otp(
                user.email,
                user.name,
                slot.code,
                LANGUAGE_NAMES[language],
                self._settings.otp_ttl_minutes,
            )
            user.language_otp = slot
            self._users.save(user)
            logger.info(f"Language change to {language.value} for {user_id}: code emailed")
            return LanguageChangeResponse(
                requires_otp=True,
                otp_type=OTPChannel.EMAIL,
                message="OTP sent to your email",
                language=language,
            )

        phone = (phone_number or user.phone_number or "").strip()
        if not phone:
            raise PhoneRequiredError()
        if not is_e164(phone):
            raise InvalidPhoneNumberError()

        slot = self._new_slot(OTPChannel.PHONE, language)
        await self._sms.send(
            phone,
            f"Your {self._settings.app_name} language change OTP is: {slot.code}. "
            f"Valid for {self._settings.otp_ttl_minutes} minutes.",
        )
        if phone != user.phone_number:
            user.phone_number = phone
            user.is_phone_verified = False
        user.language_otp = slot
        self._users.save(user)
        logger.info(f"Language change to {language.value} for {user_id}: code sent by SMS")
        return LanguageChangeResponse(
            requires_otp=True,
            otp_type=OTPChannel.PHONE,
            masked_phone=mask_phone(phone),
            message="OTP sent to your phone",
            language=language,
        )

    async def verify_otp(
        self,
        user_id: str,
        otp: str,
        language: Language,
    ) -> LanguageChangedResponse:
        user = self._require_user(user_id)
        slot = user.language_otp

        result = check_code(slot, otp, self._clock())
        if result == CodeCheck.MISSING:
            raise OTPNotFoundError()
        if result == CodeCheck.EXPIRED:
            user.language_otp = None
            self._users.save(user)
            raise OTPExpiredError()
        if result == CodeCheck.MISMATCH:
            raise InvalidOTPError()
        if slot.language != language:
            raise LanguageMismatchError(language.value, slot.language.value)

        user.preferred_language = slot.language
        if slot.channel == OTPChannel.PHONE:
            user.is_phone_verified = True
        user.language_otp = None
        user.updated_at = self._clock()
        self._users.save(user)

        logger.info(f"Language changed to {slot.language.value} for {user_id}")
        return LanguageChangedResponse(language=slot.language)

    async def update_phone(self, user_id: str, phone_number: str) -> PhoneUpdatedResponse:
        phone = (phone_number or "").strip()
        if not is_e164(phone):
            raise InvalidPhoneNumberError()

        user = self._require_user(user_id)
        user.phone_number = phone
        user.is_phone_verified = False
        user.updated_at = self._clock()
        self._users.save(user)
        return PhoneUpdatedResponse(phone_number=phone)

"""
Password reset service.
"""

import logging
from datetime import timedelta

from modules.auth.passwords import hash_password
from modules.notifications.mailer import Mailer
from modules.users.interfaces import IUserRepository
from shared.config import Settings
from shared.schedule import Clock, day_bounds, utc_now

from .exceptions import InvalidResetTokenError, ResetAlreadyRequestedError
from .generator import generate_reset_token, generate_temporary_password
from .interfaces import IPasswordResetRepository, IPasswordResetService
from .models import (
    PasswordReset,
    PasswordResetRequested,
    ResetAvailability,
    ResetPasswordRequest,
    ResetTokenInfo,
)

logger = logging.getLogger(__name__)

RESET_SENT_MESSAGE = "If an account with that email exists, a password reset link has been sent."


class PasswordResetService(IPasswordResetService):
    """Once-per-day forgot-password flow."""

    def __init__(
        self,
        resets: IPasswordResetRepository,
        users: IUserRepository,
        mailer: Mailer,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._resets = resets
        self._users = users
        self._mailer = mailer
        self._settings = settings
        self._clock = clock

    def _redeemable(self, token: str) -> PasswordReset:
        reset = self._resets.get_by_token(token)
        if reset is None or not reset.is_redeemable(self._clock()):
            raise InvalidResetTokenError()
        return reset

    async def request_reset(self, email: str) -> PasswordResetRequested:
        user = self._users.get_by_email(email.strip().lower())
        if not user:
            logger.info("Password reset requested for unknown email")
            return PasswordResetRequested(message=RESET_SENT_MESSAGE)

        now = self._clock()
        day_start, next_day = day_bounds(now, self._settings.policy_timezone)
        previous = self._resets.get_latest_since(user.id, day_start)
        if previous:
            raise ResetAlreadyRequestedError(next_day, previous.created_at)

        reset = PasswordReset(
            user_id=user.id,
            email=user.email,
            reset_token=generate_reset_token(),
            generated_password=generate_temporary_password(),
            expires_at=now + timedelta(hours=self._settings.password_reset_ttl_hours),
            created_at=now,
        )
        await self._mailer.send_password_reset(
            user.email,
            user.name,
            reset.generated_password,
            reset.reset_token,
            self._settings.password_reset_ttl_hours,
        )
        self._resets.invalidate_unused(user.id)
        self._resets.create(reset)
        logger.info(f"Password reset issued for {user.id}")
        return PasswordResetRequested(message=RESET_SENT_MESSAGE)

    async def verify_token(self, token: str) -> ResetTokenInfo:
        reset = self._redeemable(token)
        user = self._users.get_by_id(reset.user_id)
        if not user:
            raise InvalidResetTokenError()
        return ResetTokenInfo(
            email=user.email,
            username=user.username,
            generated_password=reset.generated_password,
        )

    async def reset_password(self, token: str, request: ResetPasswordRequest) -> None:
        reset = self._redeemable(token)
        user = self._users.get_by_id(reset.user_id)
        if not user:
            raise InvalidResetTokenError()

        password = (
            reset.generated_password if request.use_generated_password else request.new_password
        )
        user.password_hash = hash_password(password)
        user.updated_at = self._clock()
        self._users.save(user)

        reset.is_used = True
        self._resets.save(reset)
        logger.info(f"Password reset completed for {user.id}")

    async def check_availability(self, email: str) -> ResetAvailability:
        user = self._users.get_by_email(email.strip().lower())
        if not user:
            return ResetAvailability(can_request=True, message="You can request a password reset")

        day_start, next_day = day_bounds(self._clock(), self._settings.policy_timezone)
        previous = self._resets.get_latest_since(user.id, day_start)
        if previous:
            return ResetAvailability(
                can_request=False,
                message="You have already requested a password reset today",
                next_available_time=next_day,
                last_request_time=previous.created_at,
            )
        return ResetAvailability(can_request=True, message="You can request a password reset")

"""
Authentication service implementation.

Registration, password login with the browser/device access policy, the
Chrome step-up code, the login-history ledger and logout.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from modules.notifications.mailer import Mailer
from modules.otp.codes import CodeCheck, check_code, expiry_from, generate_code
from modules.otp.exceptions import InvalidOTPError, OTPExpiredError, OTPNotFoundError
from modules.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import (
    AccountView,
    BrowserOTP,
    CurrentSession,
    LoginHistoryEntry,
    User,
)
from shared.config import Settings
from shared.schedule import Clock, utc_now

from .classifier import classify_browser
from .exceptions import InvalidCredentialsError, MobileAccessRestrictedError
from .fingerprint import RequestFingerprint
from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LoginHistoryResponse,
    LoginRequest,
    LoginResult,
    OTPChallengeResponse,
    RegisterRequest,
    VerifyBrowserOTPRequest,
)
from .passwords import hash_password, verify_password
from .policy import AccessOutcome, evaluate_access
from .tokens import create_access_token

logger = logging.getLogger(__name__)

PENDING_OTP_REASON = "Waiting for OTP verification"


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    The user document is loaded, mutated and saved once per operation; there
    is no locking, so concurrent logins for one user race on the ledger.
    """

    def __init__(
        self,
        users: IUserRepository,
        mailer: Mailer,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._users = users
        self._mailer = mailer
        self._settings = settings
        self._clock = clock

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def _otp_ttl(self) -> timedelta:
        return timedelta(minutes=self._settings.otp_ttl_minutes)

    def _issue_token(self, user: User) -> str:
        return create_access_token(
            user.id,
            self._settings.jwt_secret,
            expires_in=timedelta(days=self._settings.jwt_expire_days),
            algorithm=self._settings.jwt_algorithm,
        )

    def _record(
        self,
        user: User,
        fingerprint: RequestFingerprint,
        now: datetime,
        access_granted: bool,
        reason: Optional[str] = None,
        requires_otp: bool = False,
        otp_verified: bool = False,
    ) -> None:
        entry = LoginHistoryEntry(
            login_time=now,
            ip_address=fingerprint.ip_address,
            browser=fingerprint.browser,
            os=fingerprint.os,
            device=fingerprint.device,
            location=fingerprint.location,
            access_granted=access_granted,
            access_denied_reason=reason,
            requires_otp=requires_otp,
            otp_verified=otp_verified,
            session_id=fingerprint.session_id,
            user_agent=fingerprint.user_agent,
        )
        user.add_login_history(entry, self._settings.login_history_limit)

    def _grant(
        self,
        user: User,
        fingerprint: RequestFingerprint,
        now: datetime,
        requires_otp: bool = False,
        otp_verified: bool = False,
    ) -> AuthResponse:
        self._record(
            user,
            fingerprint,
            now,
            access_granted=True,
            requires_otp=requires_otp,
            otp_verified=otp_verified,
        )
        user.open_session(
            CurrentSession(
                session_id=fingerprint.session_id,
                login_time=now,
                ip_address=fingerprint.ip_address,
                browser=fingerprint.browser.name,
                device=fingerprint.device,
                last_activity=now,
            )
        )
        user.updated_at = now
        self._users.save(user)
        return AuthResponse(token=self._issue_token(user), user=AccountView.from_user(user))

    def _require_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def register(
        self,
        request: RegisterRequest,
        fingerprint: RequestFingerprint,
    ) -> AuthResponse:
        if self._users.get_by_email(request.email) or self._users.get_by_username(request.username):
            raise UserAlreadyExistsError()

        now = self._clock()
        user = User(
            username=request.username,
            email=request.email,
            password_hash=hash_password(request.password),
            name=request.name,
            created_at=now,
            updated_at=now,
        )
        self._record(user, fingerprint, now, access_granted=True)
        self._users.create(user)

        logger.info(f"Registered user {user.username} ({user.id})")
        return AuthResponse(token=self._issue_token(user), user=AccountView.from_user(user))

    async def login(
        self,
        request: LoginRequest,
        fingerprint: RequestFingerprint,
    ) -> LoginResult:
        user = self._users.get_by_email(request.email)
        if not user or not verify_password(request.password, user.password_hash):
            logger.info(f"Rejected login for {request.email}: invalid credentials")
            raise InvalidCredentialsError()

        now = self._clock()
        browser_class = classify_browser(
            fingerprint.browser.name,
            fingerprint.user_agent,
            request.client_browser,
        )
        decision = evaluate_access(
            fingerprint.device,
            browser_class,
            user.security_settings,
            self._settings.policy_timezone,
            now,
            default_start=self._settings.mobile_access_start_hour,
            default_end=self._settings.mobile_access_end_hour,
        )

        if decision.outcome == AccessOutcome.DENY:
            self._record(user, fingerprint, now, access_granted=False, reason=decision.reason)
            self._users.save(user)
            logger.info(f"Denied mobile login for {user.id}: {decision.reason}")
            raise MobileAccessRestrictedError(
                decision.reason,
                decision.window.start_hour,
                decision.window.end_hour,
            )

        if decision.outcome == AccessOutcome.REQUIRE_OTP:
            code = generate_code()
            # Nothing is saved unless the email goes out
            await self._mailer.send_browser_otp(
                user.email,
                user.name,
                code,
                fingerprint.browser.full_string or fingerprint.browser.name,
                fingerprint.ip_address,
                self._settings.otp_ttl_minutes,
            )
            user.browser_otp = BrowserOTP(
                code=code,
                expires_at=expiry_from(now, self._otp_ttl),
                browser=fingerprint.browser.name,
                ip_address=fingerprint.ip_address,
                device=fingerprint.device,
            )
            self._record(
                user,
                fingerprint,
                now,
                access_granted=False,
                reason=PENDING_OTP_REASON,
                requires_otp=True,
            )
            self._users.save(user)
            logger.info(f"Login for {user.id} parked pending step-up code ({browser_class.value})")
            return OTPChallengeResponse(user_id=user.id, browser_type=browser_class.value)

        if decision.trust_device:
            user.add_trusted_device(fingerprint.device_fingerprint, fingerprint.browser.name, now)

        logger.info(f"Login granted for {user.id} ({browser_class.value}, {fingerprint.device.value})")
        return self._grant(user, fingerprint, now)

    async def verify_browser_otp(
        self,
        request: VerifyBrowserOTPRequest,
        fingerprint: RequestFingerprint,
    ) -> AuthResponse:
        user = self._require_user(request.user_id)
        now = self._clock()

        result = check_code(user.browser_otp, request.otp, now)
        if result == CodeCheck.MISSING:
            raise OTPNotFoundError("No OTP found. Please login again.")
        if result == CodeCheck.EXPIRED:
            user.browser_otp = None
            self._users.save(user)
            logger.info(f"Expired step-up code for {user.id}")
            raise OTPExpiredError("OTP expired. Please login again.")
        if result == CodeCheck.MISMATCH:
            logger.info(f"Wrong step-up code for {user.id}")
            raise InvalidOTPError("Invalid OTP")

        user.browser_otp = None
        logger.info(f"Step-up code verified for {user.id}")
        return self._grant(user, fingerprint, now, requires_otp=True, otp_verified=True)

    async def get_me(self, user_id: str) -> AccountView:
        return AccountView.from_user(self._require_user(user_id))

    async def get_login_history(self, user_id: str) -> LoginHistoryResponse:
        user = self._require_user(user_id)
        history = user.history_newest_first()
        return LoginHistoryResponse(
            current_session=user.current_session,
            login_history=history,
            total_logins=len(history),
        )

    async def logout(self, user_id: str) -> None:
        user = self._users.get_by_id(user_id)
        if not user or user.current_session is None:
            return

        now = self._clock()
        stamped = user.record_logout(now)
        user.updated_at = now
        self._users.save(user)
        if not stamped:
            logger.debug(f"Logout for {user_id}: session entry no longer in history")

"""Tests for the authentication service."""

from datetime import timedelta

import pytest

from modules.auth.exceptions import InvalidCredentialsError, MobileAccessRestrictedError
from modules.auth.models import (
    AuthResponse,
    LoginRequest,
    OTPChallengeResponse,
    RegisterRequest,
    VerifyBrowserOTPRequest,
)
from modules.notifications.exceptions import DeliveryError
from modules.otp.exceptions import InvalidOTPError, OTPExpiredError, OTPNotFoundError
from modules.users.exceptions import UserAlreadyExistsError
from modules.users.models import SecuritySettings
from tests.conftest import (
    CHROME_DESKTOP_UA,
    CHROME_MOBILE_UA,
    EDGE_DESKTOP_UA,
    FIREFOX_DESKTOP_UA,
    TEST_PASSWORD,
    local_time,
    make_fingerprint,
)


def login_request(user, **fields):
    return LoginRequest(email=user.email, password=fields.pop("password", TEST_PASSWORD), **fields)


@pytest.fixture
def service(container):
    return container.auth


@pytest.fixture
def users(container):
    return container.user_repository


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_returns_token_and_records_history(self, service, users):
        """Registration stores a hashed password and one granted history entry."""
        request = RegisterRequest(
            username="Carol", email="Carol@Example.com", password="secret1", name="Carol"
        )
        response = await service.register(request, make_fingerprint())

        assert response.token
        assert response.user.username == "carol"
        stored = users.get_by_email("carol@example.com")
        assert stored.password_hash != "secret1"
        assert len(stored.login_history) == 1
        assert stored.login_history[0].access_granted
        assert stored.current_session is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, alice):
        request = RegisterRequest(username="other", email=alice.email, password="secret1", name="X")
        with pytest.raises(UserAlreadyExistsError):
            await service.register(request, make_fingerprint())

    @pytest.mark.asyncio
    async def test_duplicate_username(self, service, alice):
        request = RegisterRequest(username="alice", email="new@example.com", password="secret1", name="X")
        with pytest.raises(UserAlreadyExistsError):
            await service.register(request, make_fingerprint())


class TestLoginCredentials:
    @pytest.mark.asyncio
    async def test_wrong_password_records_nothing(self, service, users, alice):
        with pytest.raises(InvalidCredentialsError):
            await service.login(login_request(alice, password="nope"), make_fingerprint())
        assert users.get_by_id(alice.id).login_history == []

    @pytest.mark.asyncio
    async def test_unknown_email(self, service):
        request = LoginRequest(email="ghost@example.com", password="whatever")
        with pytest.raises(InvalidCredentialsError):
            await service.login(request, make_fingerprint())


class TestLoginPolicy:
    @pytest.mark.asyncio
    async def test_firefox_granted(self, service, users, alice):
        fingerprint = make_fingerprint(FIREFOX_DESKTOP_UA)
        result = await service.login(login_request(alice), fingerprint)

        assert isinstance(result, AuthResponse)
        stored = users.get_by_id(alice.id)
        assert stored.current_session.session_id == fingerprint.session_id
        entry = stored.login_history[-1]
        assert entry.access_granted
        assert not entry.requires_otp

    @pytest.mark.asyncio
    async def test_edge_granted_and_device_trusted(self, service, users, alice):
        fingerprint = make_fingerprint(EDGE_DESKTOP_UA)
        result = await service.login(login_request(alice), fingerprint)

        assert isinstance(result, AuthResponse)
        assert users.get_by_id(alice.id).is_trusted_device(fingerprint.device_fingerprint)

    @pytest.mark.asyncio
    async def test_brave_assertion_skips_otp(self, service, email_sender, alice):
        result = await service.login(
            login_request(alice, client_browser="Brave"),
            make_fingerprint(CHROME_DESKTOP_UA, client_browser="Brave"),
        )
        assert isinstance(result, AuthResponse)
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_mobile_outside_window_denied(self, service, users, clock, alice):
        clock.set(local_time(15, 0))
        with pytest.raises(MobileAccessRestrictedError) as exc_info:
            await service.login(login_request(alice), make_fingerprint(CHROME_MOBILE_UA))

        assert exc_info.value.details["allowed_hours"] == {"start": 10, "end": 13}
        stored = users.get_by_id(alice.id)
        assert stored.current_session is None
        entry = stored.login_history[-1]
        assert not entry.access_granted
        assert "Mobile access is only allowed" in entry.access_denied_reason

    @pytest.mark.asyncio
    async def test_mobile_window_uses_user_settings(self, service, users, clock, container):
        from tests.conftest import add_user

        night_owl = add_user(
            container,
            "owl",
            security_settings=SecuritySettings(mobile_access_start_hour=20, mobile_access_end_hour=23),
        )
        clock.set(local_time(21, 0))
        result = await service.login(login_request(night_owl), make_fingerprint(CHROME_MOBILE_UA))
        assert isinstance(result, OTPChallengeResponse)


class TestChromeStepUp:
    @pytest.mark.asyncio
    async def test_chrome_login_parks_pending_code(self, service, users, email_sender, alice):
        result = await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))

        assert isinstance(result, OTPChallengeResponse)
        assert result.requires_otp is True
        assert result.user_id == alice.id
        assert len(email_sender.sent) == 1
        assert email_sender.sent[0]["to"] == alice.email

        stored = users.get_by_id(alice.id)
        assert stored.browser_otp.code == email_sender.last_code()
        assert stored.current_session is None
        entry = stored.login_history[-1]
        assert entry.requires_otp
        assert not entry.access_granted
        assert entry.access_denied_reason == "Waiting for OTP verification"

    @pytest.mark.asyncio
    async def test_verify_grants_and_records_second_entry(self, service, users, email_sender, alice):
        await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))
        fingerprint = make_fingerprint(CHROME_DESKTOP_UA)

        response = await service.verify_browser_otp(
            VerifyBrowserOTPRequest(user_id=alice.id, otp=email_sender.last_code()),
            fingerprint,
        )

        assert response.token
        stored = users.get_by_id(alice.id)
        assert stored.browser_otp is None
        assert stored.current_session.session_id == fingerprint.session_id
        assert len(stored.login_history) == 2
        entry = stored.login_history[-1]
        assert entry.access_granted and entry.requires_otp and entry.otp_verified

    @pytest.mark.asyncio
    async def test_code_is_single_use(self, service, email_sender, alice):
        await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))
        request = VerifyBrowserOTPRequest(user_id=alice.id, otp=email_sender.last_code())
        await service.verify_browser_otp(request, make_fingerprint())

        with pytest.raises(OTPNotFoundError):
            await service.verify_browser_otp(request, make_fingerprint())

    @pytest.mark.asyncio
    async def test_wrong_code_keeps_slot(self, service, users, alice):
        await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))

        with pytest.raises(InvalidOTPError):
            await service.verify_browser_otp(
                VerifyBrowserOTPRequest(user_id=alice.id, otp="000000"), make_fingerprint()
            )
        assert users.get_by_id(alice.id).browser_otp is not None

    @pytest.mark.asyncio
    async def test_expired_code_clears_slot(self, service, users, clock, email_sender, alice):
        await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))
        clock.advance(minutes=10, seconds=1)

        with pytest.raises(OTPExpiredError):
            await service.verify_browser_otp(
                VerifyBrowserOTPRequest(user_id=alice.id, otp=email_sender.last_code()),
                make_fingerprint(),
            )
        assert users.get_by_id(alice.id).browser_otp is None

    @pytest.mark.asyncio
    async def test_code_accepted_at_expiry_instant(self, service, clock, email_sender, alice):
        await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))
        clock.advance(minutes=10)

        response = await service.verify_browser_otp(
            VerifyBrowserOTPRequest(user_id=alice.id, otp=email_sender.last_code()),
            make_fingerprint(),
        )
        assert response.token

    @pytest.mark.asyncio
    async def test_chrome_otp_disabled(self, service, container, email_sender):
        from tests.conftest import add_user

        relaxed = add_user(
            container, "relaxed", security_settings=SecuritySettings(require_otp_for_chrome=False)
        )
        result = await service.login(login_request(relaxed), make_fingerprint(CHROME_DESKTOP_UA))
        assert isinstance(result, AuthResponse)
        assert email_sender.sent == []

    @pytest.mark.asyncio
    async def test_email_failure_leaves_user_untouched(self, container, users, alice):
        from modules.auth.service import AuthService
        from modules.notifications.mailer import Mailer
        from tests.conftest import RecordingEmailSender

        mailer = Mailer(RecordingEmailSender(fail=True), "Chirp", "http://localhost:3000")
        service = AuthService(users, mailer, container.settings, container.clock)

        with pytest.raises(DeliveryError):
            await service.login(login_request(alice), make_fingerprint(CHROME_DESKTOP_UA))

        stored = users.get_by_id(alice.id)
        assert stored.browser_otp is None
        assert stored.login_history == []


class TestLedger:
    @pytest.mark.asyncio
    async def test_history_newest_first(self, service, clock, alice):
        await service.login(login_request(alice), make_fingerprint(FIREFOX_DESKTOP_UA))
        clock.advance(minutes=5)
        await service.login(login_request(alice), make_fingerprint(EDGE_DESKTOP_UA))

        history = await service.get_login_history(alice.id)
        assert history.total_logins == 2
        assert history.login_history[0].login_time > history.login_history[1].login_time
        assert history.current_session is not None

    @pytest.mark.asyncio
    async def test_history_is_bounded(self, service, users, clock, alice):
        for _ in range(55):
            await service.login(login_request(alice), make_fingerprint(FIREFOX_DESKTOP_UA))
            clock.advance(seconds=1)

        stored = users.get_by_id(alice.id)
        assert len(stored.login_history) == 50
        assert stored.login_history[0].login_time == local_time(11, 30) + timedelta(seconds=5)

    @pytest.mark.asyncio
    async def test_logout_stamps_session_entry(self, service, users, clock, alice):
        fingerprint = make_fingerprint(FIREFOX_DESKTOP_UA)
        await service.login(login_request(alice), fingerprint)
        clock.advance(minutes=30)

        await service.logout(alice.id)

        stored = users.get_by_id(alice.id)
        assert stored.current_session is None
        entry = stored.login_history[-1]
        assert entry.session_id == fingerprint.session_id
        assert entry.logout_time == clock()

    @pytest.mark.asyncio
    async def test_logout_without_session_is_noop(self, service, users, alice):
        await service.logout(alice.id)
        assert users.get_by_id(alice.id).login_history == []

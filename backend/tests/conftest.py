"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory service container with recording senders, fake payment and
media hosts, and a controllable clock.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.dependencies import ServiceContainer, get_container
from modules.auth.fingerprint import GeoLocator, RequestFingerprint, build_fingerprint
from modules.auth.passwords import hash_password
from modules.subscriptions.gateway import compute_signature
from modules.subscriptions.models import GatewayOrder
from modules.users.models import User
from shared.config import Settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"
TEST_GATEWAY_SECRET = "gateway-secret"
TEST_PASSWORD = "password123"
POLICY_TZ = ZoneInfo("Asia/Kolkata")

CHROME_DESKTOP_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE_DESKTOP_UA = CHROME_DESKTOP_UA + " Edg/120.0.0.0"
FIREFOX_DESKTOP_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0"
)
CHROME_MOBILE_UA = (
    "Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
SAFARI_IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


def local_time(hour: int, minute: int = 0, day: int = 2) -> datetime:
    """An instant given as wall-clock time in the policy timezone, returned in UTC."""
    return datetime(2026, 3, day, hour, minute, tzinfo=POLICY_TZ).astimezone(timezone.utc)


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingEmailSender:
    """Collects outgoing email instead of sending it."""

    def __init__(self, fail: bool = False):
        self.sent: list[dict[str, str]] = []
        self.fail = fail

    async def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            from modules.notifications.exceptions import DeliveryError
            raise DeliveryError("email", "simulated outage")
        self.sent.append({"to": to, "subject": subject, "html": html})

    def last_code(self) -> str:
        match = re.search(r">(\d{6})</div>", self.sent[-1]["html"])
        assert match, "no code in last email"
        return match.group(1)


class RecordingSmsSender:
    def __init__(self):
        self.sent: list[dict[str, str]] = []

    async def send(self, to: str, body: str) -> None:
        self.sent.append({"to": to, "body": body})

    def last_code(self) -> str:
        match = re.search(r"(\d{6})", self.sent[-1]["body"])
        assert match, "no code in last SMS"
        return match.group(1)


class FakePaymentGateway:
    key_id = "rzp_test_key"

    def __init__(self):
        self.orders: list[dict] = []

    async def create_order(self, amount, currency, receipt, notes=None) -> GatewayOrder:
        order = GatewayOrder(id=f"order_test_{len(self.orders) + 1}", amount=amount, currency=currency)
        self.orders.append({"id": order.id, "amount": amount, "receipt": receipt, "notes": notes})
        return order

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        return compute_signature(order_id, payment_id, TEST_GATEWAY_SECRET) == signature


class FakeMediaHost:
    def __init__(self, base_url: str = "https://media.test"):
        self.base_url = base_url
        self.uploads: list[tuple[str, int]] = []

    async def upload(self, data: bytes, filename: str) -> str:
        self.uploads.append((filename, len(data)))
        return f"{self.base_url}/{filename}"


def create_test_token(user_id: str = "test-user-123", expired: bool = False) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        expired: If True, creates an expired token

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "sub": user_id,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_fingerprint(user_agent: str = CHROME_DESKTOP_UA, ip: str = "203.0.113.5",
                     client_browser: Optional[str] = None) -> RequestFingerprint:
    return build_fingerprint(user_agent, ip, GeoLocator(), client_browser)


def add_user(container: ServiceContainer, username: str = "alice", **fields) -> User:
    """Store a user directly, bypassing registration."""
    user = User(
        username=username,
        email=fields.pop("email", f"{username}@example.com"),
        password_hash=hash_password(fields.pop("password", TEST_PASSWORD)),
        name=fields.pop("name", username.capitalize()),
        **fields,
    )
    return container.user_repository.create(user)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        jwt_secret=TEST_JWT_SECRET,
        policy_timezone="Asia/Kolkata",
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=TEST_GATEWAY_SECRET,
    )


@pytest.fixture
def clock() -> FixedClock:
    """11:30 local time: mobile window open, payment window closed."""
    return FixedClock(local_time(11, 30))


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def sms_sender() -> RecordingSmsSender:
    return RecordingSmsSender()


@pytest.fixture
def payment_gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def image_host() -> FakeMediaHost:
    return FakeMediaHost("https://images.test")


@pytest.fixture
def audio_host() -> FakeMediaHost:
    return FakeMediaHost("https://audio.test")


@pytest.fixture
def container(settings, clock, email_sender, sms_sender, payment_gateway, image_host, audio_host):
    container = ServiceContainer(
        settings=settings,
        clock=clock,
        email_sender=email_sender,
        sms_sender=sms_sender,
        payment_gateway=payment_gateway,
        image_host=image_host,
        audio_host=audio_host,
    )
    yield container
    container.reset()


@pytest.fixture
def client(container):
    """Test client wired to the in-memory container."""
    from api import app

    app.dependency_overrides[get_container] = lambda: container
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice(container) -> User:
    return add_user(container, "alice")


@pytest.fixture
def bob(container) -> User:
    return add_user(container, "bob")


@pytest.fixture
def auth_headers(alice) -> dict[str, str]:
    """Authorization headers for alice."""
    return {"Authorization": f"Bearer {create_test_token(alice.id)}"}

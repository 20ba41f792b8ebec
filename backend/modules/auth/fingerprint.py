"""
Request fingerprinting.

Derives the client-side context recorded with every login attempt: IP,
parsed browser/OS/device, IP geolocation, a stable device fingerprint and
a fresh session id.
"""

import hashlib
import logging
import secrets
from typing import Optional

import geoip2.database
import geoip2.errors
from fastapi import Request
from pydantic import BaseModel, Field
from user_agents import parse as parse_ua

from modules.users.models import BrowserInfo, DeviceType, Location, OSInfo

from .classifier import is_chrome_name

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESSES = {"127.0.0.1", "::1", "::ffff:127.0.0.1"}
LOCAL_LOCATION = Location(
    country="Local",
    city="Development",
    region="Local",
    timezone="Local",
)
_DESKTOP_OS_MARKERS = ("windows", "mac", "linux")


class RequestFingerprint(BaseModel):
    """Everything known about the client making a request."""

    user_agent: str
    ip_address: str
    browser: BrowserInfo
    os: OSInfo
    device: DeviceType
    location: Location
    device_fingerprint: str
    session_id: str = Field(default_factory=lambda: secrets.token_hex(32))


class GeoLocator:
    """
    IP geolocation backed by a local GeoLite2 City database.

    Without a database every lookup returns "Unknown" fields. Lookups never
    raise.
    """

    def __init__(self, database_path: str = ""):
        self._reader: Optional[geoip2.database.Reader] = None
        if database_path:
            try:
                self._reader = geoip2.database.Reader(database_path)
            except (OSError, RuntimeError) as e:
                logger.warning(f"GeoIP database unavailable at {database_path}: {e}")

    def locate(self, ip_address: str) -> Location:
        if ip_address in LOOPBACK_ADDRESSES:
            return LOCAL_LOCATION.model_copy()
        if self._reader is None:
            return Location()

        try:
            city = self._reader.city(ip_address)
        except (geoip2.errors.GeoIP2Error, ValueError):
            return Location()

        region = city.subdivisions.most_specific
        return Location(
            country=city.country.iso_code or "Unknown",
            city=city.city.name or "Unknown",
            region=region.iso_code or "Unknown",
            timezone=city.location.time_zone or "Unknown",
        )

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None


def get_client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return "0.0.0.0"


def _known(value: Optional[str]) -> str:
    if not value or value == "Other":
        return "Unknown"
    return value


def parse_user_agent(user_agent: str) -> tuple[BrowserInfo, OSInfo, DeviceType]:
    """
    Parse a user-agent string into browser, OS and device type.

    A user-agent mentioning Brave is reported as Brave regardless of what
    the parser says. Devices the parser cannot place are treated as desktop
    when the OS is Windows, macOS or Linux.
    """
    parsed = parse_ua(user_agent or "")

    browser_name = _known(parsed.browser.family)
    if "brave" in (user_agent or "").lower():
        browser_name = "Brave"
    browser_version = parsed.browser.version_string or "Unknown"
    browser = BrowserInfo(
        name=browser_name,
        version=browser_version,
        full_string=f"{browser_name} {parsed.browser.version_string}".strip(),
    )

    os_name = _known(parsed.os.family)
    os_info = OSInfo(
        name=os_name,
        version=parsed.os.version_string or "Unknown",
        full_string=f"{os_name} {parsed.os.version_string}".strip(),
    )

    if parsed.is_mobile:
        device = DeviceType.MOBILE
    elif parsed.is_tablet:
        device = DeviceType.TABLET
    elif any(marker in os_name.lower() for marker in _DESKTOP_OS_MARKERS) or parsed.is_pc:
        device = DeviceType.DESKTOP
    else:
        device = DeviceType.UNKNOWN

    return browser, os_info, device


def device_fingerprint(user_agent: str, ip_address: str) -> str:
    return hashlib.sha256(f"{user_agent}-{ip_address}".encode("utf-8")).hexdigest()


def build_fingerprint(
    user_agent: str,
    ip_address: str,
    geolocator: GeoLocator,
    client_browser: Optional[str] = None,
) -> RequestFingerprint:
    """
    Assemble a fingerprint from raw request signals.

    If the client asserts Brave and the parser reports Chrome, the recorded
    browser becomes Brave.
    """
    browser, os_info, device = parse_user_agent(user_agent)

    if (client_browser or "").lower() == "brave" and is_chrome_name(browser.name):
        browser = BrowserInfo(
            name="Brave",
            version=browser.version,
            full_string=browser.full_string.replace(browser.name, "Brave", 1),
        )

    return RequestFingerprint(
        user_agent=user_agent,
        ip_address=ip_address,
        browser=browser,
        os=os_info,
        device=device,
        location=geolocator.locate(ip_address),
        device_fingerprint=device_fingerprint(user_agent, ip_address),
    )


def fingerprint_request(
    request: Request,
    geolocator: GeoLocator,
    client_browser: Optional[str] = None,
) -> RequestFingerprint:
    user_agent = request.headers.get("user-agent") or "Unknown"
    return build_fingerprint(user_agent, get_client_ip(request), geolocator, client_browser)

"""
Login access policy.

Evaluated once per password-verified login attempt, in fixed priority
order:

1. Mobile device outside the user's allowed hours: deny. This dominates
   every browser rule.
2. Brave: grant.
3. Microsoft (Edge/IE): grant and trust the device.
4. Chrome: require an emailed one-time code (unless the user turned it off).
5. Anything else: grant.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from modules.users.models import DeviceType, SecuritySettings
from shared.schedule import ScheduledWindow

from .classifier import BrowserClass

DEFAULT_MOBILE_START_HOUR = 10
DEFAULT_MOBILE_END_HOUR = 13


class AccessOutcome(str, Enum):
    GRANT = "grant"
    REQUIRE_OTP = "require_otp"
    DENY = "deny"


@dataclass(frozen=True)
class AccessDecision:
    """Result of evaluating one login attempt."""

    outcome: AccessOutcome
    browser_class: BrowserClass
    trust_device: bool = False
    reason: Optional[str] = None
    window: Optional[ScheduledWindow] = None

    @property
    def granted(self) -> bool:
        return self.outcome == AccessOutcome.GRANT


def mobile_access_window(
    settings: SecuritySettings,
    timezone: str,
    default_start: int = DEFAULT_MOBILE_START_HOUR,
    default_end: int = DEFAULT_MOBILE_END_HOUR,
) -> Optional[ScheduledWindow]:
    """The user's mobile window, or None when mobile access is unrestricted."""
    if not settings.mobile_access_restricted:
        return None
    start = settings.mobile_access_start_hour
    end = settings.mobile_access_end_hour
    return ScheduledWindow(
        start_hour=default_start if start is None else start,
        end_hour=default_end if end is None else end,
        timezone=timezone,
    )


def _mobile_denial_reason(window: ScheduledWindow, now: datetime) -> str:
    local = window.local_time(now)
    zone = local.strftime("%Z") or window.timezone
    return (
        f"Mobile access is only allowed between {window.start_hour}:00 and "
        f"{window.end_hour}:00 {zone}. Current {zone} time: {local.strftime('%H:%M')}"
    )


def evaluate_access(
    device: DeviceType,
    browser_class: BrowserClass,
    settings: SecuritySettings,
    timezone: str,
    now: datetime,
    default_start: int = DEFAULT_MOBILE_START_HOUR,
    default_end: int = DEFAULT_MOBILE_END_HOUR,
) -> AccessDecision:
    """
    Decide whether a login is granted, needs a one-time code, or is denied.

    Args:
        device: Parsed device type of the request
        browser_class: Output of classify_browser
        settings: The user's security settings
        timezone: Timezone the mobile window is measured in
        now: Evaluation instant
        default_start: Window start used when the user has none set
        default_end: Window end used when the user has none set

    Returns:
        AccessDecision; denials carry the reason and the window applied
    """
    if device == DeviceType.MOBILE:
        window = mobile_access_window(settings, timezone, default_start, default_end)
        if window is not None and not window.is_open(now):
            return AccessDecision(
                outcome=AccessOutcome.DENY,
                browser_class=browser_class,
                reason=_mobile_denial_reason(window, now),
                window=window,
            )

    if browser_class == BrowserClass.BRAVE:
        return AccessDecision(AccessOutcome.GRANT, browser_class)

    if browser_class == BrowserClass.MICROSOFT:
        return AccessDecision(AccessOutcome.GRANT, browser_class, trust_device=True)

    if browser_class == BrowserClass.CHROME and settings.require_otp_for_chrome:
        return AccessDecision(AccessOutcome.REQUIRE_OTP, browser_class)

    return AccessDecision(AccessOutcome.GRANT, browser_class)

"""
Daily time windows evaluated against wall-clock time.

The mobile-access restriction, the payment window, the audio-upload window
and the once-per-day password reset rule all reason about the local hour or
day in one configured timezone. They share this module so that the hour
arithmetic exists exactly once.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ScheduledWindow:
    """
    A half-open daily window ``[start_hour, end_hour)`` in a named timezone.

    A window of one hour (e.g. 10-11) admits exactly the local hour 10.
    """

    start_hour: int
    end_hour: int
    timezone: str

    def __post_init__(self) -> None:
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError(
                f"Invalid window {self.start_hour}-{self.end_hour}: "
                "hours must satisfy 0 <= start < end <= 24"
            )

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def local_time(self, now: Optional[datetime] = None) -> datetime:
        """Convert ``now`` (default: current time) into the window's timezone."""
        return (now or utc_now()).astimezone(self.tz)

    def is_open(self, now: Optional[datetime] = None) -> bool:
        """Whether the local hour falls inside the window."""
        hour = self.local_time(now).hour
        return self.start_hour <= hour < self.end_hour

    def next_opening(self, now: Optional[datetime] = None) -> datetime:
        """
        Start of the current or next window, in UTC.

        If the window is open, or opens later today, today's start is
        returned; otherwise tomorrow's start.
        """
        local = self.local_time(now)
        start_today = local.replace(hour=self.start_hour, minute=0, second=0, microsecond=0)
        if local.hour < self.end_hour:
            opening = start_today
        else:
            opening = start_today + relativedelta(days=1)
        return opening.astimezone(timezone.utc)

    def describe(self) -> str:
        return f"{self.start_hour:02d}:00-{self.end_hour:02d}:00 {self.timezone}"


def day_bounds(now: datetime, tz_name: str) -> tuple[datetime, datetime]:
    """
    Local calendar day containing ``now``, as a UTC ``[start, end)`` pair.

    Args:
        now: Aware datetime
        tz_name: IANA timezone name the day is measured in

    Returns:
        Tuple of (day_start, next_day_start) in UTC
    """
    local = now.astimezone(ZoneInfo(tz_name))
    start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + relativedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

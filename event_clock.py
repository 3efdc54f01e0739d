"""
event_clock.py

Time arithmetic relative to the scheduled news release: signed distance
to the event, entry window and hold-period checks, and the human readable
countdown used by the on-screen timer.

Author: M Haghverdi
Date: 2025-07-26
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from models import ScheduledEvent

ZERO = timedelta(0)


def event_time_from_parts(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, 0, tzinfo=timezone.utc)


def _plural(value: int, unit: str) -> str:
    s = f" {value} {unit}"
    if value > 1:
        s += "s"
    return s


def time_distance(t: timedelta) -> str:
    """
    Format a time difference as days, hours, minutes and seconds,
    skipping zero components, e.g. " 1 hour 5 seconds".
    """
    t = abs(t)
    if t < timedelta(seconds=1):
        return " 0 seconds"
    d = t.days
    h, rem = divmod(t.seconds, 3600)
    m, sec = divmod(rem, 60)

    s = ""
    if d > 0:
        s += _plural(d, "day")
    if h > 0:
        s += _plural(h, "hour")
    if m > 0:
        s += _plural(m, "minute")
    if sec > 0:
        s += _plural(sec, "second")
    return s


class EventClock:
    def __init__(self, event: ScheduledEvent):
        self.event = event

    def time_to_event(self, now: datetime) -> timedelta:
        """Positive while the event is still in the future."""
        return self.event.time - now

    def time_since_event(self, now: datetime) -> timedelta:
        return now - self.event.time

    def is_pre_event(self, now: datetime) -> bool:
        return self.time_to_event(now) > ZERO

    def in_entry_window(self, now: datetime) -> bool:
        remaining = self.time_to_event(now)
        return ZERO < remaining <= timedelta(seconds=self.event.seconds_before)

    def hold_expired(self, now: datetime) -> bool:
        if self.event.close_after_seconds <= 0:
            return False
        return self.time_since_event(now) >= timedelta(seconds=self.event.close_after_seconds)

    def countdown_text(self, now: datetime) -> str:
        difference = self.time_since_event(now)
        if difference <= ZERO:
            return "Time to news:" + time_distance(-difference)
        return "Time after news:" + time_distance(difference)


class ServerClock:
    """
    Broker server time between ticks: the wall clock shifted by the offset
    observed at the last tick, so the countdown keeps moving without ticks.
    """

    def __init__(self):
        self.offset = ZERO

    def sync(self, server_time: datetime, wall: Optional[datetime] = None):
        self.offset = server_time - (wall or datetime.now(timezone.utc))

    def now(self, wall: Optional[datetime] = None) -> datetime:
        return (wall or datetime.now(timezone.utc)) + self.offset

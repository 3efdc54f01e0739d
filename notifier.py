"""
notifier.py

Responsible for the countdown shown while the robot runs: time left to
the news release, or time elapsed after it. Refreshed on its own fast
cadence, independent of trading decisions.

Author: M Haghverdi
Date: 2025-07-26
"""
import sys
from datetime import datetime

from event_clock import EventClock


class CountdownNotifier:
    def __init__(self, clock: EventClock, stream=None):
        self.clock = clock
        self.stream = stream or sys.stdout
        self.last_text = ""

    def refresh(self, now: datetime) -> str:
        text = self.clock.countdown_text(now)
        if text != self.last_text:
            self.stream.write("\r" + text.ljust(len(self.last_text)))
            self.stream.flush()
            self.last_text = text
        return text

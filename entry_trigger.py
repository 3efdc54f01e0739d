"""
entry_trigger.py

Decides whether and in which direction to enter shortly before the news
release. The trigger is armed while no own position exists and fires
only inside the pre-news window.

Author: M Haghverdi
Date: 2025-07-26
"""
import random
from typing import List, Optional, Sequence

from event_clock import EventClock
from models import Direction, MarketSnapshot, OrderResult, StopTargetSpec, TrackedPosition
from order_executor import OrderExecutor
from position_sizer import PositionSizer


class EntryTrigger:
    def __init__(self, clock: EventClock, executor: OrderExecutor, sizer: PositionSizer,
                 buy: bool = True, sell: bool = True, randomize: bool = False,
                 rng: Optional[random.Random] = None):
        self.clock = clock
        self.executor = executor
        self.sizer = sizer
        self.buy = buy
        self.sell = sell
        self.randomize = randomize
        self.rng = rng or random.Random()
        # Set once an order for this event has been accepted.
        self.entered = False

    def directions(self) -> List[Direction]:
        """Directions to open, in submission order."""
        if self.randomize:
            return [Direction.BUY if self.rng.randint(0, 1) == 1 else Direction.SELL]
        if self.buy and self.sell:
            return [Direction.SELL, Direction.BUY]
        if self.buy:
            return [Direction.BUY]
        if self.sell:
            return [Direction.SELL]
        return []

    def on_update(self, snapshot: MarketSnapshot, positions: Sequence[TrackedPosition],
                  stops: StopTargetSpec) -> List[OrderResult]:
        if positions or self.entered:
            return []
        if not self.clock.in_entry_window(snapshot.time):
            return []

        results = []
        for direction in self.directions():
            volume = self.sizer.size(snapshot.account, snapshot.symbol, stops.stop_loss)
            results.append(self.executor.open(direction, volume, stops.stop_loss, stops.take_profit, snapshot))
        if any(r.ok for r in results):
            self.entered = True
        return results

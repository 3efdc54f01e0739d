"""
trade_manager.py

Manages the lifecycle of open positions around the news release:
keeps SL/TP anchored to the market before the release (optional),
moves the stop to breakeven or trails it afterwards, and closes the
trade once the holding period has passed.

Author: M Haghverdi
Date: 2025-07-26
"""
from enum import Enum
from typing import List, Sequence

from event_clock import EventClock
from event_logger import log
from models import ManagementMode, MarketSnapshot, OrderResult, StopTargetSpec, TrackedPosition
from order_executor import OrderExecutor
from trailing_stop import anchored_levels, breakeven_stop, trailing_stop


class Phase(str, Enum):
    PRE_EVENT = "pre_event"
    POST_EVENT = "post_event"


class PositionManager:
    def __init__(self, clock: EventClock, executor: OrderExecutor, mode: ManagementMode):
        self.clock = clock
        self.executor = executor
        self.mode = mode

    def phase(self, snapshot: MarketSnapshot) -> Phase:
        if self.clock.is_pre_event(snapshot.time):
            return Phase.PRE_EVENT
        return Phase.POST_EVENT

    def manage(self, snapshot: MarketSnapshot, positions: Sequence[TrackedPosition],
               stops: StopTargetSpec) -> List[OrderResult]:
        results = []
        phase = self.phase(snapshot)
        for position in positions:
            if phase == Phase.PRE_EVENT:
                if self.mode.pre_adjust:
                    results.extend(self._pre_adjust(position, snapshot, stops))
            else:
                results.extend(self._post_event(position, snapshot, stops))
        return results

    def _pre_adjust(self, position: TrackedPosition, snapshot: MarketSnapshot,
                    stops: StopTargetSpec) -> List[OrderResult]:
        symbol = snapshot.symbol
        new_sl, new_tp = anchored_levels(
            position.direction, snapshot.bid, snapshot.ask,
            stops.stop_loss * symbol.pip_size, stops.take_profit * symbol.pip_size, symbol.digits,
        )
        if new_sl == position.stop_loss and new_tp == position.take_profit:
            return []
        log(f"[ℹ️] Adjusting SL: {new_sl} and TP: {new_tp}.")
        return [self.executor.modify(position, new_sl, new_tp)]

    def _post_event(self, position: TrackedPosition, snapshot: MarketSnapshot,
                    stops: StopTargetSpec) -> List[OrderResult]:
        results = []
        symbol = snapshot.symbol
        stop_distance = stops.stop_loss * symbol.pip_size

        if self.mode.trailing:
            new_sl = trailing_stop(position, snapshot.bid, snapshot.ask, stop_distance, symbol.digits)
            if new_sl is not None:
                log(f"[ℹ️] Moving trailing SL to {new_sl}.")
                results.append(self.executor.modify(position, new_sl, position.take_profit))
        elif self.mode.breakeven:
            new_sl = breakeven_stop(position, snapshot.bid, snapshot.ask, stop_distance, symbol.digits)
            if new_sl is not None:
                log(f"[ℹ️] Moving SL to breakeven: {new_sl}.")
                results.append(self.executor.modify(position, new_sl, position.take_profit))

        if self.clock.hold_expired(snapshot.time):
            log("[ℹ️] Closing trade by time out.")
            results.append(self.executor.close(position, snapshot))
        return results

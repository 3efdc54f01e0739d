"""
news_trader.py

The news trading robot. Opens a buy/sell trade (random, chosen direction,
or both directions) seconds before a news release, keeps its SL/TP
updated until the release, optionally moves the stop to breakeven or
trails it, and closes the trade after the configured holding period.

Author: M Haghverdi
Date: 2025-07-26
"""
import random
from datetime import datetime
from typing import List, Optional

from config import Settings
from entry_trigger import EntryTrigger
from event_clock import EventClock
from event_logger import log
from models import MarketSnapshot, OrderResult, StopTargetSpec, SymbolInfo
from notifier import CountdownNotifier
from order_executor import MAX_COMMENT_LENGTH, OrderExecutor
from position_sizer import PositionSizer
from trade_manager import PositionManager
from volatility import VolatilityStopCalculator


def make_label(commentary: str, symbol: str, timeframe: str) -> str:
    return f"{commentary} {symbol} {timeframe}"[:MAX_COMMENT_LENGTH]


class NewsTrader:
    def __init__(self, settings: Settings, terminal, rng: Optional[random.Random] = None,
                 notifier: Optional[CountdownNotifier] = None):
        self.settings = settings
        self.label = make_label(settings.commentary, settings.symbol, settings.timeframe)
        self.clock = EventClock(settings.scheduled_event())
        self.executor = OrderExecutor(terminal, self.label, settings.slippage, settings.magic)
        self.sizer = PositionSizer(settings.risk_spec())
        self.entry = EntryTrigger(self.clock, self.executor, self.sizer,
                                  buy=settings.buy, sell=settings.sell,
                                  randomize=settings.randomize, rng=rng)
        self.manager = PositionManager(self.clock, self.executor, settings.management_mode())
        self.volatility = None
        if settings.use_atr:
            self.volatility = VolatilityStopCalculator(settings.atr_multiplier_sl, settings.atr_multiplier_tp)
        self.fixed_stops = settings.fixed_stops()
        self.notifier = notifier
        if self.notifier is None and settings.show_timer:
            self.notifier = CountdownNotifier(self.clock)
        self.can_trade = False

    def on_start(self, symbol: SymbolInfo):
        self.can_trade = self.sizer.can_trade(symbol)
        log(f"[ℹ️] News time: {self.clock.event.time:%Y-%m-%d %H:%M} UTC, label '{self.label}'.")

    def on_stop(self):
        log("[⛔] News trader stopped.")

    def active_stops(self, snapshot: MarketSnapshot) -> StopTargetSpec:
        if self.volatility is None:
            return self.fixed_stops
        return self.volatility.stops(snapshot.volatility, snapshot.symbol.pip_size)

    def on_market_update(self, snapshot: MarketSnapshot) -> List[OrderResult]:
        if not self.can_trade:
            return []

        stops = self.active_stops(snapshot)
        positions = [p for p in snapshot.positions
                     if p.symbol == snapshot.symbol.name and p.label == self.label]
        if positions:
            return self.manager.manage(snapshot, positions, stops)
        return self.entry.on_update(snapshot, positions, stops)

    def on_display_tick(self, now: datetime) -> Optional[str]:
        if self.notifier is None:
            return None
        return self.notifier.refresh(now)

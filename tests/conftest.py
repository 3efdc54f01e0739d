"""
Shared fixtures: a fake MetaTrader 5 terminal that records order requests
and applies them to its own position book, plus default settings around
the 2022-04-26 00:00 UTC news release.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

import event_logger
from config import Settings
from market_feed import read_snapshot
from news_trader import make_label

NEWS_TIME = datetime(2022, 4, 26, 0, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    """Time relative to the news release (negative = before)."""
    return NEWS_TIME + timedelta(seconds=seconds)


class FakeTerminal:
    ORDER_TYPE_BUY = 0
    ORDER_TYPE_SELL = 1
    POSITION_TYPE_BUY = 0
    POSITION_TYPE_SELL = 1
    TRADE_ACTION_DEAL = 1
    TRADE_ACTION_SLTP = 6
    TRADE_RETCODE_DONE = 10009
    TRADE_RETCODE_REJECT = 10006
    ORDER_TIME_GTC = 0
    ORDER_FILLING_IOC = 1
    TIMEFRAME_M1 = 1
    TIMEFRAME_H1 = 16385

    def __init__(self, symbol="EURUSD"):
        self.symbol = symbol
        self.time = at(-60)
        self.bid = 1.10000
        self.ask = 1.10010
        self.balance = 10000.0
        self.equity = 10000.0
        self.currency = "USD"
        self.volume_min = 0.01
        self.volume_max = 100.0
        self.volume_step = 0.01
        self.positions = []
        self.requests = []
        self.bars = []
        self.reject = False
        self.respond = True
        self._next_ticket = 1000

    # --- test helpers ---

    def set_time(self, when: datetime):
        self.time = when

    def set_price(self, bid: float, ask: float):
        self.bid = bid
        self.ask = ask

    def add_position(self, direction="buy", entry=1.10000, sl=0.0, tp=0.0, volume=0.1,
                     comment=None, symbol=None):
        self._next_ticket += 1
        position = SimpleNamespace(
            ticket=self._next_ticket,
            symbol=symbol or self.symbol,
            type=self.POSITION_TYPE_BUY if direction == "buy" else self.POSITION_TYPE_SELL,
            comment=comment,
            volume=volume,
            price_open=entry,
            sl=sl,
            tp=tp,
            magic=0,
        )
        self.positions.append(position)
        return position

    def requests_of(self, action):
        return [r for r in self.requests if r["action"] == action]

    # --- MetaTrader5 API surface ---

    def last_error(self):
        return (1, "Success")

    def symbol_info_tick(self, symbol):
        if symbol != self.symbol:
            return None
        return SimpleNamespace(
            bid=self.bid,
            ask=self.ask,
            time=int(self.time.timestamp()),
            time_msc=int(self.time.timestamp() * 1000),
        )

    def symbol_info(self, symbol):
        if symbol != self.symbol:
            return None
        return SimpleNamespace(
            name=symbol,
            digits=5,
            point=0.00001,
            trade_contract_size=100000.0,
            trade_tick_value=1.0,
            trade_tick_size=0.00001,
            volume_min=self.volume_min,
            volume_max=self.volume_max,
            volume_step=self.volume_step,
        )

    def account_info(self):
        return SimpleNamespace(balance=self.balance, equity=self.equity, currency=self.currency)

    def positions_get(self, symbol=None):
        return tuple(p for p in self.positions if symbol is None or p.symbol == symbol)

    def copy_rates_from_pos(self, symbol, timeframe, start, count):
        if not self.bars:
            return None
        return self.bars[-count:]

    def order_send(self, request):
        self.requests.append(dict(request))
        if not self.respond:
            return None
        if self.reject:
            return SimpleNamespace(retcode=self.TRADE_RETCODE_REJECT, comment="Rejected", order=0)

        if request["action"] == self.TRADE_ACTION_SLTP:
            for p in self.positions:
                if p.ticket == request["position"]:
                    p.sl = request["sl"]
                    p.tp = request["tp"]
            return SimpleNamespace(retcode=self.TRADE_RETCODE_DONE, comment="Request executed", order=0)

        if "position" in request:
            self.positions = [p for p in self.positions if p.ticket != request["position"]]
            return SimpleNamespace(retcode=self.TRADE_RETCODE_DONE, comment="Request executed",
                                   order=request["position"])

        direction = "buy" if request["type"] == self.ORDER_TYPE_BUY else "sell"
        position = self.add_position(direction, entry=request["price"], sl=request["sl"],
                                     tp=request["tp"], volume=request["volume"],
                                     comment=request["comment"], symbol=request["symbol"])
        return SimpleNamespace(retcode=self.TRADE_RETCODE_DONE, comment="Request executed",
                               order=position.ticket)


def flat_bars(count=20, low=1.1000, high=1.1020):
    """Bars with a constant true range of high - low."""
    close = round((low + high) / 2, 5)
    return [
        {"time": 1650931200 + 60 * i, "open": close, "high": high, "low": low, "close": close,
         "tick_volume": 100}
        for i in range(count)
    ]


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(event_logger, "LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setattr(event_logger, "_log_filename", None)
    return tmp_path / "logs"


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def settings():
    return Settings(show_timer=False)


@pytest.fixture
def label(settings):
    return make_label(settings.commentary, settings.symbol, settings.timeframe)


@pytest.fixture
def snapshot(terminal, settings, label):
    """Callable returning the terminal state as a MarketSnapshot."""
    def _snapshot(cfg=None):
        return read_snapshot(terminal, cfg or settings, label)
    return _snapshot

"""
market_feed.py

Reads the current state of the MetaTrader 5 terminal (tick, symbol
properties, account, own positions and the latest ATR) into a single
MarketSnapshot per update.

Author: M Haghverdi
Date: 2025-07-26
"""
from datetime import datetime, timezone
from typing import Optional, Tuple

import pandas as pd

from config import Settings
from event_logger import log
from models import AccountState, Direction, MarketSnapshot, SymbolInfo, TrackedPosition
from volatility import latest_reading


def pip_size(point: float, digits: int) -> float:
    # Fractional-pip quotes (5 or 3 digits) use 10 points per pip.
    if digits in (3, 5):
        return point * 10
    return point


def read_symbol(terminal, symbol: str) -> Optional[SymbolInfo]:
    info = terminal.symbol_info(symbol)
    if info is None:
        return None
    pip = pip_size(info.point, info.digits)
    contract = info.trade_contract_size or 1.0
    pip_value = 0.0
    if info.trade_tick_size > 0:
        pip_value = info.trade_tick_value * (pip / info.trade_tick_size) / contract
    return SymbolInfo(
        name=info.name,
        digits=info.digits,
        pip_size=pip,
        pip_value=pip_value,
        contract_size=contract,
        volume_min=info.volume_min * contract,
        volume_max=info.volume_max * contract,
        volume_step=info.volume_step * contract,
    )


def read_positions(terminal, symbol: SymbolInfo, label: str) -> Tuple[TrackedPosition, ...]:
    raw = terminal.positions_get(symbol=symbol.name)
    if not raw:
        return ()
    own = []
    for p in raw:
        if p.symbol != symbol.name or p.comment != label:
            continue
        direction = Direction.BUY if p.type == terminal.POSITION_TYPE_BUY else Direction.SELL
        own.append(TrackedPosition(
            ticket=p.ticket,
            symbol=p.symbol,
            direction=direction,
            label=p.comment,
            volume=symbol.lots_to_units(p.volume),
            entry_price=p.price_open,
            stop_loss=p.sl or None,
            take_profit=p.tp or None,
        ))
    return tuple(own)


def read_volatility(terminal, settings: Settings) -> Optional[float]:
    timeframe = getattr(terminal, f"TIMEFRAME_{settings.timeframe}")
    bars = terminal.copy_rates_from_pos(settings.symbol, timeframe, 0, settings.atr_period + 1)
    if bars is None or len(bars) == 0:
        log("[⚠️] Failed to get bars for ATR.")
        return None
    return latest_reading(pd.DataFrame(bars), settings.atr_period)


def read_snapshot(terminal, settings: Settings, label: str) -> Optional[MarketSnapshot]:
    tick = terminal.symbol_info_tick(settings.symbol)
    if tick is None:
        log(f"[❌] No tick for {settings.symbol}.")
        return None
    symbol = read_symbol(terminal, settings.symbol)
    if symbol is None:
        log(f"[❌] No symbol info for {settings.symbol}.")
        return None
    account = terminal.account_info()
    if account is None:
        log("[❌] No account info.")
        return None

    return MarketSnapshot(
        time=datetime.fromtimestamp(tick.time_msc / 1000, tz=timezone.utc),
        bid=tick.bid,
        ask=tick.ask,
        symbol=symbol,
        account=AccountState(balance=account.balance, equity=account.equity, currency=account.currency),
        positions=read_positions(terminal, symbol, label),
        volatility=read_volatility(terminal, settings) if settings.use_atr else None,
    )

"""
trailing_stop.py

Implements trailing stop logic that dynamically adjusts stop loss
levels to protect and maximize trade profits during an open position.
Also holds the breakeven rule and the pre-news SL/TP re-anchoring.

All functions are pure: they take prices and distances and return the
proposed level, or None when no change should be requested.

Author: M Haghverdi
Date: 2025-07-26
"""
from typing import Optional, Tuple

from models import Direction, TrackedPosition


def anchored_levels(direction: Direction, bid: float, ask: float, stop_distance: float,
                    target_distance: float, digits: int) -> Tuple[Optional[float], Optional[float]]:
    """
    SL/TP placed stop_distance/target_distance (price units) away from the
    current price. A zero distance leaves that level unset (None).
    """
    price, sign = (ask, 1) if direction == Direction.BUY else (bid, -1)
    sl = round(price - sign * stop_distance, digits) if stop_distance > 0 else None
    tp = round(price + sign * target_distance, digits) if target_distance > 0 else None
    return sl, tp


def breakeven_stop(position: TrackedPosition, bid: float, ask: float, stop_distance: float,
                   digits: int) -> Optional[float]:
    if stop_distance <= 0:
        return None
    if position.direction == Direction.BUY:
        in_profit = ask - position.entry_price >= stop_distance
    else:
        in_profit = position.entry_price - bid >= stop_distance
    if not in_profit:
        return None
    new_sl = round(position.entry_price, digits)
    if new_sl == position.stop_loss:
        return None
    return new_sl


def trailing_stop(position: TrackedPosition, bid: float, ask: float, stop_distance: float,
                  digits: int) -> Optional[float]:
    """
    Trail the stop stop_distance behind the market once price is at least
    that far beyond the current stop. The stop never moves backwards.
    """
    if stop_distance <= 0 or position.stop_loss is None:
        return None
    if position.direction == Direction.BUY:
        if ask - position.stop_loss < stop_distance:
            return None
        new_sl = round(ask - stop_distance, digits)
        return new_sl if new_sl > position.stop_loss else None
    if position.stop_loss - bid < stop_distance:
        return None
    new_sl = round(bid + stop_distance, digits)
    return new_sl if new_sl < position.stop_loss else None

"""
volatility.py

Average True Range from OHLC bars and conversion of the latest ATR
reading into stop-loss / take-profit distances in pips.

Author: M Haghverdi
Date: 2025-07-26
"""
import math
from typing import Optional

import pandas as pd

from models import StopTargetSpec


def calculate_atr(df: pd.DataFrame, period: int = 14) -> pd.Series:
    high = df['high']
    low = df['low']
    close = df['close']
    prev_close = close.shift(1)
    tr = pd.concat([
        high - low,
        (high - prev_close).abs(),
        (low - prev_close).abs()
    ], axis=1).max(axis=1)
    return tr.rolling(window=period, min_periods=period).mean()


def latest_reading(df: Optional[pd.DataFrame], period: int = 14) -> Optional[float]:
    if df is None or len(df) < period:
        return None
    value = calculate_atr(df, period).iloc[-1]
    if pd.isna(value):
        return None
    return float(value)


class VolatilityStopCalculator:
    def __init__(self, sl_multiplier: float, tp_multiplier: float):
        self.sl_multiplier = sl_multiplier
        self.tp_multiplier = tp_multiplier

    def stops(self, reading: Optional[float], pip_size: float) -> StopTargetSpec:
        # An unavailable reading counts as zero volatility.
        if reading is None or math.isnan(reading) or reading < 0 or pip_size <= 0:
            return StopTargetSpec(stop_loss=0.0, take_profit=0.0)
        return StopTargetSpec(
            stop_loss=reading * self.sl_multiplier / pip_size,
            take_profit=reading * self.tp_multiplier / pip_size,
        )

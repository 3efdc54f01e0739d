"""
config.py

Runtime parameters of the news trader. Defaults mirror a typical setup
(EURUSD, 15/75 pip stop/target, 1% risk); every value can be overridden
through NEWS_* environment variables or a .env file.

Author: M Haghverdi
Date: 2025-07-26
"""
import os
from dataclasses import dataclass, fields
from datetime import datetime

from dotenv import load_dotenv

from event_clock import event_time_from_parts
from models import ManagementMode, RiskSpec, ScheduledEvent, StopTargetSpec


def _bool(s) -> bool:
    return str(s).strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class Settings:
    # News release time (UTC).
    year: int = 2022
    month: int = 4
    day: int = 26
    hour: int = 0
    minute: int = 0

    stop_loss: int = 15
    take_profit: int = 75

    buy: bool = True
    sell: bool = True
    randomize: bool = False
    # Trailing stop supersedes breakeven when both are on.
    trailing: bool = False
    breakeven: bool = False
    pre_adjust: bool = False

    seconds_before: int = 10
    close_after_seconds: int = 3600

    use_atr: bool = False
    atr_period: int = 14
    atr_multiplier_sl: float = 1.0
    atr_multiplier_tp: float = 5.0

    lots: float = 0.01
    money_management: bool = True
    risk: float = 1.0
    money_risk: float = 0.0
    fixed_balance: float = 0.0
    use_money_instead_of_percentage: bool = False
    use_equity_instead_of_balance: bool = False

    show_timer: bool = True
    slippage: int = 1
    commentary: str = "NewsTrader"

    symbol: str = "EURUSD"
    timeframe: str = "M1"
    magic: int = 20150426
    poll_interval: float = 0.1

    def __post_init__(self):
        # Raises on an impossible calendar date.
        datetime(self.year, self.month, self.day, self.hour, self.minute)
        if self.year < 1970:
            raise ValueError(f"year must be >= 1970, got {self.year}")
        for name in ("stop_loss", "take_profit", "atr_multiplier_sl", "atr_multiplier_tp",
                     "risk", "money_risk", "fixed_balance", "slippage", "close_after_seconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        for name in ("seconds_before", "atr_period"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.lots < 0.01:
            raise ValueError(f"lots must be >= 0.01, got {self.lots}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")

    @classmethod
    def from_env(cls, prefix: str = "NEWS_") -> "Settings":
        load_dotenv()
        overrides = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper())
            if raw is None or raw == "":
                continue
            if f.type in (bool, "bool"):
                overrides[f.name] = _bool(raw)
            elif f.type in (int, "int"):
                overrides[f.name] = int(raw)
            elif f.type in (float, "float"):
                overrides[f.name] = float(raw)
            else:
                overrides[f.name] = raw
        return cls(**overrides)

    def scheduled_event(self) -> ScheduledEvent:
        return ScheduledEvent(
            time=event_time_from_parts(self.year, self.month, self.day, self.hour, self.minute),
            seconds_before=self.seconds_before,
            close_after_seconds=self.close_after_seconds,
        )

    def fixed_stops(self) -> StopTargetSpec:
        return StopTargetSpec(stop_loss=self.stop_loss, take_profit=self.take_profit)

    def risk_spec(self) -> RiskSpec:
        return RiskSpec(
            money_management=self.money_management,
            lots=self.lots,
            risk_percent=self.risk,
            money_risk=self.money_risk,
            fixed_balance=self.fixed_balance,
            use_money_instead_of_percentage=self.use_money_instead_of_percentage,
            use_equity_instead_of_balance=self.use_equity_instead_of_balance,
        )

    def management_mode(self) -> ManagementMode:
        return ManagementMode(
            breakeven=self.breakeven,
            trailing=self.trailing,
            pre_adjust=self.pre_adjust,
        )

"""
models.py

Plain data containers shared by the trading modules: the scheduled news
event, stop/target and risk settings, market snapshots and the positions
reported back by the terminal.

Author: M Haghverdi
Date: 2025-07-26
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class Direction(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class ScheduledEvent:
    time: datetime
    seconds_before: int = 10
    close_after_seconds: int = 3600


@dataclass(frozen=True)
class StopTargetSpec:
    """Stop-loss and take-profit distances in pips."""
    stop_loss: float
    take_profit: float

    def __post_init__(self):
        if self.stop_loss < 0 or self.take_profit < 0:
            raise ValueError("Stop-loss and take-profit distances must be non-negative.")


@dataclass(frozen=True)
class RiskSpec:
    money_management: bool = True
    lots: float = 0.01
    risk_percent: float = 1.0
    money_risk: float = 0.0
    fixed_balance: float = 0.0
    use_money_instead_of_percentage: bool = False
    use_equity_instead_of_balance: bool = False


@dataclass(frozen=True)
class ManagementMode:
    breakeven: bool = False
    trailing: bool = False
    pre_adjust: bool = False


@dataclass(frozen=True)
class SymbolInfo:
    """
    Trading properties of a symbol. Volumes are expressed in units
    (lots * contract size); pip_value is the account-currency value of
    one pip for one unit.
    """
    name: str
    digits: int
    pip_size: float
    pip_value: float
    contract_size: float
    volume_min: float
    volume_max: float
    volume_step: float

    def lots_to_units(self, lots: float) -> float:
        return lots * self.contract_size

    def units_to_lots(self, units: float) -> float:
        if self.contract_size <= 0:
            return units
        return units / self.contract_size


@dataclass(frozen=True)
class AccountState:
    balance: float
    equity: float
    currency: str = ""


@dataclass(frozen=True)
class TrackedPosition:
    ticket: int
    symbol: str
    direction: Direction
    label: str
    volume: float
    entry_price: float
    stop_loss: Optional[float] = None
    take_profit: Optional[float] = None


@dataclass(frozen=True)
class MarketSnapshot:
    time: datetime
    bid: float
    ask: float
    symbol: SymbolInfo
    account: AccountState
    positions: Tuple[TrackedPosition, ...] = field(default_factory=tuple)
    volatility: Optional[float] = None


@dataclass(frozen=True)
class OrderResult:
    ok: bool
    ticket: Optional[int] = None
    retcode: Optional[int] = None
    comment: str = ""

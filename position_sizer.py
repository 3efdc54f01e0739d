"""
position_sizer.py

Position sizing from money management parameters: fixed lots, percent of
balance/equity at risk, or a fixed money amount at risk over the stop-loss
distance. Results are clamped to the broker's volume limits and step.

Author: M Haghverdi
Date: 2025-07-26
"""
import math

from event_logger import log
from models import AccountState, RiskSpec, SymbolInfo

# Tolerance for float noise when checking step alignment (e.g. 0.07 / 0.01).
STEP_EPSILON = 1e-9


class PositionSizer:
    def __init__(self, risk: RiskSpec):
        self.risk = risk

    def can_trade(self, symbol: SymbolInfo) -> bool:
        min_lot = symbol.units_to_lots(symbol.volume_min)
        lot_step = symbol.units_to_lots(symbol.volume_step)
        log(f"[ℹ️] Minimum lot: {min_lot}, lot step: {lot_step}.")
        if self.risk.lots < min_lot and not self.risk.money_management:
            log(f"[❌] Lots should not be less than: {min_lot}.")
            return False
        return True

    def risk_money(self, account: AccountState) -> float:
        if self.risk.fixed_balance > 0:
            size = self.risk.fixed_balance
        elif self.risk.use_equity_instead_of_balance:
            size = account.equity
        else:
            size = account.balance

        if self.risk.use_money_instead_of_percentage:
            return self.risk.money_risk
        return size * self.risk.risk_percent / 100

    def size(self, account: AccountState, symbol: SymbolInfo, stop_loss: float) -> float:
        """
        Volume in units for a trade with the given stop-loss distance (pips).
        Never below the broker minimum when money management is on.
        """
        if not self.risk.money_management:
            return symbol.lots_to_units(self.risk.lots)

        risk_money = self.risk_money(account)
        unit_cost = symbol.pip_value

        position_size = 0
        if stop_loss > 0 and unit_cost > 0:
            position_size = round(risk_money / stop_loss / unit_cost)
        log(f"[ℹ️] Raw position size: {position_size}")

        if position_size < symbol.volume_min:
            log(f"[⚠️] Calculated position size ({position_size}) is less than minimum position size "
                f"({symbol.volume_min}). Setting position size to minimum.")
            position_size = symbol.volume_min
        elif position_size > symbol.volume_max:
            log(f"[⚠️] Calculated position size ({position_size}) is greater than maximum position size "
                f"({symbol.volume_max}). Setting position size to maximum.")
            position_size = symbol.volume_max

        lot_step = symbol.volume_step
        if lot_step > 0:
            steps = position_size / lot_step
            whole_steps = math.floor(steps + STEP_EPSILON)
            if whole_steps < steps - STEP_EPSILON:
                floored = whole_steps * lot_step
                log(f"[⚠️] Calculated position size ({position_size}) uses uneven step size. "
                    f"Allowed step size = {lot_step}. Setting position size to {floored}.")
                position_size = floored
            else:
                position_size = whole_steps * lot_step

        return float(position_size)

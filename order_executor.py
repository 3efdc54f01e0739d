"""
order_executor.py

Thin MetaTrader 5 order adapter: opens market orders with SL/TP given in
pips, modifies SL/TP of an open position and closes positions. Every
request result is logged; rejected requests are reported, never retried.

Author: M Haghverdi
Date: 2025-07-26
"""
from typing import Optional

from event_logger import log
from models import Direction, MarketSnapshot, OrderResult, SymbolInfo, TrackedPosition

# MT5 limits order comments to 31 characters.
MAX_COMMENT_LENGTH = 31


class OrderExecutor:
    def __init__(self, terminal, label: str, slippage: int = 1, magic: int = 0):
        """
        terminal is the MetaTrader5 module (or anything exposing order_send
        and the MT5 request constants).
        """
        self.terminal = terminal
        self.label = label[:MAX_COMMENT_LENGTH]
        self.slippage = slippage
        self.magic = magic

    def _deviation(self, symbol: SymbolInfo) -> int:
        points_per_pip = round(symbol.pip_size * 10 ** symbol.digits)
        return int(self.slippage * max(points_per_pip, 1))

    def _send(self, request: dict, action: str) -> OrderResult:
        result = self.terminal.order_send(request)
        if result is None:
            log(f"[❌] {action} failed: no response from terminal ({self.terminal.last_error()}).")
            return OrderResult(ok=False, comment="no response")
        if result.retcode != self.terminal.TRADE_RETCODE_DONE:
            log(f"[❌] {action} rejected: retcode={result.retcode} {result.comment}")
            return OrderResult(ok=False, retcode=result.retcode, comment=result.comment)
        ticket: Optional[int] = getattr(result, "order", None) or request.get("position")
        return OrderResult(ok=True, ticket=ticket, retcode=result.retcode, comment=result.comment)

    def open(self, direction: Direction, volume: float, stop_loss: float, take_profit: float,
             snapshot: MarketSnapshot) -> OrderResult:
        """
        Market order of `volume` units with SL/TP `stop_loss`/`take_profit`
        pips away from the entry price. A zero distance leaves the level unset.
        """
        symbol = snapshot.symbol
        if direction == Direction.BUY:
            order_type = self.terminal.ORDER_TYPE_BUY
            price = snapshot.ask
            sign = 1
        else:
            order_type = self.terminal.ORDER_TYPE_SELL
            price = snapshot.bid
            sign = -1

        sl = round(price - sign * stop_loss * symbol.pip_size, symbol.digits) if stop_loss > 0 else 0.0
        tp = round(price + sign * take_profit * symbol.pip_size, symbol.digits) if take_profit > 0 else 0.0
        lots = round(symbol.units_to_lots(volume), 8)

        request = {
            'action': self.terminal.TRADE_ACTION_DEAL,
            'symbol': symbol.name,
            'volume': float(lots),
            'type': order_type,
            'price': float(price),
            'sl': float(sl),
            'tp': float(tp),
            'deviation': self._deviation(symbol),
            'magic': self.magic,
            'comment': self.label,
            'type_time': self.terminal.ORDER_TIME_GTC,
            'type_filling': self.terminal.ORDER_FILLING_IOC,
        }
        result = self._send(request, f"Open {direction.value} {lots} lots")
        if result.ok:
            log(f"[✅] Opened {direction.value} {lots} lots @ {price} SL={sl} TP={tp} (ticket {result.ticket}).")
        return result

    def modify(self, position: TrackedPosition, new_sl: Optional[float],
               new_tp: Optional[float]) -> OrderResult:
        request = {
            'action': self.terminal.TRADE_ACTION_SLTP,
            'symbol': position.symbol,
            'position': position.ticket,
            'sl': float(new_sl or 0.0),
            'tp': float(new_tp or 0.0),
            'magic': self.magic,
            'comment': self.label,
        }
        return self._send(request, f"Modify #{position.ticket}")

    def close(self, position: TrackedPosition, snapshot: MarketSnapshot) -> OrderResult:
        if position.direction == Direction.BUY:
            order_type = self.terminal.ORDER_TYPE_SELL
            price = snapshot.bid
        else:
            order_type = self.terminal.ORDER_TYPE_BUY
            price = snapshot.ask
        request = {
            'action': self.terminal.TRADE_ACTION_DEAL,
            'symbol': position.symbol,
            'volume': float(round(snapshot.symbol.units_to_lots(position.volume), 8)),
            'type': order_type,
            'position': position.ticket,
            'price': float(price),
            'deviation': self._deviation(snapshot.symbol),
            'magic': self.magic,
            'comment': self.label,
            'type_time': self.terminal.ORDER_TIME_GTC,
            'type_filling': self.terminal.ORDER_FILLING_IOC,
        }
        result = self._send(request, f"Close #{position.ticket}")
        if result.ok:
            log(f"[✅] Closed position #{position.ticket} @ {price}.")
        return result

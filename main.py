"""
main.py

Main entry point and control loop of the news trader.
Handles initialization, polling of the terminal, and dispatching
market updates and countdown refreshes to the robot.

Author: M Haghverdi
Date: 2025-07-26
"""
import time
from datetime import datetime, timedelta, timezone
import MetaTrader5 as mt5
from typing import Tuple, Optional

from config import Settings
from event_clock import ServerClock
from event_logger import log
from market_feed import read_snapshot, read_symbol
from news_trader import NewsTrader


def check_market_open() -> Tuple[bool, Optional[timedelta]]:
    now = datetime.now(timezone.utc)
    wd = now.weekday()
    hour = now.hour

    if (wd == 6 and hour >= 21) or (0 <= wd <= 3) or (wd == 4 and hour < 21):
        return True, None

    if wd == 4 and hour >= 21:
        days = 2
    elif wd == 5:
        days = 1
    else:
        days = 0

    next_open = (now + timedelta(days=days)).replace(
        hour=21, minute=0, second=0, microsecond=0
    )

    return False, next_open - now


def main():
    settings = Settings.from_env()

    if not mt5.initialize():
        print(f"[❌] Failed to connect to MetaTrader 5: {mt5.last_error()}")
        return
    log("[✅] Connected to MetaTrader 5.")

    if not mt5.symbol_select(settings.symbol, True):
        log(f"[❌] Symbol select failed for {settings.symbol}.")
        mt5.shutdown()
        return

    symbol = read_symbol(mt5, settings.symbol)
    if symbol is None:
        log(f"[❌] No symbol info for {settings.symbol}.")
        mt5.shutdown()
        return

    robot = NewsTrader(settings, mt5)
    robot.on_start(symbol)

    server_clock = ServerClock()
    last_tick_msc = None
    try:
        while True:
            market_open, delta = check_market_open()
            if not market_open:
                hours, rem = divmod(int(delta.total_seconds()), 3600)
                minutes = rem // 60
                log(f"[ℹ️] Market closed. Opens in {hours}h {minutes}m.")
                time.sleep(60)
                continue

            tick = mt5.symbol_info_tick(settings.symbol)
            if tick is None:
                log(f"[❌] Failed to get tick for {settings.symbol}.")
                time.sleep(10)
                continue

            if tick.time_msc != last_tick_msc:
                last_tick_msc = tick.time_msc
                server_clock.sync(datetime.fromtimestamp(tick.time_msc / 1000, tz=timezone.utc))
                snapshot = read_snapshot(mt5, settings, robot.label)
                if snapshot is not None:
                    robot.on_market_update(snapshot)

            robot.on_display_tick(server_clock.now())
            time.sleep(settings.poll_interval)
    finally:
        robot.on_stop()
        mt5.shutdown()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n[⛔] Terminated by user.")

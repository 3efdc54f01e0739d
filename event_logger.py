"""
event_logger.py

Handles logging of important runtime events such as trades opened/closed,
stop loss changes, errors, and warnings for monitoring and debugging.

Author: M Haghverdi
Date: 2025-07-26
"""
import os
from datetime import datetime
from typing import Optional

LOG_DIR = os.getenv("NEWS_LOG_DIR", "logs")

_log_filename: Optional[str] = None


def _current_log_file() -> str:
    global _log_filename
    if _log_filename is None or os.path.dirname(_log_filename) != LOG_DIR:
        os.makedirs(LOG_DIR, exist_ok=True)
        _log_filename = os.path.join(LOG_DIR, f"log_{datetime.now():%Y-%m-%d_%H-%M-%S}.txt")
    return _log_filename


def log(msg: str):
    timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    line = f"[{timestamp}] {msg}"
    print(line)
    with open(_current_log_file(), "a", encoding="utf-8") as f:
        f.write(line + "\n")

# discrakt/debug.py
import os
import time
from pathlib import Path


_DEBUG = os.getenv("DISCRAKT_DEBUG") == "1"

LOG_PATH = Path(__file__).resolve().parents[1] / "discrakt_debug.log"


def _timestamp() -> str:
    try:
        return time.strftime("%Y-%m-%d %H:%M:%S")
    except Exception:
        return "unknown-time"


def log(message: str) -> None:
    try:
        print(f"[{_timestamp()}] {message}", flush=True)
    except Exception:
        pass


def set_debug(enabled: bool) -> None:
    global _DEBUG
    _DEBUG = enabled


def debug_log(message: str) -> None:
    if not _DEBUG:
        return

    line = f"[{_timestamp()}] {message}\n"
    try:
        with LOG_PATH.open("a", encoding="utf-8") as f:
            f.write(line)
    except Exception:
        pass

    try:
        print(f"[DEBUG] {message}", flush=True)
    except Exception:
        pass

import os
from loguru import logger
from medisort_reminders.core.env import load_env

load_env()

def _parse_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on", "y")

def _parse_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("{}={!r} is not an integer, falling back to {}", name, raw, default)
        return default

SERVICE_NAME = os.getenv("SERVICE_NAME", "MediSort Reminder Scheduler")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
LOG_TO_FILE = _parse_bool("LOG_TO_FILE", False)
LOG_FILE = os.getenv("LOG_FILE", "logs/reminders.log")

UPCOMING_WINDOW_HOURS = _parse_int("UPCOMING_WINDOW_HOURS", 2)
TRIGGER_TOLERANCE_MINUTES = _parse_int("TRIGGER_TOLERANCE_MINUTES", 1)

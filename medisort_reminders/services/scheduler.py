import re
from typing import Dict, List, Optional, Sequence, Set, Union

from loguru import logger

from medisort_reminders.schemas.models import (
    MISMATCH_WARNING,
    TIME_RE,
    ReminderTime,
    ValidationResult,
)
from medisort_reminders.utils.time_conflict import detect_conflicts, minutes_to_hhmm, validate_reminders

__all__ = [
    "generate_default_times",
    "validate_time",
    "validate_schedule",
    "sort_schedule",
    "format_for_display",
    "detect_conflicts",
    "validate_reminders",
    "schedule_count_warning",
    "doses_per_day_for_frequency",
]

TimeLike = Union[ReminderTime, str]

# conventional dosing intervals for small counts
_FIXED_TABLE: Dict[int, List[str]] = {
    1: ["09:00"],
    2: ["09:00", "21:00"],
    3: ["08:00", "14:00", "20:00"],
    4: ["08:00", "12:00", "16:00", "20:00"],
}
_START_HOUR = 8

_FREQ_DOSES = {"OD": 1, "BID": 2, "TID": 3, "QID": 4, "WEEKLY": 1}
_EVERY_N_RE = re.compile(r"^EVERY_(\d+)_DAYS$")


def _as_time(value: TimeLike) -> ReminderTime:
    if isinstance(value, ReminderTime):
        return value
    return ReminderTime.parse(value)


def doses_per_day_for_frequency(freq: Optional[str]) -> int:
    """OD/BID/TID/QID/WEEKLY/EVERY_N_DAYS -> doses per day. PRN/unknown -> 0 (no fixed reminders)."""
    f = (freq or "").upper().strip()
    if _EVERY_N_RE.match(f):
        return 1
    return _FREQ_DOSES.get(f, 0)


def generate_default_times(doses_per_day: int) -> List[ReminderTime]:
    """
    Default reminder times for a dose count.

    1-4 doses use a fixed table. Above that the day is split by integer division
    starting at 08:00 and wrapping at midnight, so large counts can repeat an hour
    (every dose lands on 08:00 once the count exceeds 24). Those repeats are kept;
    the result length always equals the dose count.
    """
    if doses_per_day <= 0:
        return []

    if doses_per_day in _FIXED_TABLE:
        return [ReminderTime.parse(t) for t in _FIXED_TABLE[doses_per_day]]

    interval = 24 // doses_per_day
    times = [
        ReminderTime.parse(minutes_to_hhmm(((_START_HOUR + i * interval) % 24) * 60))
        for i in range(doses_per_day)
    ]

    distinct = len(set(times))
    if distinct < len(times):
        logger.warning(
            "default schedule for {} doses repeats hours ({} distinct of {})",
            doses_per_day, distinct, len(times),
        )
    return times


def validate_time(raw: Optional[str]) -> ValidationResult:
    if not raw:
        return ValidationResult.fail("MISSING_TIME")

    m = TIME_RE.fullmatch(raw)
    if not m:
        return ValidationResult.fail("INVALID_FORMAT")

    return ValidationResult.ok(ReminderTime(hour=int(m.group(1)), minute=int(m.group(2))))


def validate_schedule(times: Sequence[Optional[str]]) -> Dict[int, ValidationResult]:
    """
    Per-index errors for a user-edited list of times; valid indices are absent.
    The first occurrence of a time is kept, later repeats are DUPLICATE_TIME.
    """
    errors: Dict[int, ValidationResult] = {}
    seen: Set[str] = set()

    for idx, raw in enumerate(times):
        res = validate_time(raw)
        if not res.is_valid:
            errors[idx] = res
            continue

        key = res.time.canonical
        if key in seen:
            errors[idx] = ValidationResult.fail("DUPLICATE_TIME", time=res.time)
        else:
            seen.add(key)

    if errors:
        logger.debug("schedule of {} times has {} invalid entries", len(times), len(errors))
    return errors


def schedule_count_warning(times: Sequence[Optional[str]], doses_per_day: Optional[int]) -> Optional[str]:
    # a warning only; never blocks a save
    expected = doses_per_day or 0
    count = sum(1 for t in times if t and t.strip())
    if expected > 0 and count != expected:
        return MISMATCH_WARNING
    return None


def sort_schedule(times: Sequence[TimeLike]) -> List[ReminderTime]:
    # sorted() is stable, equal times keep input order
    return sorted((_as_time(t) for t in times), key=lambda t: t.minutes)


def format_for_display(time: TimeLike) -> str:
    """"20:15" -> "8:15 PM", "00:00" -> "12:00 AM". Empty input gives ""."""
    if isinstance(time, str) and not time:
        return ""
    t = _as_time(time)
    ampm = "PM" if t.hour >= 12 else "AM"
    display_hour = 12 if t.hour == 0 else t.hour - 12 if t.hour > 12 else t.hour
    return f"{display_hour}:{t.minute:02d} {ampm}"

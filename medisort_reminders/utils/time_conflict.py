# medisort_reminders/utils/time_conflict.py
from __future__ import annotations

from itertools import combinations
from typing import List, Optional, Sequence

from loguru import logger

from medisort_reminders.schemas.models import (
    NO_ACTIVE_REMINDERS,
    NO_RECURRING_DAYS,
    RecurringReminder,
    ReminderConflict,
)

MINUTES_PER_DAY = 24 * 60

def minutes_to_hhmm(total_minutes: int) -> str:
    # wraps past midnight
    total_minutes = total_minutes % MINUTES_PER_DAY
    h = total_minutes // 60
    m = total_minutes % 60
    return f"{h:02d}:{m:02d}"

def detect_conflicts(reminders: Sequence[RecurringReminder]) -> List[ReminderConflict]:
    """
    Pairs of active reminders that fire at the same time on at least one shared weekday.
    Pairs come back ordered by (first, second) with first < second.
    Non-recurring reminders count as active on all 7 days; a recurring one
    with no days selected shares a day with nothing.
    """
    conflicts: List[ReminderConflict] = []

    for i, j in combinations(range(len(reminders)), 2):
        a, b = reminders[i], reminders[j]
        if not (a.is_active and b.is_active):
            continue
        if a.time.canonical != b.time.canonical:
            continue

        shared = a.effective_days() & b.effective_days()
        if not shared:
            continue

        conflicts.append(ReminderConflict(first=i, second=j, time=a.time, shared_days=sorted(shared)))

    if conflicts:
        logger.debug("detected {} reminder conflict(s) across {} reminders", len(conflicts), len(reminders))
    return conflicts

def validate_reminders(reminders: Sequence[RecurringReminder]) -> Optional[str]:
    """Reason a reminder set cannot be saved, or None when it can."""
    active = [r for r in reminders if r.is_active]
    if not active:
        return NO_ACTIVE_REMINDERS

    for r in active:
        if r.is_recurring and not r.days_of_week:
            return NO_RECURRING_DAYS
    return None

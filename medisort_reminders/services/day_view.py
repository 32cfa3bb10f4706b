from datetime import datetime
from typing import List, Optional, Sequence

from medisort_reminders.core.settings import TRIGGER_TOLERANCE_MINUTES, UPCOMING_WINDOW_HOURS
from medisort_reminders.schemas.models import RecurringReminder, ReminderStats


def weekday_of(moment: datetime) -> int:
    # 0 = Sunday .. 6 = Saturday
    return moment.isoweekday() % 7


def parse_now(now_iso: Optional[str]) -> datetime:
    """
    Naive timestamps are taken as local wall-clock time.
    Offset-aware ones ("...Z", "+05:30") are converted to server local time,
    since reminder times and weekdays are local.
    """
    if not now_iso:
        return datetime.now()
    moment = datetime.fromisoformat(now_iso.replace("Z", "+00:00"))
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment


def _minutes_of(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def reminders_for_day(reminders: Sequence[RecurringReminder], weekday: int) -> List[RecurringReminder]:
    """Active reminders that fire on `weekday`, earliest first."""
    todays = [r for r in reminders if r.is_active and weekday in r.effective_days()]
    return sorted(todays, key=lambda r: r.time.minutes)


def upcoming_reminders(
    reminders: Sequence[RecurringReminder],
    now: datetime,
    hours_ahead: int = UPCOMING_WINDOW_HOURS,
) -> List[RecurringReminder]:
    current = _minutes_of(now)
    until = current + hours_ahead * 60
    return [
        r for r in reminders_for_day(reminders, weekday_of(now))
        if current <= r.time.minutes <= until
    ]


def overdue_reminders(reminders: Sequence[RecurringReminder], now: datetime) -> List[RecurringReminder]:
    current = _minutes_of(now)
    return [r for r in reminders_for_day(reminders, weekday_of(now)) if r.time.minutes < current]


def should_trigger_now(
    reminder: RecurringReminder,
    now: datetime,
    tolerance_minutes: int = TRIGGER_TOLERANCE_MINUTES,
) -> bool:
    if not reminder.is_active:
        return False
    if abs(_minutes_of(now) - reminder.time.minutes) > tolerance_minutes:
        return False
    return weekday_of(now) in reminder.trigger_days()


def reminder_stats(
    reminders: Sequence[RecurringReminder],
    now: datetime,
    hours_ahead: int = UPCOMING_WINDOW_HOURS,
) -> ReminderStats:
    return ReminderStats(
        total_reminders=len(reminders),
        active_reminders=sum(1 for r in reminders if r.is_active),
        todays_reminders=len(reminders_for_day(reminders, weekday_of(now))),
        upcoming_reminders=len(upcoming_reminders(reminders, now, hours_ahead)),
    )

# medisort_reminders/api/routes_reminders.py
from typing import Optional
from fastapi import APIRouter, HTTPException
from loguru import logger

from medisort_reminders.core.settings import UPCOMING_WINDOW_HOURS
from medisort_reminders.schemas.models import (
    MAX_DOSES_PER_DAY,
    ConflictsRequest, ConflictsResponse,
    DayViewRequest, DayViewResponse,
    DefaultTimesResponse,
    SortRequest, SortResponse,
    ValidateScheduleRequest, ValidateScheduleResponse,
    ValidateTimeRequest, ValidationResult,
)
from medisort_reminders.services.day_view import (
    overdue_reminders, parse_now, reminder_stats, reminders_for_day, upcoming_reminders, weekday_of,
)
from medisort_reminders.services.scheduler import (
    detect_conflicts,
    doses_per_day_for_frequency,
    format_for_display,
    generate_default_times,
    schedule_count_warning,
    sort_schedule,
    validate_schedule,
    validate_reminders,
    validate_time,
)

router = APIRouter(prefix="/reminders", tags=["reminders"])

@router.get("/defaults", response_model=DefaultTimesResponse)
def defaults(doses_per_day: Optional[int] = None, frequency: Optional[str] = None):
    if doses_per_day is None and not frequency:
        raise HTTPException(status_code=400, detail="Provide doses_per_day or frequency.")
    if doses_per_day is not None and doses_per_day < 0:
        raise HTTPException(status_code=400, detail="doses_per_day must be 0 or greater.")
    if doses_per_day is not None and doses_per_day > MAX_DOSES_PER_DAY:
        raise HTTPException(status_code=400, detail=f"doses_per_day must be at most {MAX_DOSES_PER_DAY}.")

    if doses_per_day is None:
        doses_per_day = doses_per_day_for_frequency(frequency)

    times = generate_default_times(doses_per_day)
    return DefaultTimesResponse(
        doses_per_day=doses_per_day,
        frequency=frequency.upper().strip() if frequency else None,
        times=times,
        display=[format_for_display(t) for t in times],
    )

@router.post("/validate-time", response_model=ValidationResult)
def check_time(req: ValidateTimeRequest):
    return validate_time(req.time)

@router.post("/validate", response_model=ValidateScheduleResponse)
def check_schedule(req: ValidateScheduleRequest):
    errors = validate_schedule(req.times)
    return ValidateScheduleResponse(
        ok=not errors,
        errors=errors,
        warning=schedule_count_warning(req.times, req.doses_per_day),
    )

@router.post("/sort", response_model=SortResponse)
def sort(req: SortRequest):
    ordered = sort_schedule(req.times)
    return SortResponse(times=ordered, display=[format_for_display(t) for t in ordered])

@router.post("/conflicts", response_model=ConflictsResponse)
def conflicts(req: ConflictsRequest):
    found = detect_conflicts(req.reminders)
    return ConflictsResponse(has_conflicts=bool(found), conflicts=found, error=validate_reminders(req.reminders))

@router.post("/today", response_model=DayViewResponse)
def today(req: DayViewRequest):
    try:
        now = parse_now(req.now_iso)
    except ValueError:
        raise HTTPException(status_code=400, detail="now_iso must be an ISO8601 timestamp.")

    hours_ahead = req.hours_ahead if req.hours_ahead is not None else UPCOMING_WINDOW_HOURS
    weekday = weekday_of(now)
    logger.debug("day view for weekday={} over {} reminders", weekday, len(req.reminders))

    return DayViewResponse(
        weekday=weekday,
        today=reminders_for_day(req.reminders, weekday),
        upcoming=upcoming_reminders(req.reminders, now, hours_ahead),
        overdue=overdue_reminders(req.reminders, now),
        stats=reminder_stats(req.reminders, now, hours_ahead),
    )

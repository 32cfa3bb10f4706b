import re
from typing import Any, Dict, List, Literal, Optional, Set
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

ErrorKind = Literal["MISSING_TIME", "INVALID_FORMAT", "DUPLICATE_TIME"]

ERROR_MESSAGES: Dict[str, str] = {
    "MISSING_TIME": "Time is required",
    "INVALID_FORMAT": "Please enter time in HH:MM format (e.g., 09:30)",
    "DUPLICATE_TIME": "Duplicate time - each reminder must be unique",
}

MISMATCH_WARNING = "Mismatch with doses per day"

NO_ACTIVE_REMINDERS = "Please add at least one active reminder"
NO_RECURRING_DAYS = "Please select at least one day for recurring reminders"

MAX_DOSES_PER_DAY = 24  # past this every generated dose repeats 08:00

# 24-hour clock, single-digit hour allowed ("9:30")
TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")

ALL_WEEKDAYS = frozenset(range(7))  # 0 = Sunday


class ReminderTime(BaseModel):
    """
    Wall-clock time of day, minute precision.
    Serialized (and compared) as canonical zero-padded "HH:MM".
    """
    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            m = TIME_RE.fullmatch(data)
            if not m:
                raise ValueError(ERROR_MESSAGES["INVALID_FORMAT"])
            return {"hour": int(m.group(1)), "minute": int(m.group(2))}
        return data

    @model_serializer
    def _to_string(self) -> str:
        return self.canonical

    @classmethod
    def __get_pydantic_json_schema__(cls, core_schema, handler) -> Dict[str, Any]:
        # documented on the wire as "HH:MM", not as the hour/minute object
        return {"type": "string", "pattern": TIME_RE.pattern, "examples": ["09:30"], "title": "ReminderTime"}

    @classmethod
    def parse(cls, raw: str) -> "ReminderTime":
        return cls.model_validate(raw)

    @property
    def canonical(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return self.canonical


class TimeError(BaseModel):
    kind: ErrorKind
    message: str


class ValidationResult(BaseModel):
    is_valid: bool
    time: Optional[ReminderTime] = None
    error: Optional[TimeError] = None

    @classmethod
    def ok(cls, time: ReminderTime) -> "ValidationResult":
        return cls(is_valid=True, time=time)

    @classmethod
    def fail(cls, kind: ErrorKind, time: Optional[ReminderTime] = None) -> "ValidationResult":
        return cls(is_valid=False, time=time, error=TimeError(kind=kind, message=ERROR_MESSAGES[kind]))


class ReminderSchedule(BaseModel):
    doses_per_day: int = Field(..., ge=0)
    times: List[ReminderTime] = Field(default_factory=list)


class RecurringReminder(BaseModel):
    time: ReminderTime
    days_of_week: Set[int] = Field(default_factory=set, description="0-6, Sunday to Saturday")
    is_active: bool = True
    is_recurring: bool = True
    label: Optional[str] = None
    title: Optional[str] = None

    @model_validator(mode="after")
    def _check_days(self) -> "RecurringReminder":
        bad = sorted(d for d in self.days_of_week if d not in ALL_WEEKDAYS)
        if bad:
            raise ValueError(f"days_of_week out of range 0-6: {bad}")
        return self

    def effective_days(self) -> frozenset:
        # one-shot reminders count as every day
        if not self.is_recurring:
            return ALL_WEEKDAYS
        return frozenset(self.days_of_week)

    def trigger_days(self) -> frozenset:
        # no specific days means the reminder fires daily
        if not self.days_of_week:
            return ALL_WEEKDAYS
        return self.effective_days()


class ReminderConflict(BaseModel):
    first: int
    second: int
    time: ReminderTime
    shared_days: List[int]


class ReminderStats(BaseModel):
    total_reminders: int
    active_reminders: int
    todays_reminders: int
    upcoming_reminders: int


# ---------------------------
# HTTP request / response
# ---------------------------

class DefaultTimesResponse(BaseModel):
    doses_per_day: int
    frequency: Optional[str] = None
    times: List[ReminderTime]
    display: List[str]


class ValidateTimeRequest(BaseModel):
    time: Optional[str] = None


class ValidateScheduleRequest(BaseModel):
    times: List[Optional[str]] = Field(default_factory=list)
    doses_per_day: Optional[int] = Field(default=None, ge=0)


class ValidateScheduleResponse(BaseModel):
    ok: bool
    errors: Dict[int, ValidationResult] = Field(default_factory=dict)
    warning: Optional[str] = None


class SortRequest(BaseModel):
    times: List[ReminderTime]


class SortResponse(BaseModel):
    times: List[ReminderTime]
    display: List[str]


class ConflictsRequest(BaseModel):
    reminders: List[RecurringReminder] = Field(default_factory=list)


class ConflictsResponse(BaseModel):
    has_conflicts: bool
    conflicts: List[ReminderConflict] = Field(default_factory=list)
    error: Optional[str] = None  # set when the reminder set cannot be saved as-is


class DayViewRequest(BaseModel):
    reminders: List[RecurringReminder] = Field(default_factory=list)
    now_iso: Optional[str] = None  # ISO8601; server local time when absent
    hours_ahead: Optional[int] = Field(default=None, ge=0, le=24)


class DayViewResponse(BaseModel):
    weekday: int
    today: List[RecurringReminder]
    upcoming: List[RecurringReminder]
    overdue: List[RecurringReminder]
    stats: ReminderStats

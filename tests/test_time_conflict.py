import pytest
from pydantic import ValidationError

from medisort_reminders.schemas.models import (
    NO_ACTIVE_REMINDERS,
    NO_RECURRING_DAYS,
    TIME_RE,
    RecurringReminder,
    ReminderTime,
    SortRequest,
)
from medisort_reminders.utils.time_conflict import detect_conflicts, minutes_to_hhmm, validate_reminders


def _rem(time, days=(), **kw):
    return RecurringReminder(time=time, days_of_week=set(days), **kw)


def test_overlapping_weekdays_conflict():
    found = detect_conflicts([_rem("09:00", {1, 2, 3}), _rem("09:00", {3, 4, 5})])
    assert len(found) == 1
    c = found[0]
    assert (c.first, c.second) == (0, 1)
    assert c.time.canonical == "09:00"
    assert c.shared_days == [3]


def test_disjoint_weekdays_do_not_conflict():
    assert detect_conflicts([_rem("09:00", {1, 2}), _rem("09:00", {3, 4})]) == []


def test_different_times_do_not_conflict():
    assert detect_conflicts([_rem("09:00", {1}), _rem("09:01", {1})]) == []


def test_times_compare_canonically():
    assert len(detect_conflicts([_rem("9:00", {1}), _rem("09:00", {1})])) == 1


def test_inactive_reminders_are_ignored():
    assert detect_conflicts([_rem("09:00", {1}), _rem("09:00", {1}, is_active=False)]) == []


def test_non_recurring_counts_as_every_day():
    found = detect_conflicts([_rem("07:30", is_recurring=False), _rem("07:30", {6})])
    assert [(c.first, c.second, c.shared_days) for c in found] == [(0, 1, [6])]


def test_recurring_without_days_shares_no_day():
    assert detect_conflicts([_rem("07:30"), _rem("07:30", {0, 6})]) == []
    assert detect_conflicts([_rem("07:30"), _rem("07:30", is_recurring=False)]) == []


def test_pairs_reported_in_index_order():
    reminders = [
        _rem("09:00", {1}),
        _rem("10:00", {1}),
        _rem("09:00", {1, 2}),
        _rem("10:00", {1}),
        _rem("09:00", {2}),
    ]
    pairs = [(c.first, c.second) for c in detect_conflicts(reminders)]
    assert pairs == [(0, 2), (1, 3), (2, 4)]


def test_empty_and_single_inputs():
    assert detect_conflicts([]) == []
    assert detect_conflicts([_rem("09:00", {1})]) == []


def test_minutes_to_hhmm_wraps_at_midnight():
    assert minutes_to_hhmm(0) == "00:00"
    assert minutes_to_hhmm(8 * 60 + 5) == "08:05"
    assert minutes_to_hhmm(24 * 60 + 60) == "01:00"


def test_reminder_time_value_semantics():
    assert ReminderTime.parse("9:05") == ReminderTime(hour=9, minute=5)
    assert str(ReminderTime.parse("9:05")) == "09:05"
    assert ReminderTime.parse("9:05").model_dump() == "09:05"
    assert len({ReminderTime.parse("9:05"), ReminderTime.parse("09:05")}) == 1


def test_reminder_time_is_immutable():
    t = ReminderTime.parse("09:00")
    with pytest.raises(ValidationError):
        t.hour = 10


@pytest.mark.parametrize("raw", ["25:00", "", "9"])
def test_reminder_time_rejects_bad_strings(raw):
    with pytest.raises(ValidationError):
        ReminderTime.parse(raw)


def test_weekdays_must_be_in_range():
    with pytest.raises(ValidationError):
        _rem("09:00", {7})


def test_validate_reminders_accepts_a_saveable_set():
    assert validate_reminders([_rem("09:00", {1}), _rem("21:00", is_recurring=False)]) is None


def test_validate_reminders_needs_an_active_reminder():
    assert validate_reminders([]) == NO_ACTIVE_REMINDERS
    assert validate_reminders([_rem("09:00", {1}, is_active=False)]) == "Please add at least one active reminder"


def test_validate_reminders_needs_days_for_recurring():
    assert validate_reminders([_rem("09:00", {1}), _rem("10:00")]) == NO_RECURRING_DAYS
    assert validate_reminders([_rem("10:00", is_active=False), _rem("09:00", {1})]) is None


def test_reminder_time_schema_is_hhmm_string():
    schema = ReminderTime.model_json_schema()
    assert schema["type"] == "string"
    assert schema["pattern"] == TIME_RE.pattern


def test_nested_reminder_time_schema_is_string():
    schema = SortRequest.model_json_schema()
    item = schema["properties"]["times"]["items"]
    if "$ref" in item:
        item = schema["$defs"][item["$ref"].split("/")[-1]]
    assert item["type"] == "string"

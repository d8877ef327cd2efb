"""Tests for habit field and date key validation."""

from __future__ import annotations

import pytest

from habitloop.services.validation import (
    normalize_days_of_week,
    validate_date_key,
    validate_habit_fields,
)


def test_validate_habit_fields_normalizes():
    fields = validate_habit_fields(
        title="  Morning walk ",
        days_of_week=(3, 1, 3),
        reminder_time=" 07:30 ",
        category="Flexible",
    )

    assert fields == {
        "title": "Morning walk",
        "days_of_week": [1, 3],
        "reminder_time": "07:30",
        "category": "flexible",
    }


def test_missing_category_defaults_to_essential():
    fields = validate_habit_fields(title="Water", days_of_week=[], reminder_time="")

    assert fields["category"] == "essential"
    assert fields["reminder_time"] is None
    assert fields["days_of_week"] == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": ""},
        {"title": "x" * 81},
        {"title": "Water", "reminder_time": "7:30"},
        {"title": "Water", "reminder_time": "24:00"},
        {"title": "Water", "category": "monthly"},
    ],
)
def test_invalid_fields(kwargs):
    kwargs.setdefault("days_of_week", [1])
    with pytest.raises(ValueError):
        validate_habit_fields(**kwargs)


@pytest.mark.parametrize("days", [[7], [-1], [True], ["1"], [1.0]])
def test_invalid_weekdays(days):
    with pytest.raises(ValueError):
        normalize_days_of_week(days)


def test_validate_date_key():
    assert validate_date_key("2024-02-29") == "2024-02-29"
    with pytest.raises(ValueError):
        validate_date_key("2024-02-30")

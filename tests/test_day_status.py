"""Tests for calendar day classification."""

from __future__ import annotations

from datetime import date

import pytest

from habitloop.services.day_status import (
    CompletionIndex,
    DayStatus,
    essentials_for_day,
    resolve_day_status,
    resolve_month,
    summarize_month,
)

MONDAY = date(2024, 6, 10)
SUNDAY = date(2024, 6, 9)


@pytest.fixture
def monday_habits(habit_factory):
    """Two essentials due Monday, plus habits that must not affect the status."""
    return {
        "water": habit_factory(title="Water", days_of_week=[1, 2, 3, 4, 5]),
        "walk": habit_factory(title="Walk", days_of_week=[1]),
        "guitar": habit_factory(title="Guitar", days_of_week=[1], category="flexible"),
        "old": habit_factory(title="Old", days_of_week=[1], archived=True),
    }


class TestResolveDayStatus:
    def test_one_of_two_done_is_partial(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["water"], [MONDAY])

        status = resolve_day_status(MONDAY, monday_habits.values(), completions)

        assert status == DayStatus.PARTIAL

    def test_nothing_done_is_missed(self, monday_habits):
        assert resolve_day_status(MONDAY, monday_habits.values(), []) == DayStatus.MISSED

    def test_all_essentials_done_is_full(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["water"], [MONDAY]) + completions_for(
            monday_habits["walk"], [MONDAY]
        )

        assert resolve_day_status(MONDAY, monday_habits.values(), completions) == DayStatus.FULL

    def test_no_essentials_due_is_none(self, monday_habits):
        assert resolve_day_status(SUNDAY, monday_habits.values(), []) == DayStatus.NONE

    def test_flexible_and_archived_completions_ignored(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["guitar"], [MONDAY]) + completions_for(
            monday_habits["old"], [MONDAY]
        )

        assert resolve_day_status(MONDAY, monday_habits.values(), completions) == DayStatus.MISSED

    def test_completion_on_other_day_does_not_count(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["water"], [SUNDAY])

        assert resolve_day_status(MONDAY, monday_habits.values(), completions) == DayStatus.MISSED

    def test_prebuilt_index_matches_raw_completions(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["walk"], [MONDAY])
        index = CompletionIndex.build(completions)

        assert resolve_day_status(MONDAY, monday_habits.values(), index) == resolve_day_status(
            MONDAY, monday_habits.values(), completions
        )
        assert index.completed_on("2024-06-10") == frozenset({monday_habits["walk"].id})
        assert index.completed_on(SUNDAY) == frozenset()


class TestMonthView:
    def test_grid_covers_whole_weeks(self, monday_habits):
        days = resolve_month(2024, 6, monday_habits.values(), [])

        assert days[0].day == date(2024, 5, 26)
        assert days[-1].day == date(2024, 7, 6)
        assert len(days) % 7 == 0
        assert not days[0].in_month
        assert days[6].in_month

    def test_summary_counts_only_in_month_days(self, habit_factory, completions_for):
        habit = habit_factory(title="Water", days_of_week=[1, 2, 3, 4, 5])
        completions = completions_for(habit, [date(2024, 6, 3), date(2024, 6, 4)])

        summary = summarize_month(resolve_month(2024, 6, [habit], completions))

        # June 2024 has 20 weekdays
        assert summary.full == 2
        assert summary.partial == 0
        assert summary.missed == 18

    def test_essentials_for_day_lists_done_flags(self, monday_habits, completions_for):
        completions = completions_for(monday_habits["walk"], [MONDAY])

        rows = essentials_for_day(MONDAY, monday_habits.values(), completions)

        assert [(habit.title, done) for habit, done in rows] == [("Water", False), ("Walk", True)]

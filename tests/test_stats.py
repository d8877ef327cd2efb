"""Tests for completion rates and the daily checklist."""

from __future__ import annotations

from datetime import date

from habitloop.services.calendar import iter_days
from habitloop.services.stats import completion_rate, daily_progress

MONDAY = date(2024, 6, 10)
WEEKDAYS = [1, 2, 3, 4, 5]


class TestCompletionRate:
    def test_rate_uses_due_days_as_denominator(self, habit_factory, completions_for):
        water = habit_factory(title="Water", days_of_week=WEEKDAYS)
        completions = completions_for(water, iter_days(date(2024, 6, 4), date(2024, 6, 7)))

        # Due in the window 06-04..06-10: Tue-Fri plus Monday the 10th
        assert completion_rate(water, completions, MONDAY, window_days=7) == 80

    def test_full_window(self, habit_factory, completions_for):
        habit = habit_factory()
        completions = completions_for(habit, iter_days(date(2024, 5, 1), MONDAY))

        assert completion_rate(habit, completions, MONDAY, window_days=30) == 100

    def test_nothing_due_gives_zero(self, habit_factory):
        habit = habit_factory(days_of_week=[])

        assert completion_rate(habit, [], MONDAY, window_days=7) == 0
        assert completion_rate(habit_factory(), [], MONDAY, window_days=0) == 0

    def test_rounds_to_whole_percent(self, habit_factory, completions_for):
        habit = habit_factory(days_of_week=[1])
        completions = completions_for(habit, [date(2024, 6, 3)])

        # Mondays in the last 21 days: 05-27, 06-03, 06-10
        assert completion_rate(habit, completions, MONDAY, window_days=21) == 33


class TestDailyProgress:
    def test_splits_essentials_and_others(self, habit_factory, completions_for):
        water = habit_factory(title="Water", days_of_week=WEEKDAYS)
        walk = habit_factory(title="Walk", days_of_week=[1])
        guitar = habit_factory(title="Guitar", category="flexible")
        sunday_only = habit_factory(title="Plan week", days_of_week=[0])
        archived = habit_factory(title="Old", archived=True)
        completions = completions_for(water, [MONDAY]) + completions_for(guitar, [MONDAY])

        progress = daily_progress([water, walk, guitar, sunday_only, archived], completions, MONDAY)

        assert [habit.title for habit in progress.essentials] == ["Water", "Walk"]
        assert [habit.title for habit in progress.others] == ["Guitar"]
        assert progress.completed_ids == {water.id, guitar.id}
        assert progress.essential_percent == 50
        assert progress.all_essentials_done is False

    def test_all_essentials_done(self, habit_factory, completions_for):
        water = habit_factory(title="Water")
        progress = daily_progress([water], completions_for(water, [MONDAY]), MONDAY)

        assert progress.essential_percent == 100
        assert progress.all_essentials_done is True

    def test_no_essentials_today(self, habit_factory):
        progress = daily_progress([habit_factory(days_of_week=[0])], [], MONDAY)

        assert progress.essentials == []
        assert progress.essential_percent == 0
        assert progress.all_essentials_done is False

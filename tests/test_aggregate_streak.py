"""Tests for the weakest-link headline streak."""

from __future__ import annotations

from datetime import date, timedelta

from habitloop.services.aggregate import aggregate_streak, group_by_habit
from habitloop.services.streaks import StreakPolicy

MONDAY = date(2024, 6, 10)


def _last_days(count: int) -> list[date]:
    return [MONDAY - timedelta(days=i) for i in range(1, count + 1)]


def test_minimum_of_essential_streaks(habit_factory, completions_for):
    strong = habit_factory(title="Water")
    weak = habit_factory(title="Walk")
    completions = completions_for(strong, _last_days(5)) + completions_for(weak, _last_days(2))

    assert aggregate_streak([strong, weak], completions, MONDAY) == 2


def test_no_essentials_returns_zero(habit_factory, completions_for):
    flexible = habit_factory(title="Guitar", category="flexible")
    completions = completions_for(flexible, _last_days(10))

    assert aggregate_streak([flexible], completions, MONDAY) == 0
    assert aggregate_streak([], [], MONDAY) == 0


def test_archived_and_non_essential_habits_do_not_drag_down(habit_factory, completions_for):
    water = habit_factory(title="Water")
    archived = habit_factory(title="Old", archived=True)
    weekly = habit_factory(title="Review", category="weekly")
    completions = completions_for(water, _last_days(4))

    assert aggregate_streak([water, archived, weekly], completions, MONDAY) == 4


def test_one_missed_essential_zeroes_headline(habit_factory, completions_for):
    water = habit_factory(title="Water")
    never = habit_factory(title="Never done")
    completions = completions_for(water, _last_days(30))

    assert aggregate_streak([water, never], completions, MONDAY) == 0


def test_policy_is_applied_to_every_habit(habit_factory, completions_for):
    water = habit_factory(title="Water")
    walk = habit_factory(title="Walk")
    days = [day for day in _last_days(6) if day != MONDAY - timedelta(days=2)]
    completions = completions_for(water, days) + completions_for(walk, days)

    assert aggregate_streak([water, walk], completions, MONDAY) == 1
    assert aggregate_streak([water, walk], completions, MONDAY, policy=StreakPolicy(grace_days=1)) == 5


def test_group_by_habit(habit_factory, completions_for):
    water = habit_factory(title="Water")
    walk = habit_factory(title="Walk")
    completions = completions_for(water, _last_days(3)) + completions_for(walk, _last_days(1))

    grouped = group_by_habit(completions)

    assert len(grouped[water.id]) == 3
    assert len(grouped[walk.id]) == 1

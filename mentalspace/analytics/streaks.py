"""
Streak calculation over activity dates.
"""

from datetime import date, timedelta
from typing import Iterable, List, Set

from mentalspace.analytics.models import DailyPlan, DayLike, StreakInfo, parse_day

ONE_DAY = timedelta(days=1)


def _distinct_days(dates: Iterable[DayLike], today: date) -> Set[date]:
    # Dates after today cannot extend a streak
    return {d for d in (parse_day(value) for value in dates) if d <= today}


def current_streak(dates: Iterable[DayLike], today: date) -> int:
    """
    Consecutive days of activity ending today or yesterday.

    Algorithm:
        1. If the most recent date is not today or yesterday, return 0
        2. Walk backward day by day while the prior day is present
        3. Stop at the first gap
    """
    days = _distinct_days(dates, today)
    if not days:
        return 0

    most_recent = max(days)
    if most_recent not in (today, today - ONE_DAY):
        return 0

    streak = 0
    expected = most_recent
    while expected in days:
        streak += 1
        expected -= ONE_DAY

    return streak


def longest_streak(dates: Iterable[DayLike]) -> int:
    """Longest run of day-over-day contiguous dates, independent of recency."""
    days: List[date] = sorted({parse_day(value) for value in dates})
    if not days:
        return 0

    longest = current = 1
    for previous, day in zip(days, days[1:]):
        if day - previous == ONE_DAY:
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest


def completion_dates(plans: Iterable[DailyPlan]) -> List[date]:
    """Days whose plan had at least one completed action."""
    return [plan.date for plan in plans if plan.completed_count > 0]


def calculate_streaks(
    checkin_dates: Iterable[DayLike],
    today: date,
    plans: Iterable[DailyPlan] = (),
) -> StreakInfo:
    checkin_dates = list(checkin_dates)
    done = completion_dates(plans)
    return StreakInfo(
        current_checkin_streak=current_streak(checkin_dates, today),
        longest_checkin_streak=longest_streak(checkin_dates),
        current_completion_streak=current_streak(done, today),
        longest_completion_streak=longest_streak(done),
    )

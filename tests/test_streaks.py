"""Unit tests for streak calculation."""

from mentalspace.analytics.models import DailyPlan, PlannedAction
from mentalspace.analytics.streaks import calculate_streaks, current_streak, longest_streak
from tests.conftest import TODAY, days_ago


def plan_for(day, completed):
    return DailyPlan(
        date=day,
        actions=[
            PlannedAction(id="a", action_id="a", title="A", category="coping", duration=2, completed=completed),
        ],
    )


class TestCurrentStreak:
    def test_three_consecutive_days_ending_today(self):
        dates = [days_ago(0), days_ago(1), days_ago(2)]

        assert current_streak(dates, TODAY) == 3

    def test_gap_stops_the_walk(self):
        assert current_streak([days_ago(0), days_ago(3)], TODAY) == 1

    def test_no_dates(self):
        assert current_streak([], TODAY) == 0

    def test_stale_most_recent_date_breaks_streak(self):
        assert current_streak([days_ago(2), days_ago(3), days_ago(4)], TODAY) == 0

    def test_streak_may_end_yesterday(self):
        assert current_streak([days_ago(1), days_ago(2)], TODAY) == 2

    def test_duplicates_do_not_inflate(self):
        dates = [days_ago(0).isoformat(), days_ago(0).isoformat(), days_ago(1).isoformat()]

        assert current_streak(dates, TODAY) == 2

    def test_future_dates_ignored(self):
        assert current_streak([days_ago(-1), days_ago(0)], TODAY) == 1


class TestLongestStreak:
    def test_longest_run_independent_of_recency(self):
        dates = [days_ago(n) for n in (30, 29, 28, 27, 10, 9, 0)]

        assert longest_streak(dates) == 4

    def test_single_date(self):
        assert longest_streak([days_ago(5)]) == 1

    def test_no_dates(self):
        assert longest_streak([]) == 0


class TestCalculateStreaks:
    def test_checkin_and_completion_streaks(self):
        checkin_dates = [days_ago(n) for n in range(5)]
        plans = [
            plan_for(days_ago(0), completed=True),
            plan_for(days_ago(1), completed=True),
            plan_for(days_ago(2), completed=False),
            plan_for(days_ago(3), completed=True),
        ]

        info = calculate_streaks(checkin_dates, TODAY, plans)

        assert info.current_checkin_streak == 5
        assert info.longest_checkin_streak == 5
        assert info.current_completion_streak == 2
        assert info.longest_completion_streak == 2

    def test_to_dict_keys(self):
        info = calculate_streaks([], TODAY)

        assert info.to_dict() == {
            "currentCheckinStreak": 0,
            "longestCheckinStreak": 0,
            "currentCompletionStreak": 0,
            "longestCompletionStreak": 0,
        }

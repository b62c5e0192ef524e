"""Unit tests for weekly summary aggregation and the all-settled batch runner."""

import asyncio
from datetime import date

import pytest

from mentalspace.analytics.models import DailyPlan, MetricTrend, PlannedAction
from mentalspace.analytics.weekly import (
    build_weekly_summary,
    completion_rate,
    generate_insights,
    run_all_settled,
    top_actions,
    week_window,
)
from tests.conftest import TODAY, days_ago, make_checkin


def counted_plan(day, completed, total):
    return DailyPlan(date=day, stored_completed_count=completed, stored_total_count=total)


def plan_with(day, *actions):
    return DailyPlan(
        date=day,
        actions=[
            PlannedAction(
                id=f"{day}-{i}",
                action_id=action_id,
                title=action_id.title(),
                category="coping",
                duration=2,
                completed=done,
            )
            for i, (action_id, done) in enumerate(actions)
        ],
    )


# ─────────────────────────────────────────────────────────────────
# completion_rate
# ─────────────────────────────────────────────────────────────────


class TestCompletionRate:
    def test_six_of_eight(self):
        plans = [counted_plan(days_ago(2), 3, 4), counted_plan(days_ago(1), 3, 4)]

        assert completion_rate(plans) == 75

    def test_no_actions_is_zero(self):
        assert completion_rate([]) == 0
        assert completion_rate([counted_plan(days_ago(1), 0, 0)]) == 0

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        assert completion_rate([counted_plan(days_ago(1), 1, 8)]) == 13

    def test_counts_from_actions_when_not_stored(self):
        plan = plan_with(days_ago(1), ("a", True), ("b", False), ("c", True))

        assert completion_rate([plan]) == 67


# ─────────────────────────────────────────────────────────────────
# generate_insights
# ─────────────────────────────────────────────────────────────────


class TestGenerateInsights:
    def test_improving_metrics_first_then_praise(self):
        metrics = {
            "mood": MetricTrend(average=6, trend="improving", values=[5, 7]),
            "stress": MetricTrend(average=3, trend="improving", values=[4, 2]),
        }

        insights = generate_insights(metrics, 85)

        assert insights == [
            "Your mood has been improving this week!",
            "Your stress has been improving this week!",
            "Great job completing your action plans!",
        ]

    def test_capped_at_three(self):
        metrics = {
            key: MetricTrend(average=3, trend="improving", values=[2, 4])
            for key in ("mood", "stress", "sleep", "energy")
        }

        assert len(generate_insights(metrics, 90)) == 3

    def test_low_completion_nudge(self):
        insights = generate_insights({}, 40)

        assert insights == ["Try to complete more actions next week for better results."]

    def test_zero_rate_gets_no_completion_comment(self):
        assert generate_insights({}, 0) == []

    def test_low_mood_safety_nudge(self):
        metrics = {"mood": MetricTrend(average=3.5, trend="stable", values=[3, 4])}

        insights = generate_insights(metrics, 60)

        assert insights == ["Your mood has been lower than usual. Consider reaching out for support."]


# ─────────────────────────────────────────────────────────────────
# top_actions
# ─────────────────────────────────────────────────────────────────


class TestTopActions:
    def test_ranked_by_completions(self):
        plans = [
            plan_with(days_ago(3), ("walk", True), ("breathe", True)),
            plan_with(days_ago(2), ("breathe", True), ("call", False)),
            plan_with(days_ago(1), ("breathe", True), ("walk", True)),
        ]

        result = top_actions(plans)

        assert [(a.action_id, a.completed_count) for a in result] == [("breathe", 3), ("walk", 2)]

    def test_limit(self):
        plans = [plan_with(days_ago(1), *[(f"a{i}", True) for i in range(7)])]

        assert len(top_actions(plans, limit=5)) == 5


# ─────────────────────────────────────────────────────────────────
# build_weekly_summary
# ─────────────────────────────────────────────────────────────────


class TestBuildWeeklySummary:
    def test_week_window_is_the_seven_days_before_run_date(self):
        assert week_window(TODAY) == (date(2026, 3, 11), date(2026, 3, 17))

    def test_summary_for_week(self):
        week_start, week_end = week_window(TODAY)
        checkins = [make_checkin(days_ago(n), mood=5 + (n < 4)) for n in range(1, 8)]
        plans = [counted_plan(days_ago(2), 3, 4), counted_plan(days_ago(1), 3, 4)]

        summary = build_weekly_summary(
            week_start, week_end, checkins, plans,
            checkin_dates=[c.date for c in checkins],
            today=TODAY,
        )

        assert summary.completion_rate == 75
        assert summary.metrics["mood"].values == [5, 5, 5, 5, 6, 6, 6]
        assert summary.streaks.current_checkin_streak == 7
        assert summary.to_document()["weekStart"] == "2026-03-11"

    def test_checkins_outside_window_excluded(self):
        week_start, week_end = week_window(TODAY)
        checkins = [make_checkin(days_ago(0)), make_checkin(days_ago(8))]

        assert build_weekly_summary(week_start, week_end, checkins, [], [], TODAY) is None

    def test_no_checkins_means_no_summary(self):
        week_start, week_end = week_window(TODAY)

        assert build_weekly_summary(week_start, week_end, [], [], [], TODAY) is None


# ─────────────────────────────────────────────────────────────────
# run_all_settled
# ─────────────────────────────────────────────────────────────────


class TestRunAllSettled:
    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_others(self):
        summarized = []

        async def worker(user_id):
            if user_id == "B":
                raise ValueError("corrupt check-in")
            summarized.append(user_id)
            return True

        result = await run_all_settled(["A", "B", "C"], worker)

        assert result.successful == 2
        assert result.failed == 1
        assert result.errors == {"B": "corrupt check-in"}
        assert sorted(summarized) == ["A", "C"]

    @pytest.mark.asyncio
    async def test_skipped_users_counted(self):
        async def worker(user_id):
            return user_id != "idle"

        result = await run_all_settled(["A", "idle"], worker)

        assert result.successful == 2
        assert result.skipped == 1
        assert result.failed == 0

    @pytest.mark.asyncio
    async def test_concurrency_limit(self):
        in_flight = 0
        peak = 0

        async def worker(user_id):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0)
            in_flight -= 1
            return True

        result = await run_all_settled([str(i) for i in range(6)], worker, concurrency=2)

        assert result.successful == 6
        assert peak <= 2

    @pytest.mark.asyncio
    async def test_no_users(self):
        async def worker(user_id):
            return True

        result = await run_all_settled([], worker)

        assert result.to_dict() == {"successful": 0, "failed": 0, "skipped": 0, "errors": {}}

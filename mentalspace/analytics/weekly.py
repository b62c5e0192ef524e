"""
Weekly summary aggregation and the all-settled batch runner.

build_weekly_summary() is pure. run_all_settled() fans a per-user
coroutine out over every user and collects outcomes without stopping at
the first failure.
"""

import asyncio
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from mentalspace.analytics.constants import (
    DEFAULT_THRESHOLDS,
    METRIC_KEYS,
    METRIC_LABELS,
    TREND_IMPROVING,
    AnalyticsThresholds,
)
from mentalspace.analytics.metric_summary import summarize_checkins
from mentalspace.analytics.models import (
    ActionSummary,
    CheckIn,
    DailyPlan,
    DayLike,
    MetricTrend,
    WeeklySummary,
)
from mentalspace.analytics.streaks import calculate_streaks


def week_window(run_date: date, thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS) -> Tuple[date, date]:
    """The complete days before run_date: (week_start, week_end), inclusive."""
    return run_date - timedelta(days=thresholds.summary_window_days), run_date - timedelta(days=1)


def completion_rate(plans: Iterable[DailyPlan]) -> int:
    """Completed over total planned actions as a 0-100 percentage; 0 without actions."""
    completed = total = 0
    for plan in plans:
        completed += plan.completed_count
        total += plan.total_count
    if total == 0:
        return 0
    rate = Decimal(completed * 100) / Decimal(total)
    return int(rate.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def generate_insights(
    metrics: Dict[str, MetricTrend],
    rate: int,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[str]:
    """
    Up to max_insights short observations.

    Order: improving metrics, completion-rate commentary, low-mood nudge.
    """
    insights = []

    for metric in METRIC_KEYS:
        summary = metrics.get(metric)
        if summary is not None and summary.trend == TREND_IMPROVING:
            insights.append(f"Your {METRIC_LABELS[metric].lower()} has been improving this week!")

    if rate >= thresholds.completion_praise_rate:
        insights.append("Great job completing your action plans!")
    elif 0 < rate < thresholds.completion_nudge_rate:
        insights.append("Try to complete more actions next week for better results.")

    mood = metrics.get("mood")
    if mood is not None and mood.values and mood.average <= thresholds.low_mood_average:
        insights.append("Your mood has been lower than usual. Consider reaching out for support.")

    return insights[: thresholds.max_insights]


def top_actions(plans: Iterable[DailyPlan], limit: int = DEFAULT_THRESHOLDS.top_actions_limit) -> List[ActionSummary]:
    """Most frequently completed actions by action id; first seen wins ties."""
    counts: "OrderedDict[str, ActionSummary]" = OrderedDict()
    for plan in plans:
        for action in plan.actions:
            if not action.completed:
                continue
            summary = counts.get(action.action_id)
            if summary is None:
                summary = counts[action.action_id] = ActionSummary(
                    action_id=action.action_id,
                    title=action.title,
                    category=action.category,
                    completed_count=0,
                )
            summary.completed_count += 1

    ranked = sorted(counts.values(), key=lambda a: a.completed_count, reverse=True)
    return ranked[:limit]


def build_weekly_summary(
    week_start: date,
    week_end: date,
    checkins: Iterable[CheckIn],
    plans: Iterable[DailyPlan],
    checkin_dates: Iterable[DayLike],
    today: date,
    all_plans: Optional[Iterable[DailyPlan]] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[WeeklySummary]:
    """
    Summarize one user's week.

    Args:
        week_start / week_end: Inclusive window
        checkins: Check-ins, filtered to the window here
        plans: Daily plans, filtered to the window here
        checkin_dates: Check-in dates for streaks (up to a year back)
        today: Reference day for current streaks
        all_plans: Plans for completion streaks; defaults to plans

    Returns:
        WeeklySummary, or None when the window has no check-ins
    """
    window = [c for c in checkins if week_start <= c.date <= week_end]
    if not window:
        return None

    plans = list(plans)
    week_plans = [p for p in plans if week_start <= p.date <= week_end]

    metrics = summarize_checkins(window, thresholds)
    rate = completion_rate(week_plans)

    return WeeklySummary(
        week_start=week_start,
        week_end=week_end,
        metrics=metrics,
        completion_rate=rate,
        streaks=calculate_streaks(checkin_dates, today, plans if all_plans is None else all_plans),
        insights=generate_insights(metrics, rate, thresholds),
        top_actions=top_actions(week_plans, thresholds.top_actions_limit),
    )


@dataclass
class BatchResult:
    """Outcome counts of an all-settled batch; skipped users count as successful."""
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successful": self.successful,
            "failed": self.failed,
            "skipped": self.skipped,
            "errors": dict(self.errors),
        }


async def run_all_settled(
    user_ids: Sequence[str],
    worker: Callable[[str], Awaitable[bool]],
    concurrency: Optional[int] = None,
) -> BatchResult:
    """
    Run worker(user_id) for every user and wait for all of them.

    The worker returns True when it wrote a summary and False when it
    skipped the user. An exception in one worker never cancels the others.

    Args:
        user_ids: Users to process
        worker: Per-user coroutine function
        concurrency: Maximum workers in flight, unbounded when None
    """
    semaphore = asyncio.Semaphore(concurrency) if concurrency else None

    async def _guarded(user_id: str) -> bool:
        if semaphore is None:
            return await worker(user_id)
        async with semaphore:
            return await worker(user_id)

    outcomes = await asyncio.gather(*(_guarded(u) for u in user_ids), return_exceptions=True)

    result = BatchResult()
    for user_id, outcome in zip(user_ids, outcomes):
        if isinstance(outcome, BaseException):
            result.failed += 1
            result.errors[user_id] = str(outcome) or type(outcome).__name__
            continue
        result.successful += 1
        if outcome is False:
            result.skipped += 1
    return result

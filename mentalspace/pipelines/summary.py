"""
Weekly summary pipeline functions.

Per-user summary generation and the all-users batch used by the weekly job.
"""

import logging
from datetime import date, timedelta
from typing import Optional, Dict, Any

from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.models import CheckIn, DailyPlan
from mentalspace.analytics.weekly import BatchResult, build_weekly_summary, run_all_settled, week_window
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService

logger = logging.getLogger(__name__)


async def generate_user_summary_pipeline(
    checkin_service: CheckInService,
    plan_service: PlanService,
    summary_service: WeeklySummaryService,
    user_id: str,
    run_date: date,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> bool:
    """
    Summarize one user's last complete week.

    Args:
        run_date: Day the job runs; the week is the 7 days before it

    Returns:
        True if a summary was written, False if the user was skipped
    """
    week_start, week_end = week_window(run_date, thresholds)

    checkin_docs = await checkin_service.get_checkins_between(
        user_id, week_start.isoformat(), week_end.isoformat()
    )
    if not checkin_docs:
        logger.info(f"No check-ins for user {user_id} this week, skipping summary")
        return False

    since = (run_date - timedelta(days=thresholds.streak_lookback_days)).isoformat()
    checkin_dates = await checkin_service.get_checkin_dates(user_id, since)
    plan_docs = await plan_service.get_plans_between(user_id, since, run_date.isoformat())

    summary = build_weekly_summary(
        week_start=week_start,
        week_end=week_end,
        checkins=[CheckIn.from_document(d) for d in checkin_docs],
        plans=[DailyPlan.from_document(p) for p in plan_docs],
        checkin_dates=checkin_dates,
        today=run_date,
        thresholds=thresholds,
    )
    if summary is None:
        return False

    await summary_service.save_summary(user_id, summary)
    logger.info(f"Weekly summary generated for user {user_id}")
    return True


async def generate_weekly_summaries_pipeline(
    checkin_service: CheckInService,
    plan_service: PlanService,
    summary_service: WeeklySummaryService,
    run_date: date,
    concurrency: Optional[int] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> BatchResult:
    """
    Summarize every user; one user's failure never stops the others.

    Returns:
        BatchResult with successful/failed/skipped counts
    """
    user_ids = await summary_service.get_user_ids()
    logger.info(f"Starting weekly summary generation for {len(user_ids)} users")

    async def _summarize(user_id: str) -> bool:
        return await generate_user_summary_pipeline(
            checkin_service, plan_service, summary_service, user_id, run_date, thresholds
        )

    result = await run_all_settled(user_ids, _summarize, concurrency=concurrency)

    for user_id, error in result.errors.items():
        logger.error(f"Weekly summary failed for user {user_id}: {error}")

    logger.info(
        f"Weekly summaries generated: {result.successful} successful, "
        f"{result.failed} failed ({result.skipped} skipped)"
    )
    return result


async def get_latest_summary_pipeline(
    summary_service: WeeklySummaryService,
    user_id: str
) -> Dict[str, Any]:
    """
    The most recent weekly summary.

    Returns:
        dict with hasSummary and summary
    """
    doc = await summary_service.get_latest(user_id)
    if not doc:
        return {"hasSummary": False, "summary": None}

    return {"hasSummary": True, "summary": format_summary(doc)}


async def list_summaries_pipeline(
    summary_service: WeeklySummaryService,
    user_id: str,
    limit: int = 12
) -> Dict[str, Any]:
    """Past weekly summaries, newest first."""
    docs = await summary_service.list_summaries(user_id, limit=limit)
    return {"summaries": [format_summary(d) for d in docs]}


def format_summary(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Format weekly summary document for API response."""
    summary = {k: v for k, v in doc.items() if k not in ("_id", "userId")}
    summary["id"] = str(doc["_id"])
    return summary

"""
Check-in system pipeline functions.

Stateless orchestration logic for check-in operations.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from common.utils.exceptions import NotFoundException
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, METRIC_KEYS, AnalyticsThresholds
from mentalspace.analytics.crisis_detector import evaluate_checkin
from mentalspace.analytics.models import CheckIn
from mentalspace.pipelines.plan import format_plan, generate_plan_pipeline
from mentalspace.pipelines.predictive import evaluate_bad_day_pipeline, format_bad_day_state
from mentalspace.services.checkin.checkin_analytics import CheckInAnalytics
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.crisis.crisis_event_service import CrisisEventService
from mentalspace.services.notifications.alert_notifier import AlertNotifier
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService

logger = logging.getLogger(__name__)


async def submit_checkin_pipeline(
    checkin_service: CheckInService,
    checkin_analytics: CheckInAnalytics,
    plan_service: PlanService,
    crisis_event_service: CrisisEventService,
    bad_day_service: BadDayService,
    trigger_date_service: TriggerDateService,
    notifier: AlertNotifier,
    user_id: str,
    metrics: Dict[str, int],
    journal_entry: Optional[str] = None,
    now: Optional[datetime] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> Dict[str, Any]:
    """
    Orchestrates the check-in submission flow.

    1. Store the check-in (validated, one per day)
    2. Evaluate crisis indicators and flag the check-in
    3. Run the bad-day transition with today's mood
    4. Shape and store today's plan
    5. Recompute streaks

    Args:
        user_id: Current user's ID
        metrics: The six check-in metrics
        journal_entry: Optional journal text

    Returns:
        Response dict with checkin, crisis, badDayMode, plan and streaks
    """
    now = now or datetime.now(timezone.utc)

    doc = await checkin_service.submit_checkin(user_id, metrics, journal_entry, now=now)
    checkin = CheckIn.from_document(doc)

    # Enough history for the low-mood window ending today
    history = await checkin_service.get_checkins_for_period(
        user_id, thresholds.consecutive_low_days, now=now
    )
    assessment = evaluate_checkin(
        checkin,
        [CheckIn.from_document(h) for h in history],
        thresholds,
    )

    if assessment is not None:
        doc["crisisDetected"] = True
        # Crisis bookkeeping never fails the check-in itself
        try:
            await checkin_service.mark_crisis_detected(doc["_id"])
            await crisis_event_service.record_event(user_id, doc["_id"], assessment, now=now)
            await notifier.notify_crisis(user_id, assessment)
        except Exception as e:
            logger.warning(f"Failed to record crisis indicator for user {user_id}: {e}")

    state = await evaluate_bad_day_pipeline(
        bad_day_service,
        plan_service,
        trigger_date_service,
        user_id,
        now=now,
        checkin_mood=checkin.mood,
        checkin_at=now,
        thresholds=thresholds,
    )

    plan = await generate_plan_pipeline(
        plan_service,
        user_id,
        checkin,
        doc["_id"],
        state,
        thresholds,
    )

    streaks = await checkin_analytics.calculate_streaks(user_id, now=now)

    return {
        "checkin": format_checkin(doc),
        "crisis": assessment.to_dict() if assessment else None,
        "badDayMode": format_bad_day_state(state),
        "plan": format_plan(plan),
        "streaks": streaks.to_dict(),
    }


async def get_today_checkin_pipeline(
    checkin_service: CheckInService,
    user_id: str,
    now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Get today's check-in status.

    Returns:
        dict with hasCheckedInToday flag and checkin data
    """
    checkin = await checkin_service.get_today_checkin(user_id, now=now)

    return {
        "hasCheckedInToday": checkin is not None,
        "checkin": format_checkin(checkin) if checkin else None
    }


async def get_history_pipeline(
    checkin_service: CheckInService,
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    limit: int = 30,
    offset: int = 0
) -> Dict[str, Any]:
    """
    Get check-in history with pagination.

    Returns:
        dict with checkins list and pagination metadata
    """
    checkins = await checkin_service.get_history(
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset
    )

    total = await checkin_service.get_total_count(
        user_id=user_id,
        start_date=start_date,
        end_date=end_date
    )

    return {
        "checkins": [format_checkin(c) for c in checkins],
        "total": total,
        "limit": limit,
        "offset": offset,
        "hasMore": (offset + len(checkins)) < total
    }


async def get_streak_pipeline(
    checkin_analytics: CheckInAnalytics,
    user_id: str
) -> Dict[str, int]:
    """Current and longest check-in and completion streaks."""
    streaks = await checkin_analytics.calculate_streaks(user_id)
    return streaks.to_dict()


async def get_trends_pipeline(
    checkin_analytics: CheckInAnalytics,
    user_id: str,
    period: int = 30
) -> Dict[str, Any]:
    """Per-metric trends over 7, 30 or 90 days."""
    return await checkin_analytics.get_trends(user_id, period)


async def acknowledge_crisis_pipeline(
    checkin_service: CheckInService,
    crisis_event_service: CrisisEventService,
    user_id: str,
    date: str
) -> Dict[str, Any]:
    """
    Record that the user saw and acknowledged a crisis prompt.

    Raises:
        NotFoundException: No flagged check-in on that date
    """
    checkin = await checkin_service.get_checkin(user_id, date)
    if not checkin or not checkin.get("crisisDetected"):
        raise NotFoundException(message="No crisis prompt for this check-in", code="CRISIS_NOT_FOUND")

    await checkin_service.acknowledge_crisis(user_id, date)
    await crisis_event_service.acknowledge_for_checkin(user_id, checkin["_id"])

    checkin["crisisHandled"] = True
    return format_checkin(checkin)


def format_checkin(checkin: Dict[str, Any]) -> Dict[str, Any]:
    """Format check-in document for API response."""
    parsed = CheckIn.from_document(checkin)
    return {
        "id": str(checkin["_id"]),
        "date": checkin["date"],
        "metrics": {key: parsed.metric(key) for key in METRIC_KEYS},
        "journalEntry": checkin.get("journalEntry"),
        "crisisDetected": checkin.get("crisisDetected", False),
        "crisisHandled": checkin.get("crisisHandled", False),
        "createdAt": checkin.get("createdAt"),
    }

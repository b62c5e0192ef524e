"""
Daily plan pipeline functions.

Stateless orchestration for plan generation and action status updates.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from bson import ObjectId

from mentalspace.analytics.bad_day_mode import message_for
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.models import BadDayState, CheckIn
from mentalspace.analytics.plan_shaping import ActionTemplate, shape_daily_plan
from mentalspace.pipelines.predictive import evaluate_bad_day_pipeline
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService

logger = logging.getLogger(__name__)


async def generate_plan_pipeline(
    plan_service: PlanService,
    user_id: str,
    checkin: CheckIn,
    checkin_id: Optional[ObjectId],
    state: BadDayState,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> Dict[str, Any]:
    """
    Build and store the plan for the check-in's day.

    Args:
        plan_service: For the action library and plan storage
        user_id: Current user's ID
        checkin: The check-in the plan is shaped for
        checkin_id: Stored check-in ID to reference
        state: Bad-day state after today's transition

    Returns:
        Plan document (an existing plan for the day is kept as is)
    """
    plan_date = checkin.date.isoformat()
    existing = await plan_service.get_plan(user_id, plan_date)
    if existing:
        return existing

    library = [ActionTemplate.from_document(d) for d in await plan_service.get_action_library()]
    recently_used = await plan_service.get_recent_action_ids(
        user_id, checkin.date, thresholds.recent_action_days
    )

    actions = shape_daily_plan(library, checkin, state, recently_used, thresholds=thresholds)
    if not actions:
        logger.warning(f"Action library produced no actions for user {user_id}")

    return await plan_service.create_plan(
        user_id=user_id,
        plan_date=plan_date,
        checkin_id=checkin_id,
        actions=actions,
        bad_day_mode=state.active,
    )


async def get_today_plan_pipeline(
    plan_service: PlanService,
    bad_day_service: BadDayService,
    trigger_date_service: TriggerDateService,
    user_id: str,
    now: Optional[datetime] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> Dict[str, Any]:
    """
    Today's plan with the message text for the current mode.

    The bad-day state is re-evaluated first, so a mode activated on an
    earlier day has already expired when the message is picked.

    Returns:
        dict with hasPlan, plan and message
    """
    now = now or datetime.now(timezone.utc)
    plan = await plan_service.get_plan(user_id, now.strftime("%Y-%m-%d"))
    state = await evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        now=now, thresholds=thresholds
    )

    return {
        "hasPlan": plan is not None,
        "plan": format_plan(plan) if plan else None,
        "message": message_for("plan", state),
    }


async def update_action_pipeline(
    plan_service: PlanService,
    user_id: str,
    plan_date: str,
    action_id: str,
    status: str
) -> Dict[str, Any]:
    """
    Mark a planned action "completed" or "skipped".

    Returns:
        The updated plan, formatted
    """
    if status == "completed":
        plan = await plan_service.update_action_status(user_id, plan_date, action_id, completed=True)
    else:
        plan = await plan_service.update_action_status(user_id, plan_date, action_id, skipped=True)
    return format_plan(plan)


def format_plan(plan: Dict[str, Any]) -> Dict[str, Any]:
    """Format plan document for API response."""
    actions = plan.get("actions") or []
    return {
        "id": str(plan["_id"]),
        "date": plan["date"],
        "actions": actions,
        "completedCount": plan.get("completedCount", sum(1 for a in actions if a.get("completed"))),
        "totalCount": plan.get("totalCount", len(actions)),
        "badDayMode": plan.get("badDayMode", False),
    }

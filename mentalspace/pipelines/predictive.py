"""
Predictive system pipeline functions.

Stateless orchestration of patterns, prediction, proactive alerts,
trigger dates and bad-day mode.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, Any

from mentalspace.analytics.alerts import generate_proactive_alert, matches_trigger_date
from mentalspace.analytics.bad_day_mode import (
    count_missed_actions,
    message_for,
    support_prompts,
    transition,
)
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.models import (
    BadDayEvents,
    BadDayState,
    CheckIn,
    DailyPlan,
    TriggerDate,
)
from mentalspace.analytics.pattern_analyzer import analyze_day_of_week, detect_trigger_patterns
from mentalspace.analytics.predictor import predict_mood
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.notifications.alert_notifier import AlertNotifier
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService

logger = logging.getLogger(__name__)


async def evaluate_bad_day_pipeline(
    bad_day_service: BadDayService,
    plan_service: PlanService,
    trigger_date_service: TriggerDateService,
    user_id: str,
    now: Optional[datetime] = None,
    checkin_mood: Optional[int] = None,
    checkin_at: Optional[datetime] = None,
    manual: Optional[str] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> BadDayState:
    """
    Gather today's events, run the bad-day transition and persist changes.

    Args:
        bad_day_service: For state and SOS storage
        plan_service: For yesterday's missed actions
        trigger_date_service: For today's trigger date match
        user_id: Current user's ID
        now: Evaluation time
        checkin_mood / checkin_at: Today's check-in, when one was just made
        manual: "activate" or "deactivate" for explicit overrides

    Returns:
        The state after the transition
    """
    now = now or datetime.now(timezone.utc)
    today = now.date()

    state = await bad_day_service.get_state(user_id)
    sos_used_at = await bad_day_service.get_last_sos_at(user_id)

    yesterday = (today - timedelta(days=1)).isoformat()
    yesterday_plan = await plan_service.get_plan(user_id, yesterday)
    missed = count_missed_actions(
        DailyPlan.from_document(yesterday_plan) if yesterday_plan else None,
        now,
    )

    trigger_docs = await trigger_date_service.list_trigger_dates(user_id)
    trigger = matches_trigger_date(today, [TriggerDate.from_document(d) for d in trigger_docs])

    events = BadDayEvents(
        now=now,
        checkin_mood=checkin_mood,
        checkin_at=checkin_at,
        sos_used_at=sos_used_at,
        missed_actions=missed,
        trigger_date_label=trigger.label if trigger else None,
        manual=manual,
    )

    new_state = transition(state, events, thresholds)
    if new_state != state:
        await bad_day_service.save_state(user_id, new_state)
        if new_state.active != state.active:
            logger.info(
                f"Bad-day mode {'activated' if new_state.active else 'deactivated'} for user {user_id}"
            )

    return new_state


async def record_sos_pipeline(
    bad_day_service: BadDayService,
    plan_service: PlanService,
    trigger_date_service: TriggerDateService,
    user_id: str,
    now: Optional[datetime] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> BadDayState:
    """Record SOS access, then re-evaluate bad-day mode."""
    now = now or datetime.now(timezone.utc)
    await bad_day_service.record_sos(user_id, now=now)
    return await evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        now=now, thresholds=thresholds
    )


async def get_predictions_pipeline(
    checkin_service: CheckInService,
    trigger_date_service: TriggerDateService,
    bad_day_service: BadDayService,
    plan_service: PlanService,
    notifier: AlertNotifier,
    user_id: str,
    now: Optional[datetime] = None,
    history_days: int = 90,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
) -> Dict[str, Any]:
    """
    Patterns, tomorrow's prediction, the proactive alert and bad-day state.

    Args:
        history_days: Days of check-in history to analyze

    Returns:
        dict with dayOfWeekPatterns, triggerPatterns, prediction, alert,
        badDayMode
    """
    now = now or datetime.now(timezone.utc)
    today = now.date()

    docs = await checkin_service.get_checkins_for_period(user_id, history_days, now=now)
    checkins = [CheckIn.from_document(d) for d in docs]

    day_patterns = analyze_day_of_week(checkins, thresholds)
    trigger_patterns = detect_trigger_patterns(checkins, thresholds)
    prediction = predict_mood(checkins, today + timedelta(days=1), day_patterns, thresholds)

    trigger_docs = await trigger_date_service.list_trigger_dates(user_id)
    alert = generate_proactive_alert(
        today,
        prediction,
        trigger_patterns,
        [TriggerDate.from_document(d) for d in trigger_docs],
        checkins,
        thresholds,
    )

    # Delivered at most once per user per day however often this is called
    if alert is not None and await bad_day_service.claim_alert_delivery(user_id, today):
        try:
            await notifier.notify_alert(user_id, alert)
        except Exception as e:
            logger.warning(f"Failed to deliver alert to user {user_id}: {e}")

    state = await evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        now=now, thresholds=thresholds
    )

    return {
        "dayOfWeekPatterns": [p.to_dict() for p in day_patterns],
        "triggerPatterns": [p.to_dict() for p in trigger_patterns],
        "prediction": prediction.to_dict() if prediction else None,
        "alert": alert.to_dict() if alert else None,
        "badDayMode": format_bad_day_state(state),
    }


async def list_trigger_dates_pipeline(
    trigger_date_service: TriggerDateService,
    user_id: str
) -> Dict[str, Any]:
    docs = await trigger_date_service.list_trigger_dates(user_id)
    return {"triggerDates": [_format_trigger_date(d) for d in docs]}


async def add_trigger_date_pipeline(
    trigger_date_service: TriggerDateService,
    user_id: str,
    date: str,
    label: str,
    repeat_annually: bool = False
) -> Dict[str, Any]:
    doc = await trigger_date_service.add_trigger_date(user_id, date, label, repeat_annually)
    return _format_trigger_date(doc)


async def delete_trigger_date_pipeline(
    trigger_date_service: TriggerDateService,
    user_id: str,
    trigger_date_id: str
) -> None:
    await trigger_date_service.delete_trigger_date(user_id, trigger_date_id)


def format_bad_day_state(state: BadDayState) -> Dict[str, Any]:
    """Bad-day state with the message text the UI should show."""
    return {
        "active": state.active,
        "activatedDate": state.activated_date.isoformat() if state.activated_date else None,
        "triggers": [
            {
                "type": t.type,
                "description": t.description,
                "timestamp": t.timestamp.isoformat(),
            }
            for t in state.triggers
        ],
        "message": message_for("welcome", state),
        "supportPrompts": support_prompts(state),
    }


def _format_trigger_date(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Format trigger date document for API response."""
    return {
        "id": str(doc["_id"]),
        "date": doc["date"],
        "label": doc["label"],
        "repeatAnnually": doc.get("repeatAnnually", False),
    }

"""
FastAPI router for predictive features.

Provides endpoints for predictions, trigger dates and bad-day mode.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from mentalspace.analytics.constants import AnalyticsThresholds
from mentalspace.config import settings
from mentalspace.dependencies import (
    CurrentUserId,
    get_thresholds,
    get_checkin_service,
    get_plan_service,
    get_bad_day_service,
    get_trigger_date_service,
    get_alert_notifier,
)
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.notifications.alert_notifier import AlertNotifier
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.schemas.predictive import (
    TriggerDateRequest,
    TriggerDateResponse,
    BadDayModeResponse,
)
from mentalspace.pipelines import predictive as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(tags=["predictive"])


# =============================================================================
# Predictions
# =============================================================================

@router.get("/predictions")
async def get_predictions(
    user_id: CurrentUserId,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    notifier: Annotated[AlertNotifier, Depends(get_alert_notifier)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Weekday patterns, trigger patterns, tomorrow's forecast and any alert."""
    result = await pipelines.get_predictions_pipeline(
        checkin_service=checkin_service,
        trigger_date_service=trigger_date_service,
        bad_day_service=bad_day_service,
        plan_service=plan_service,
        notifier=notifier,
        user_id=user_id,
        history_days=settings.PREDICTION_HISTORY_DAYS,
        thresholds=thresholds
    )
    return success_response(result)


# =============================================================================
# Trigger Dates
# =============================================================================

@router.get("/trigger-dates")
async def list_trigger_dates(
    user_id: CurrentUserId,
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
):
    """All trigger dates for the current user."""
    result = await pipelines.list_trigger_dates_pipeline(trigger_date_service, user_id)
    return success_response(result)


@router.post("/trigger-dates")
async def add_trigger_date(
    body: TriggerDateRequest,
    user_id: CurrentUserId,
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
):
    """Add a known-difficult date."""
    result = await pipelines.add_trigger_date_pipeline(
        trigger_date_service=trigger_date_service,
        user_id=user_id,
        date=body.date,
        label=body.label,
        repeat_annually=body.repeatAnnually
    )
    return success_response(TriggerDateResponse(**result).model_dump(), message="Trigger date added")


@router.delete("/trigger-dates/{trigger_date_id}")
async def delete_trigger_date(
    trigger_date_id: str,
    user_id: CurrentUserId,
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
):
    """Remove a trigger date."""
    await pipelines.delete_trigger_date_pipeline(trigger_date_service, user_id, trigger_date_id)
    return success_response(message="Trigger date deleted")


# =============================================================================
# Bad-Day Mode
# =============================================================================

@router.get("/bad-day-mode")
async def get_bad_day_mode(
    user_id: CurrentUserId,
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Current bad-day state, re-evaluated against today's signals."""
    state = await pipelines.evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        thresholds=thresholds
    )
    return success_response(_bad_day_response(state))


@router.post("/bad-day-mode/sos")
async def record_sos(
    user_id: CurrentUserId,
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Record that the user opened SOS support."""
    state = await pipelines.record_sos_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        thresholds=thresholds
    )
    return success_response(_bad_day_response(state))


@router.post("/bad-day-mode/activate")
async def activate_bad_day_mode(
    user_id: CurrentUserId,
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Turn bad-day mode on by request."""
    state = await pipelines.evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        manual="activate", thresholds=thresholds
    )
    return success_response(_bad_day_response(state))


@router.post("/bad-day-mode/deactivate")
async def deactivate_bad_day_mode(
    user_id: CurrentUserId,
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Turn bad-day mode off by request."""
    state = await pipelines.evaluate_bad_day_pipeline(
        bad_day_service, plan_service, trigger_date_service, user_id,
        manual="deactivate", thresholds=thresholds
    )
    return success_response(_bad_day_response(state))


def _bad_day_response(state) -> dict:
    return BadDayModeResponse(**pipelines.format_bad_day_state(state)).model_dump()

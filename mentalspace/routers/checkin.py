"""
FastAPI router for Check-in system endpoints.

Provides endpoints for check-in submission, history and analytics.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils import success_response
from mentalspace.analytics.constants import AnalyticsThresholds
from mentalspace.dependencies import (
    CurrentUserId,
    get_thresholds,
    get_checkin_service,
    get_checkin_analytics,
    get_plan_service,
    get_crisis_event_service,
    get_bad_day_service,
    get_trigger_date_service,
    get_alert_notifier,
)
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.checkin.checkin_analytics import CheckInAnalytics
from mentalspace.services.crisis.crisis_event_service import CrisisEventService
from mentalspace.services.notifications.alert_notifier import AlertNotifier
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.schemas.checkin import CheckInRequest, StreakResponseData
from mentalspace.pipelines import checkin as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkin", tags=["checkin"])

TREND_PERIODS = (7, 30, 90)


@router.post("")
async def submit_checkin(
    body: CheckInRequest,
    user_id: CurrentUserId,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    checkin_analytics: Annotated[CheckInAnalytics, Depends(get_checkin_analytics)],
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    crisis_event_service: Annotated[CrisisEventService, Depends(get_crisis_event_service)],
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    notifier: Annotated[AlertNotifier, Depends(get_alert_notifier)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """
    Submit today's check-in.

    Returns the stored check-in, any crisis assessment, bad-day state,
    today's plan and updated streaks.
    """
    result = await pipelines.submit_checkin_pipeline(
        checkin_service=checkin_service,
        checkin_analytics=checkin_analytics,
        plan_service=plan_service,
        crisis_event_service=crisis_event_service,
        bad_day_service=bad_day_service,
        trigger_date_service=trigger_date_service,
        notifier=notifier,
        user_id=user_id,
        metrics=body.metrics(),
        journal_entry=body.journalEntry,
        thresholds=thresholds
    )

    return success_response(result)


@router.get("/today")
async def get_today_checkin(
    user_id: CurrentUserId,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
):
    """Whether the user has checked in today, with the check-in if so."""
    result = await pipelines.get_today_checkin_pipeline(
        checkin_service=checkin_service,
        user_id=user_id
    )
    return success_response(result)


@router.get("/history")
async def get_history(
    user_id: CurrentUserId,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    startDate: Optional[str] = Query(None, description="YYYY-MM-DD format"),
    endDate: Optional[str] = Query(None, description="YYYY-MM-DD format"),
    limit: int = Query(30, ge=1, le=90),
    offset: int = Query(0, ge=0),
):
    """Check-in history with optional date range and pagination."""
    result = await pipelines.get_history_pipeline(
        checkin_service=checkin_service,
        user_id=user_id,
        start_date=startDate,
        end_date=endDate,
        limit=limit,
        offset=offset
    )
    return success_response(result)


@router.get("/streak")
async def get_streak(
    user_id: CurrentUserId,
    checkin_analytics: Annotated[CheckInAnalytics, Depends(get_checkin_analytics)],
):
    """Current and longest check-in and completion streaks."""
    streaks = await pipelines.get_streak_pipeline(
        checkin_analytics=checkin_analytics,
        user_id=user_id
    )
    return success_response(StreakResponseData(**streaks).model_dump())


@router.get("/trends")
async def get_trends(
    user_id: CurrentUserId,
    checkin_analytics: Annotated[CheckInAnalytics, Depends(get_checkin_analytics)],
    period: int = Query(30, description="7, 30, or 90 days"),
):
    """Per-metric trend summaries for graphs."""
    if period not in TREND_PERIODS:
        period = 30

    result = await pipelines.get_trends_pipeline(
        checkin_analytics=checkin_analytics,
        user_id=user_id,
        period=period
    )
    return success_response(result)


@router.post("/{date}/acknowledge-crisis")
async def acknowledge_crisis(
    date: str,
    user_id: CurrentUserId,
    checkin_service: Annotated[CheckInService, Depends(get_checkin_service)],
    crisis_event_service: Annotated[CrisisEventService, Depends(get_crisis_event_service)],
):
    """Mark the crisis prompt on a check-in as handled."""
    result = await pipelines.acknowledge_crisis_pipeline(
        checkin_service=checkin_service,
        crisis_event_service=crisis_event_service,
        user_id=user_id,
        date=date
    )
    return success_response(result, message="Crisis prompt acknowledged")

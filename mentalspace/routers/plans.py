"""
FastAPI router for daily plan endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from mentalspace.analytics.constants import AnalyticsThresholds
from mentalspace.dependencies import (
    CurrentUserId,
    get_thresholds,
    get_plan_service,
    get_bad_day_service,
    get_trigger_date_service,
)
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.predictive.bad_day_service import BadDayService
from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.schemas.plan import PlanResponse
from mentalspace.pipelines import plan as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("/today")
async def get_today_plan(
    user_id: CurrentUserId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
    bad_day_service: Annotated[BadDayService, Depends(get_bad_day_service)],
    trigger_date_service: Annotated[TriggerDateService, Depends(get_trigger_date_service)],
    thresholds: Annotated[AnalyticsThresholds, Depends(get_thresholds)],
):
    """Today's plan, or hasPlan=false before the first check-in."""
    result = await pipelines.get_today_plan_pipeline(
        plan_service, bad_day_service, trigger_date_service, user_id,
        thresholds=thresholds
    )
    return success_response(result)


@router.post("/{plan_date}/actions/{action_id}/complete")
async def complete_action(
    plan_date: str,
    action_id: str,
    user_id: CurrentUserId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Mark a planned action completed."""
    plan = await pipelines.update_action_pipeline(
        plan_service, user_id, plan_date, action_id, "completed"
    )
    return success_response(PlanResponse(**plan).model_dump())


@router.post("/{plan_date}/actions/{action_id}/skip")
async def skip_action(
    plan_date: str,
    action_id: str,
    user_id: CurrentUserId,
    plan_service: Annotated[PlanService, Depends(get_plan_service)],
):
    """Mark a planned action skipped."""
    plan = await pipelines.update_action_pipeline(
        plan_service, user_id, plan_date, action_id, "skipped"
    )
    return success_response(PlanResponse(**plan).model_dump())

"""
FastAPI router for weekly summary endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from common.utils import success_response
from mentalspace.dependencies import CurrentUserId, get_weekly_summary_service
from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService
from mentalspace.schemas.summary import WeeklySummaryResponse
from mentalspace.pipelines import summary as pipelines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summaries", tags=["summaries"])


@router.get("/weekly")
async def get_latest_weekly_summary(
    user_id: CurrentUserId,
    summary_service: Annotated[WeeklySummaryService, Depends(get_weekly_summary_service)],
):
    """The most recent weekly summary, if one has been generated."""
    result = await pipelines.get_latest_summary_pipeline(summary_service, user_id)
    if result["summary"]:
        result["summary"] = WeeklySummaryResponse(**result["summary"]).model_dump()
    return success_response(result)


@router.get("/weekly/history")
async def list_weekly_summaries(
    user_id: CurrentUserId,
    summary_service: Annotated[WeeklySummaryService, Depends(get_weekly_summary_service)],
    limit: int = Query(12, ge=1, le=52),
):
    """Past weekly summaries, newest first."""
    result = await pipelines.list_summaries_pipeline(summary_service, user_id, limit=limit)
    return success_response(result)

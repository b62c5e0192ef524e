"""
MentalSpace request/response schemas.
"""

from mentalspace.schemas.checkin import CheckInRequest, StreakResponseData
from mentalspace.schemas.predictive import (
    TriggerDateRequest,
    TriggerDateResponse,
    BadDayTriggerResponse,
    BadDayModeResponse,
)
from mentalspace.schemas.plan import PlanResponse
from mentalspace.schemas.summary import WeeklySummaryResponse

__all__ = [
    "CheckInRequest",
    "StreakResponseData",
    "TriggerDateRequest",
    "TriggerDateResponse",
    "BadDayTriggerResponse",
    "BadDayModeResponse",
    "PlanResponse",
    "WeeklySummaryResponse",
]

"""
Pydantic models for predictions, trigger dates and bad-day mode.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


# =============================================================================
# Request Schemas
# =============================================================================

class TriggerDateRequest(BaseModel):
    """POST /api/v1/trigger-dates"""
    date: str = Field(..., description="YYYY-MM-DD format")
    label: str = Field(..., min_length=1, max_length=100)
    repeatAnnually: bool = False


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class TriggerDateResponse(BaseModel):
    id: str
    date: str
    label: str
    repeatAnnually: bool


class BadDayTriggerResponse(BaseModel):
    type: str
    description: str
    timestamp: str


class BadDayModeResponse(BaseModel):
    """Response data for GET /api/v1/bad-day-mode"""
    active: bool
    activatedDate: Optional[str] = None
    triggers: List[BadDayTriggerResponse]
    message: str
    supportPrompts: List[str]

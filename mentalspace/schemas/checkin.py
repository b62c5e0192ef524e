"""
Pydantic models for Check-in system request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Request Schemas
# =============================================================================

class CheckInRequest(BaseModel):
    """POST /api/v1/checkin"""
    mood: int = Field(..., ge=1, le=10, description="1-10 scale")
    energy: int = Field(..., ge=1, le=10, description="1-10 scale")
    sleep: int = Field(..., ge=1, le=10, description="1-10 scale")
    stress: int = Field(..., ge=1, le=10, description="1-10 scale")
    anxiety: int = Field(..., ge=1, le=10, description="1-10 scale")
    focus: int = Field(..., ge=1, le=10, description="1-10 scale")
    journalEntry: Optional[str] = Field(None, max_length=2000)

    def metrics(self) -> dict:
        return self.model_dump(exclude={"journalEntry"})


# =============================================================================
# Response Schemas (used inside success_response data)
# =============================================================================

class StreakResponseData(BaseModel):
    """Response data for GET /api/v1/checkin/streak"""
    currentCheckinStreak: int
    longestCheckinStreak: int
    currentCompletionStreak: int
    longestCompletionStreak: int

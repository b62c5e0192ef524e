"""
Pydantic models for daily plans.
"""

from typing import Any, Dict, List
from pydantic import BaseModel


class PlanResponse(BaseModel):
    """Plan data returned by the plan endpoints."""
    id: str
    date: str
    actions: List[Dict[str, Any]]
    completedCount: int
    totalCount: int
    badDayMode: bool

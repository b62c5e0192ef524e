"""
Pydantic models for weekly summaries.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class WeeklySummaryResponse(BaseModel):
    """A stored weekly summary."""
    id: str
    weekStart: str
    weekEnd: str
    metrics: Dict[str, Dict[str, Any]]
    completionRate: int
    streaks: Dict[str, int]
    insights: List[str]
    topActions: List[Dict[str, Any]]
    generatedAt: Optional[datetime] = None

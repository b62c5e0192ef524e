"""Trigger date and bad-day mode services."""

from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.services.predictive.bad_day_service import BadDayService

__all__ = [
    "TriggerDateService",
    "BadDayService",
]

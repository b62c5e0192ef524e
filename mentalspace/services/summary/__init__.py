"""Weekly summary services."""

from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService

__all__ = ["WeeklySummaryService"]

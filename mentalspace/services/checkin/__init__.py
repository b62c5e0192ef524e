"""Check-in services."""

from mentalspace.services.checkin.metrics_validator import MetricsValidator
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.checkin.checkin_analytics import CheckInAnalytics

__all__ = [
    "MetricsValidator",
    "CheckInService",
    "CheckInAnalytics",
]

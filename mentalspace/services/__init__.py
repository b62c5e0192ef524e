"""
MentalSpace Services.

All service classes organized by feature.
"""

# Check-in services
from mentalspace.services.checkin.metrics_validator import MetricsValidator
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.checkin.checkin_analytics import CheckInAnalytics

# Plan services
from mentalspace.services.plan.plan_service import PlanService

# Crisis services
from mentalspace.services.crisis.crisis_event_service import CrisisEventService

# Predictive services
from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.services.predictive.bad_day_service import BadDayService

# Summary services
from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService

# Notifications
from mentalspace.services.notifications.alert_notifier import (
    AlertNotifier,
    NoOpAlertNotifier,
    LoggingAlertNotifier,
    create_alert_notifier,
)

__all__ = [
    "MetricsValidator",
    "CheckInService",
    "CheckInAnalytics",
    "PlanService",
    "CrisisEventService",
    "TriggerDateService",
    "BadDayService",
    "WeeklySummaryService",
    "AlertNotifier",
    "NoOpAlertNotifier",
    "LoggingAlertNotifier",
    "create_alert_notifier",
]

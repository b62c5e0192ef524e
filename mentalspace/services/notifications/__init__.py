"""Alert notifier capability."""

from mentalspace.services.notifications.alert_notifier import (
    AlertNotifier,
    NoOpAlertNotifier,
    LoggingAlertNotifier,
    create_alert_notifier,
)

__all__ = [
    "AlertNotifier",
    "NoOpAlertNotifier",
    "LoggingAlertNotifier",
    "create_alert_notifier",
]

"""
Alert notifier capability.

Proactive alerts and crisis classifications are handed to one notifier
chosen at startup. Delivery channels plug in by implementing
AlertNotifier; without one the no-op notifier is used.

Example:
    notifier = create_alert_notifier(settings.ALERT_NOTIFIER)
    await notifier.notify_alert(user_id, alert)
"""

import logging
from abc import ABC, abstractmethod

from mentalspace.analytics.models import CrisisAssessment, ProactiveAlert

logger = logging.getLogger(__name__)


class AlertNotifier(ABC):
    """
    Abstract alert delivery channel.
    """

    @abstractmethod
    async def notify_alert(self, user_id: str, alert: ProactiveAlert) -> None:
        """
        Deliver a proactive alert.

        Args:
            user_id: Recipient user ID
            alert: The alert to deliver
        """
        pass

    @abstractmethod
    async def notify_crisis(self, user_id: str, assessment: CrisisAssessment) -> None:
        """
        Deliver a crisis classification for follow-up.

        Args:
            user_id: Affected user ID
            assessment: Advisory crisis assessment
        """
        pass


class NoOpAlertNotifier(AlertNotifier):
    """Discards everything."""

    async def notify_alert(self, user_id: str, alert: ProactiveAlert) -> None:
        return None

    async def notify_crisis(self, user_id: str, assessment: CrisisAssessment) -> None:
        return None


class LoggingAlertNotifier(AlertNotifier):
    """Writes alerts to the application log."""

    async def notify_alert(self, user_id: str, alert: ProactiveAlert) -> None:
        logger.info(f"Alert for user {user_id}: {alert.type} ({alert.severity})")

    async def notify_crisis(self, user_id: str, assessment: CrisisAssessment) -> None:
        logger.warning(
            f"Crisis indicator for user {user_id}: {assessment.severity} - {assessment.reason}"
        )


NOTIFIERS = {
    "none": NoOpAlertNotifier,
    "log": LoggingAlertNotifier,
}


def create_alert_notifier(name: str = "none") -> AlertNotifier:
    """
    Build the configured notifier.

    Raises:
        ValueError: Unknown notifier name
    """
    try:
        return NOTIFIERS[name.lower()]()
    except KeyError:
        raise ValueError(f"Unknown ALERT_NOTIFIER '{name}'. Expected one of: {', '.join(NOTIFIERS)}")

"""Crisis event services."""

from mentalspace.services.crisis.crisis_event_service import CrisisEventService

__all__ = ["CrisisEventService"]

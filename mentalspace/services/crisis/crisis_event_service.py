"""
Crisis event log.

Records advisory crisis classifications for follow-up, at most one per
user within the cooldown window.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from mentalspace.analytics.models import CrisisAssessment

logger = logging.getLogger(__name__)


class CrisisEventService:
    """
    Stores crisis events with a per-user cooldown.
    """

    def __init__(self, db: AsyncIOMotorDatabase, cooldown_hours: int = 24):
        """
        Initialize CrisisEventService.

        Args:
            db: MongoDB database connection
            cooldown_hours: Minimum hours between recorded events per user
        """
        self._db = db
        self._events_collection = db["crisisEvents"]
        self._cooldown = timedelta(hours=cooldown_hours)

    async def record_event(
        self,
        user_id: str,
        checkin_id: Optional[ObjectId],
        assessment: CrisisAssessment,
        now: Optional[datetime] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Record a crisis event unless one was recorded within the cooldown.

        Returns:
            The stored event, or None when suppressed by the cooldown
        """
        now = now or datetime.now(timezone.utc)

        recent = await self._events_collection.find_one({
            "userId": ObjectId(user_id),
            "createdAt": {"$gte": now - self._cooldown}
        })
        if recent:
            logger.info(f"Crisis event for user {user_id} suppressed by cooldown")
            return None

        event = {
            "userId": ObjectId(user_id),
            "checkinId": checkin_id,
            "severity": assessment.severity,
            "triggerType": assessment.trigger_type,
            "reason": assessment.reason,
            "userAcknowledged": False,
            "createdAt": now,
        }
        result = await self._events_collection.insert_one(event)
        event["_id"] = result.inserted_id

        logger.info(f"Crisis event recorded for user {user_id}: {assessment.severity}")
        return event

    async def acknowledge_for_checkin(self, user_id: str, checkin_id: ObjectId) -> None:
        """Mark the events raised by a check-in as acknowledged."""
        await self._events_collection.update_many(
            {"userId": ObjectId(user_id), "checkinId": checkin_id},
            {"$set": {"userAcknowledged": True, "acknowledgedAt": datetime.now(timezone.utc)}}
        )

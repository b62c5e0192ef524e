"""
Bad-day mode state storage.

Persists the per-user BadDayState record, plus the SOS and proactive
alert timestamps kept on it. Transitions themselves are computed by the
analytics core; this service only loads and saves.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from mentalspace.analytics.models import BadDayState

logger = logging.getLogger(__name__)


class BadDayService:
    """
    Loads and saves bad-day state and SOS usage.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize BadDayService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._states_collection = db["badDayStates"]

    async def _get_document(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._states_collection.find_one({"userId": ObjectId(user_id)})

    async def get_state(self, user_id: str) -> BadDayState:
        """Current state; inactive when nothing is stored."""
        return BadDayState.from_document(await self._get_document(user_id))

    async def get_last_sos_at(self, user_id: str) -> Optional[datetime]:
        doc = await self._get_document(user_id)
        return doc.get("lastSosAt") if doc else None

    async def save_state(self, user_id: str, state: BadDayState) -> None:
        """Replace the stored state fields."""
        await self._states_collection.update_one(
            {"userId": ObjectId(user_id)},
            {"$set": {**state.to_document(), "updatedAt": datetime.now(timezone.utc)}},
            upsert=True
        )

    async def record_sos(self, user_id: str, now: Optional[datetime] = None) -> datetime:
        """Record SOS access; returns the stored timestamp."""
        now = now or datetime.now(timezone.utc)
        await self._states_collection.update_one(
            {"userId": ObjectId(user_id)},
            {"$set": {"lastSosAt": now}},
            upsert=True
        )
        logger.info(f"SOS access recorded for user {user_id}")
        return now

    async def claim_alert_delivery(self, user_id: str, day: date) -> bool:
        """
        Claim today's proactive alert delivery for a user.

        Returns:
            True for the first claim on `day`, False once already claimed
        """
        try:
            await self._states_collection.update_one(
                {"userId": ObjectId(user_id), "lastAlertDate": {"$ne": day.isoformat()}},
                {"$set": {"lastAlertDate": day.isoformat()}},
                upsert=True
            )
        except DuplicateKeyError:
            # The user's record exists and already holds this date
            return False
        return True

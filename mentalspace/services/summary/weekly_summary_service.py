"""
Weekly summary storage.

Summaries are immutable: one per user per week, written insert-once.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from mentalspace.analytics.models import WeeklySummary

logger = logging.getLogger(__name__)


class WeeklySummaryService:
    """
    Handles weekly summary persistence and the user roster for the batch.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize WeeklySummaryService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._summaries_collection = db["weeklySummaries"]
        self._users_collection = db["users"]

    async def get_user_ids(self) -> List[str]:
        """Ids of every user that has not been deleted."""
        cursor = self._users_collection.find(
            {"status": {"$ne": "deleted"}},
            {"_id": 1}
        )
        docs = await cursor.to_list(length=None)
        return [str(doc["_id"]) for doc in docs]

    async def save_summary(self, user_id: str, summary: WeeklySummary) -> bool:
        """
        Store a summary unless one exists for the same week.

        Returns:
            True if a new summary was written
        """
        doc = {
            "userId": ObjectId(user_id),
            **summary.to_document(),
            "generatedAt": datetime.now(timezone.utc),
        }
        result = await self._summaries_collection.update_one(
            {"userId": ObjectId(user_id), "weekStart": doc["weekStart"]},
            {"$setOnInsert": doc},
            upsert=True
        )
        created = result.upserted_id is not None
        if not created:
            logger.info(f"Weekly summary for user {user_id} week {doc['weekStart']} already exists")
        return created

    async def get_latest(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Most recent summary for a user."""
        return await self._summaries_collection.find_one(
            {"userId": ObjectId(user_id)},
            sort=[("weekStart", -1)]
        )

    async def list_summaries(self, user_id: str, limit: int = 12) -> List[Dict[str, Any]]:
        """Summaries newest first."""
        cursor = self._summaries_collection.find({"userId": ObjectId(user_id)})
        cursor = cursor.sort("weekStart", -1).limit(limit)
        return await cursor.to_list(length=limit)

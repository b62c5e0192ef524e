"""
Trigger date service.

CRUD for user-declared dates of personal significance.
"""

import logging
from datetime import datetime, timezone
from typing import List, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import NotFoundException, ValidationException
from mentalspace.services.checkin.metrics_validator import MetricsValidator

logger = logging.getLogger(__name__)


class TriggerDateService:
    """
    Handles trigger date storage.
    """

    MAX_LABEL_LENGTH = 100

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize TriggerDateService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._trigger_dates_collection = db["triggerDates"]

    async def list_trigger_dates(self, user_id: str) -> List[Dict[str, Any]]:
        """All trigger dates of a user, sorted by date."""
        cursor = self._trigger_dates_collection.find({"userId": ObjectId(user_id)})
        cursor = cursor.sort("date", 1)
        return await cursor.to_list(length=None)

    async def add_trigger_date(
        self,
        user_id: str,
        date: str,
        label: str,
        repeat_annually: bool = False
    ) -> Dict[str, Any]:
        """
        Declare a trigger date.

        Raises:
            ValidationException: Malformed date or empty/long label
        """
        is_valid, error = MetricsValidator.validate_date(date)
        if not is_valid:
            raise ValidationException(message=error, code="INVALID_DATE")

        label = (label or "").strip()
        if not label or len(label) > self.MAX_LABEL_LENGTH:
            raise ValidationException(
                message=f"Label must be 1-{self.MAX_LABEL_LENGTH} characters",
                code="INVALID_LABEL",
            )

        doc = {
            "userId": ObjectId(user_id),
            "date": date,
            "label": label,
            "repeatAnnually": repeat_annually,
            "createdAt": datetime.now(timezone.utc),
        }
        result = await self._trigger_dates_collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info(f"Trigger date added for user {user_id}")
        return doc

    async def delete_trigger_date(self, user_id: str, trigger_date_id: str) -> None:
        """
        Delete one of the user's trigger dates.

        Raises:
            NotFoundException: No such trigger date for this user
        """
        try:
            object_id = ObjectId(trigger_date_id)
        except InvalidId:
            raise NotFoundException(message="Trigger date not found", code="TRIGGER_DATE_NOT_FOUND")

        result = await self._trigger_dates_collection.delete_one({
            "_id": object_id,
            "userId": ObjectId(user_id)
        })
        if result.deleted_count == 0:
            raise NotFoundException(message="Trigger date not found", code="TRIGGER_DATE_NOT_FOUND")

        logger.info(f"Trigger date {trigger_date_id} deleted for user {user_id}")

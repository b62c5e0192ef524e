"""
Check-in CRUD service.

Handles check-in storage and retrieval operations.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import ConflictException, ValidationException
from mentalspace.analytics.constants import METRIC_KEYS
from mentalspace.services.checkin.metrics_validator import MetricsValidator

logger = logging.getLogger(__name__)


class CheckInService:
    """
    Handles check-in storage and retrieval.
    Pure CRUD - no analytics or business logic.
    """

    MAX_LIMIT = 90

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize CheckInService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._checkins_collection = db["checkIns"]

    async def submit_checkin(
        self,
        user_id: str,
        metrics: Dict[str, int],
        journal_entry: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Create today's check-in for a user.

        Args:
            user_id: MongoDB user ID
            metrics: dict with mood, stress, sleep, energy, focus, anxiety
            journal_entry: Optional journal text (max 2000 chars)
            now: Submission time, defaults to the current UTC time

        Returns:
            Saved check-in document

        Raises:
            ValidationException: Metrics out of valid ranges
            ConflictException: User already checked in on this date
        """
        is_valid, error = MetricsValidator.validate(metrics)
        if not is_valid:
            raise ValidationException(message=error, code="VALIDATION_ERROR")

        is_valid, error = MetricsValidator.validate_journal(journal_entry)
        if not is_valid:
            raise ValidationException(message=error, code="VALIDATION_ERROR")

        now = now or datetime.now(timezone.utc)
        today = now.strftime("%Y-%m-%d")

        existing = await self._checkins_collection.find_one(
            {"userId": ObjectId(user_id), "date": today},
            {"_id": 1},
        )
        if existing:
            raise ConflictException(
                message="You have already checked in today",
                code="CHECKIN_EXISTS",
            )

        checkin_data = {
            "userId": ObjectId(user_id),
            "date": today,
            **{key: metrics[key] for key in METRIC_KEYS},
            "journalEntry": journal_entry.strip() if journal_entry else None,
            "crisisDetected": False,
            "crisisHandled": False,
            "createdAt": now,
        }

        try:
            result = await self._checkins_collection.insert_one(checkin_data)
        except DuplicateKeyError:
            # Lost a race with a concurrent submission for the same day
            raise ConflictException(
                message="You have already checked in today",
                code="CHECKIN_EXISTS",
            )

        checkin_data["_id"] = result.inserted_id
        logger.info(f"Check-in submitted for user {user_id} on {today}")
        return checkin_data

    async def get_checkin(self, user_id: str, date: str) -> Optional[Dict[str, Any]]:
        """Get the check-in for a specific YYYY-MM-DD date."""
        return await self._checkins_collection.find_one({
            "userId": ObjectId(user_id),
            "date": date
        })

    async def get_today_checkin(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Get today's check-in for a user if it exists.

        Args:
            user_id: MongoDB user ID

        Returns:
            Check-in dict or None
        """
        today = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
        return await self.get_checkin(user_id, today)

    async def get_history(
        self,
        user_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 30,
        offset: int = 0
    ) -> List[Dict[str, Any]]:
        """
        Get paginated check-in history.

        Args:
            user_id: MongoDB user ID
            start_date: Optional YYYY-MM-DD start filter
            end_date: Optional YYYY-MM-DD end filter
            limit: Max records to return (capped at 90)
            offset: Number of records to skip

        Returns:
            List of check-in dicts sorted by date descending
        """
        limit = min(limit, self.MAX_LIMIT)

        cursor = self._checkins_collection.find(self._range_query(user_id, start_date, end_date))
        cursor = cursor.sort("date", -1)
        cursor = cursor.skip(offset)
        cursor = cursor.limit(limit)

        return await cursor.to_list(length=limit)

    async def get_total_count(
        self,
        user_id: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ) -> int:
        """Get total number of check-ins for a user in an optional date range."""
        return await self._checkins_collection.count_documents(
            self._range_query(user_id, start_date, end_date)
        )

    async def get_checkins_between(
        self,
        user_id: str,
        start_date: str,
        end_date: str
    ) -> List[Dict[str, Any]]:
        """
        Get all check-ins in an inclusive date range.

        Returns:
            List of check-in dicts sorted by date ascending
        """
        cursor = self._checkins_collection.find(self._range_query(user_id, start_date, end_date))
        cursor = cursor.sort("date", 1)
        return await cursor.to_list(length=None)

    async def get_checkins_for_period(
        self,
        user_id: str,
        days: int,
        now: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """
        Get all check-ins for a user within the last N days.

        Args:
            user_id: MongoDB user ID
            days: Number of days to look back

        Returns:
            List of check-in dicts sorted by date ascending
        """
        now = now or datetime.now(timezone.utc)
        start_date = (now - timedelta(days=days)).strftime("%Y-%m-%d")

        cursor = self._checkins_collection.find({
            "userId": ObjectId(user_id),
            "date": {"$gte": start_date, "$lte": now.strftime("%Y-%m-%d")}
        })
        cursor = cursor.sort("date", 1)

        return await cursor.to_list(length=days + 1)

    async def get_checkin_dates(self, user_id: str, since: str) -> List[str]:
        """Dates (YYYY-MM-DD) of every check-in on or after since."""
        cursor = self._checkins_collection.find(
            {"userId": ObjectId(user_id), "date": {"$gte": since}},
            {"date": 1, "_id": 0},
        )
        docs = await cursor.to_list(length=None)
        return [doc["date"] for doc in docs]

    async def mark_crisis_detected(self, checkin_id: ObjectId) -> None:
        """Set the crisisDetected flag on a check-in."""
        await self._checkins_collection.update_one(
            {"_id": checkin_id},
            {"$set": {"crisisDetected": True}}
        )

    async def acknowledge_crisis(self, user_id: str, date: str) -> bool:
        """
        Record that the user acknowledged a crisis prompt.

        Returns:
            True if a flagged check-in was updated
        """
        result = await self._checkins_collection.update_one(
            {"userId": ObjectId(user_id), "date": date, "crisisDetected": True},
            {"$set": {"crisisHandled": True}}
        )
        return result.matched_count > 0

    @staticmethod
    def _range_query(
        user_id: str,
        start_date: Optional[str],
        end_date: Optional[str]
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"userId": ObjectId(user_id)}

        if start_date or end_date:
            query["date"] = {}
            if start_date:
                query["date"]["$gte"] = start_date
            if end_date:
                query["date"]["$lte"] = end_date

        return query

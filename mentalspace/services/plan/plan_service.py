"""
Daily plan persistence service.

Stores one plan per user per day and the shared action library.
"""

import logging
from datetime import datetime, timezone, timedelta, date
from typing import Optional, List, Dict, Any, Set

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.utils.exceptions import NotFoundException
from mentalspace.analytics.models import PlannedAction

logger = logging.getLogger(__name__)


class PlanService:
    """
    Handles daily plan storage and action status updates.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize PlanService.

        Args:
            db: MongoDB database connection
        """
        self._db = db
        self._plans_collection = db["dailyPlans"]
        self._actions_collection = db["actionsLibrary"]

    async def get_plan(self, user_id: str, plan_date: str) -> Optional[Dict[str, Any]]:
        """Get the plan for a YYYY-MM-DD date, if one exists."""
        return await self._plans_collection.find_one({
            "userId": ObjectId(user_id),
            "date": plan_date
        })

    async def get_plans_between(
        self,
        user_id: str,
        start_date: str,
        end_date: str
    ) -> List[Dict[str, Any]]:
        """
        Get plans in an inclusive date range.

        Returns:
            List of plan dicts sorted by date ascending
        """
        cursor = self._plans_collection.find({
            "userId": ObjectId(user_id),
            "date": {"$gte": start_date, "$lte": end_date}
        })
        cursor = cursor.sort("date", 1)
        return await cursor.to_list(length=None)

    async def get_recent_action_ids(self, user_id: str, before: date, days: int) -> Set[str]:
        """Action ids used in plans of the days before a date."""
        start = (before - timedelta(days=days)).isoformat()
        end = (before - timedelta(days=1)).isoformat()
        plans = await self.get_plans_between(user_id, start, end)
        return {
            str(action.get("actionId"))
            for plan in plans
            for action in plan.get("actions") or []
            if action.get("actionId")
        }

    async def get_action_library(self) -> List[Dict[str, Any]]:
        """All active action templates."""
        cursor = self._actions_collection.find({"isActive": {"$ne": False}})
        return await cursor.to_list(length=None)

    async def create_plan(
        self,
        user_id: str,
        plan_date: str,
        checkin_id: Optional[ObjectId],
        actions: List[PlannedAction],
        bad_day_mode: bool = False,
    ) -> Dict[str, Any]:
        """
        Create the plan for a day.

        An existing plan for the same day is returned unchanged.

        Returns:
            The stored plan document
        """
        now = datetime.now(timezone.utc)
        plan_data = {
            "userId": ObjectId(user_id),
            "date": plan_date,
            "checkinId": checkin_id,
            "actions": [a.to_document() for a in actions],
            "completedCount": 0,
            "totalCount": len(actions),
            "badDayMode": bad_day_mode,
            "createdAt": now,
        }

        result = await self._plans_collection.find_one_and_update(
            {"userId": ObjectId(user_id), "date": plan_date},
            {"$setOnInsert": plan_data},
            upsert=True,
            return_document=True
        )

        logger.info(f"Plan ready for user {user_id} on {plan_date} ({len(actions)} actions)")
        return result

    async def update_action_status(
        self,
        user_id: str,
        plan_date: str,
        action_id: str,
        completed: Optional[bool] = None,
        skipped: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Mark a planned action completed or skipped.

        Args:
            action_id: PlannedAction.id within the plan

        Returns:
            Updated plan document

        Raises:
            NotFoundException: Plan or action doesn't exist
        """
        plan = await self.get_plan(user_id, plan_date)
        if not plan:
            raise NotFoundException(message="Plan not found", code="PLAN_NOT_FOUND")

        actions = plan.get("actions") or []
        action = next((a for a in actions if a.get("id") == action_id), None)
        if action is None:
            raise NotFoundException(message="Action not found in plan", code="ACTION_NOT_FOUND")

        if completed is not None:
            action["completed"] = completed
            if completed:
                action["skipped"] = False
        if skipped is not None:
            action["skipped"] = skipped
            if skipped:
                action["completed"] = False

        completed_count = sum(1 for a in actions if a.get("completed"))

        await self._plans_collection.update_one(
            {"_id": plan["_id"]},
            {"$set": {
                "actions": actions,
                "completedCount": completed_count,
                "updatedAt": datetime.now(timezone.utc),
            }}
        )

        plan["actions"] = actions
        plan["completedCount"] = completed_count
        return plan

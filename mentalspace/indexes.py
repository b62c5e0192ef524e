"""
MongoDB index definitions for MentalSpace collections.
"""

from typing import Dict, List

from pymongo import ASCENDING, DESCENDING, IndexModel

COLLECTION_INDEXES: Dict[str, List[IndexModel]] = {
    # One check-in per user per day
    "checkIns": [
        IndexModel([("userId", ASCENDING), ("date", ASCENDING)], unique=True),
    ],
    "dailyPlans": [
        IndexModel([("userId", ASCENDING), ("date", ASCENDING)], unique=True),
    ],
    # Insert-once per user week
    "weeklySummaries": [
        IndexModel([("userId", ASCENDING), ("weekStart", DESCENDING)], unique=True),
    ],
    "triggerDates": [
        IndexModel([("userId", ASCENDING)]),
    ],
    "badDayStates": [
        IndexModel([("userId", ASCENDING)], unique=True),
    ],
    "crisisEvents": [
        IndexModel([("userId", ASCENDING), ("createdAt", DESCENDING)]),
    ],
}

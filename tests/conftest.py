"""Shared test fixtures for MentalSpace backend tests."""

import pytest
from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from mentalspace.analytics.models import CheckIn


# A Wednesday, so weekday arithmetic in tests is easy to follow
TODAY = date(2026, 3, 18)
NOW = datetime(2026, 3, 18, 10, 0, tzinfo=timezone.utc)


def make_checkin(day, mood=6, stress=4, sleep=6, energy=6, focus=6, anxiety=4, journal=None):
    """CheckIn with healthy defaults; pass only the metrics a test cares about."""
    return CheckIn(
        date=day,
        mood=mood,
        stress=stress,
        sleep=sleep,
        energy=energy,
        focus=focus,
        anxiety=anxiety,
        journal_entry=journal,
    )


def days_ago(n, today=TODAY):
    return today - timedelta(days=n)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # count_documents etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


def make_cursor(docs):
    """Mock Motor cursor whose sort/skip/limit chain ends in to_list(docs)."""
    cursor = MagicMock()
    cursor.sort = MagicMock(return_value=cursor)
    cursor.skip = MagicMock(return_value=cursor)
    cursor.limit = MagicMock(return_value=cursor)
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


@pytest.fixture
def sample_checkin_doc(sample_user_id):
    return {
        "_id": ObjectId(),
        "userId": ObjectId(sample_user_id),
        "date": TODAY.isoformat(),
        "mood": 6,
        "stress": 4,
        "sleep": 6,
        "energy": 6,
        "focus": 6,
        "anxiety": 4,
        "journalEntry": None,
        "crisisDetected": False,
        "crisisHandled": False,
        "createdAt": NOW,
    }

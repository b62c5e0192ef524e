"""Unit tests for CheckInService and MetricsValidator."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from common.utils.exceptions import ConflictException, ValidationException
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.checkin.metrics_validator import MetricsValidator
from tests.conftest import NOW, make_cursor

VALID_METRICS = {"mood": 6, "stress": 4, "sleep": 7, "energy": 5, "focus": 6, "anxiety": 3}


@pytest.fixture
def service(mock_db):
    return CheckInService(mock_db)


# ─────────────────────────────────────────────────────────────────
# MetricsValidator
# ─────────────────────────────────────────────────────────────────


class TestMetricsValidator:
    def test_valid_metrics(self):
        assert MetricsValidator.validate(VALID_METRICS) == (True, None)

    def test_missing_metric(self):
        metrics = dict(VALID_METRICS)
        del metrics["focus"]

        is_valid, error = MetricsValidator.validate(metrics)

        assert is_valid is False
        assert "focus" in error

    @pytest.mark.parametrize("value", [0, 11])
    def test_out_of_range(self, value):
        is_valid, error = MetricsValidator.validate({**VALID_METRICS, "mood": value})

        assert is_valid is False
        assert "between 1 and 10" in error

    @pytest.mark.parametrize("value", [5.5, "5", True, None])
    def test_non_integer(self, value):
        is_valid, _ = MetricsValidator.validate({**VALID_METRICS, "stress": value})

        assert is_valid is False

    def test_journal_length(self):
        assert MetricsValidator.validate_journal("x" * 2000) == (True, None)
        assert MetricsValidator.validate_journal("x" * 2001)[0] is False
        assert MetricsValidator.validate_journal(None) == (True, None)

    @pytest.mark.parametrize("value,ok", [
        ("2026-03-18", True),
        ("2026-02-30", False),
        ("18/03/2026", False),
        ("2026-3-18", False),
    ])
    def test_validate_date(self, value, ok):
        assert MetricsValidator.validate_date(value)[0] is ok


# ─────────────────────────────────────────────────────────────────
# submit_checkin
# ─────────────────────────────────────────────────────────────────


class TestSubmitCheckin:
    @pytest.mark.asyncio
    async def test_inserts_metrics_at_top_level(self, service, mock_collection, sample_user_id):
        inserted_id = ObjectId()
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.return_value = MagicMock(inserted_id=inserted_id)

        result = await service.submit_checkin(sample_user_id, VALID_METRICS, "  Good day  ", now=NOW)

        doc = mock_collection.insert_one.call_args[0][0]
        assert doc["userId"] == ObjectId(sample_user_id)
        assert doc["date"] == "2026-03-18"
        assert doc["mood"] == 6
        assert doc["anxiety"] == 3
        assert doc["journalEntry"] == "Good day"
        assert doc["crisisDetected"] is False
        assert doc["createdAt"] == NOW
        assert result["_id"] == inserted_id

    @pytest.mark.asyncio
    async def test_second_checkin_same_day_conflicts(self, service, mock_collection, sample_user_id):
        mock_collection.find_one.return_value = {"_id": ObjectId()}

        with pytest.raises(ConflictException) as exc_info:
            await service.submit_checkin(sample_user_id, VALID_METRICS, now=NOW)

        assert exc_info.value.code == "CHECKIN_EXISTS"
        mock_collection.insert_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_key_race_conflicts(self, service, mock_collection, sample_user_id):
        mock_collection.find_one.return_value = None
        mock_collection.insert_one.side_effect = DuplicateKeyError("dup")

        with pytest.raises(ConflictException):
            await service.submit_checkin(sample_user_id, VALID_METRICS, now=NOW)

    @pytest.mark.asyncio
    async def test_invalid_metrics_rejected_before_storage(self, service, mock_collection, sample_user_id):
        with pytest.raises(ValidationException) as exc_info:
            await service.submit_checkin(sample_user_id, {**VALID_METRICS, "mood": 12}, now=NOW)

        assert exc_info.value.status_code == 422
        mock_collection.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_long_journal_rejected(self, service, mock_collection, sample_user_id):
        with pytest.raises(ValidationException):
            await service.submit_checkin(sample_user_id, VALID_METRICS, "x" * 2001, now=NOW)


# ─────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────


class TestQueries:
    @pytest.mark.asyncio
    async def test_history_caps_limit_and_filters_range(self, service, mock_collection, sample_user_id):
        cursor = make_cursor([])
        mock_collection.find.return_value = cursor

        await service.get_history(sample_user_id, start_date="2026-03-01", limit=500)

        query = mock_collection.find.call_args[0][0]
        assert query == {"userId": ObjectId(sample_user_id), "date": {"$gte": "2026-03-01"}}
        cursor.sort.assert_called_once_with("date", -1)
        cursor.limit.assert_called_once_with(90)

    @pytest.mark.asyncio
    async def test_checkins_for_period_window(self, service, mock_collection, sample_user_id):
        mock_collection.find.return_value = make_cursor([])

        await service.get_checkins_for_period(sample_user_id, 7, now=NOW)

        query = mock_collection.find.call_args[0][0]
        assert query["date"] == {"$gte": "2026-03-11", "$lte": "2026-03-18"}

    @pytest.mark.asyncio
    async def test_checkin_dates(self, service, mock_collection, sample_user_id):
        mock_collection.find.return_value = make_cursor([{"date": "2026-03-17"}, {"date": "2026-03-18"}])

        dates = await service.get_checkin_dates(sample_user_id, "2025-03-18")

        assert dates == ["2026-03-17", "2026-03-18"]

    @pytest.mark.asyncio
    async def test_acknowledge_crisis_only_on_flagged_checkin(self, service, mock_collection, sample_user_id):
        mock_collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))

        assert await service.acknowledge_crisis(sample_user_id, "2026-03-18") is False

        query = mock_collection.update_one.call_args[0][0]
        assert query["crisisDetected"] is True

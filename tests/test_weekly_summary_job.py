"""Tests for the weekly summary background job."""

import pytest
from unittest.mock import AsyncMock
from bson import ObjectId

from jobs.weekly_summaries import WeeklySummaryJob
from tests.conftest import TODAY


def make_job(user_ids, checkins_by_user):
    checkin_service = AsyncMock()

    async def checkins_between(user_id, start, end):
        result = checkins_by_user[user_id]
        if isinstance(result, Exception):
            raise result
        return result

    checkin_service.get_checkins_between.side_effect = checkins_between
    checkin_service.get_checkin_dates.return_value = []

    plan_service = AsyncMock()
    plan_service.get_plans_between.return_value = []

    summary_service = AsyncMock()
    summary_service.get_user_ids.return_value = user_ids

    job = WeeklySummaryJob(
        checkin_service=checkin_service,
        plan_service=plan_service,
        summary_service=summary_service,
        concurrency=2,
    )
    return job, summary_service


def checkin_doc(day):
    return {"_id": ObjectId(), "date": day, "mood": 7, "stress": 3, "sleep": 7, "energy": 6, "focus": 6, "anxiety": 3}


class TestWeeklySummaryJob:
    @pytest.mark.asyncio
    async def test_counts_outcomes(self):
        job, summary_service = make_job(
            ["u1", "u2", "u3"],
            {
                "u1": [checkin_doc("2026-03-12")],
                "u2": RuntimeError("boom"),
                "u3": [],
            },
        )

        results = await job.run(run_date=TODAY)

        assert results["runDate"] == "2026-03-18"
        assert results["successful"] == 2
        assert results["failed"] == 1
        assert results["skipped"] == 1
        assert results["errors"] == ["Failed to summarize user u2: boom"]
        assert results["durationSeconds"] >= 0
        summary_service.save_summary.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_users(self):
        job, summary_service = make_job([], {})

        results = await job.run(run_date=TODAY)

        assert results["successful"] == 0
        assert results["errors"] == []

    @pytest.mark.asyncio
    async def test_roster_failure_is_reported(self):
        job, summary_service = make_job([], {})
        summary_service.get_user_ids.side_effect = RuntimeError("connection refused")

        results = await job.run(run_date=TODAY)

        assert results["errors"] == ["Job failed: connection refused"]
        assert "endTime" in results

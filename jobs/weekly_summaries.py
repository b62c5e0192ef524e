"""
Weekly summary background job.

Summarizes the previous week for every active user. Each user is processed
independently; one user's failure is counted and logged without stopping
the others. Existing summaries for the same week are never overwritten, so
re-running the job is safe.

Usage:
    Run via CRON (Monday 06:00 UTC):
        0 6 * * 1 cd /path/to/project && python -m jobs.weekly_summaries

    Or run directly:
        python -m jobs.weekly_summaries
"""

import asyncio
import logging
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from common.database import MongoDB
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.config import settings
from mentalspace.indexes import COLLECTION_INDEXES
from mentalspace.pipelines.summary import generate_weekly_summaries_pipeline
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.plan.plan_service import PlanService
from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class WeeklySummaryJob:
    """
    Generates weekly summaries for all users.

    For each user with at least one check-in in the week before the run
    date, stores metric trends, plan completion rate, streaks, insights and
    the most completed actions. Users without check-ins are skipped.
    """

    def __init__(
        self,
        checkin_service: CheckInService,
        plan_service: PlanService,
        summary_service: WeeklySummaryService,
        concurrency: Optional[int] = None,
        thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
    ):
        """
        Args:
            concurrency: Users summarized at once (None for no limit)
        """
        self._checkin_service = checkin_service
        self._plan_service = plan_service
        self._summary_service = summary_service
        self._concurrency = concurrency
        self._thresholds = thresholds

    async def run(self, run_date: Optional[date] = None) -> Dict[str, Any]:
        """
        Execute the weekly summary job.

        Args:
            run_date: Day the job runs as (defaults to today, UTC)

        Returns:
            Dict with job results including counts and any errors
        """
        start_time = datetime.now(timezone.utc)
        run_date = run_date or start_time.date()
        logger.info(f"Starting weekly summary job for week before {run_date.isoformat()}")

        results = {
            "startTime": start_time.isoformat(),
            "runDate": run_date.isoformat(),
            "successful": 0,
            "failed": 0,
            "skipped": 0,
            "errors": [],
        }

        try:
            batch = await generate_weekly_summaries_pipeline(
                checkin_service=self._checkin_service,
                plan_service=self._plan_service,
                summary_service=self._summary_service,
                run_date=run_date,
                concurrency=self._concurrency,
                thresholds=self._thresholds
            )
            results["successful"] = batch.successful
            results["failed"] = batch.failed
            results["skipped"] = batch.skipped
            results["errors"] = [
                f"Failed to summarize user {user_id}: {error}"
                for user_id, error in batch.errors.items()
            ]

        except Exception as e:
            error_msg = f"Job failed: {str(e)}"
            logger.error(error_msg)
            results["errors"].append(error_msg)

        results["endTime"] = datetime.now(timezone.utc).isoformat()
        results["durationSeconds"] = (
            datetime.now(timezone.utc) - start_time
        ).total_seconds()

        logger.info(
            f"Weekly summary job completed. "
            f"Successful: {results['successful']}, "
            f"Failed: {results['failed']}, "
            f"Skipped: {results['skipped']}"
        )

        return results


async def main():
    """Main entry point for the weekly summary job."""
    db = MongoDB()
    await db.connect(
        uri=settings.MONGODB_URI,
        database_name=settings.MONGODB_DATABASE,
        indexes=COLLECTION_INDEXES,
    )

    job = WeeklySummaryJob(
        checkin_service=CheckInService(db=db.db),
        plan_service=PlanService(db=db.db),
        summary_service=WeeklySummaryService(db=db.db),
        concurrency=settings.WEEKLY_SUMMARY_CONCURRENCY,
        thresholds=settings.thresholds()
    )

    try:
        results = await job.run()

        print("\n=== Weekly Summary Job Results ===")
        print(f"Run Date: {results['runDate']}")
        print(f"Start Time: {results['startTime']}")
        print(f"End Time: {results['endTime']}")
        print(f"Duration: {results['durationSeconds']:.2f} seconds")
        print(f"Successful: {results['successful']}")
        print(f"Failed: {results['failed']}")
        print(f"Skipped (no check-ins): {results['skipped']}")

        if results["errors"]:
            print(f"\nErrors ({len(results['errors'])}):")
            for error in results["errors"]:
                print(f"  - {error}")

        exit_code = 1 if results["errors"] else 0
        sys.exit(exit_code)

    finally:
        await db.disconnect()


if __name__ == "__main__":
    asyncio.run(main())

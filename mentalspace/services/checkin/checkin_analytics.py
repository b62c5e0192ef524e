"""
Check-in analytics service.

Loads check-in and plan history and runs the analytics core over it for
streaks and trend data.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Dict, Any, Optional

from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.metric_summary import summarize_checkins
from mentalspace.analytics.models import CheckIn, DailyPlan, StreakInfo
from mentalspace.analytics.streaks import calculate_streaks
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.plan.plan_service import PlanService

logger = logging.getLogger(__name__)


class CheckInAnalytics:
    """
    Streaks and trend data for check-ins.
    """

    TREND_PERIODS = (7, 30, 90)

    def __init__(
        self,
        checkin_service: CheckInService,
        plan_service: PlanService,
        thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS
    ):
        """
        Initialize CheckInAnalytics.

        Args:
            checkin_service: For fetching check-in data
            plan_service: For fetching plan completions
            thresholds: Analytics thresholds
        """
        self._checkin_service = checkin_service
        self._plan_service = plan_service
        self._thresholds = thresholds

    async def calculate_streaks(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> StreakInfo:
        """
        Check-in and completion streaks over the last year.

        Args:
            user_id: MongoDB user ID
            now: Reference time, defaults to the current UTC time

        Returns:
            StreakInfo
        """
        today = (now or datetime.now(timezone.utc)).date()
        since = (today - timedelta(days=self._thresholds.streak_lookback_days)).isoformat()

        dates = await self._checkin_service.get_checkin_dates(user_id, since)
        plans = await self._plan_service.get_plans_between(user_id, since, today.isoformat())

        return calculate_streaks(
            dates,
            today,
            [DailyPlan.from_document(p) for p in plans],
        )

    async def get_trends(
        self,
        user_id: str,
        period: int = 30,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Per-metric trend summaries over the period.

        Args:
            user_id: MongoDB user ID
            period: Number of days (7, 30, or 90)

        Returns:
            dict with period, dataPoints and a MetricTrend dict per metric
        """
        if period not in self.TREND_PERIODS:
            period = 30

        docs = await self._checkin_service.get_checkins_for_period(user_id, period, now=now)
        checkins = [CheckIn.from_document(d) for d in docs]
        summaries = summarize_checkins(checkins, self._thresholds)

        return {
            "period": period,
            "dataPoints": len(checkins),
            "metrics": {key: trend.to_dict() for key, trend in summaries.items()},
        }

"""
Check-in analytics core.

Pure functions shared by the request path and the weekly batch: metric
summaries, weekday patterns, prediction, crisis detection, bad-day mode,
streaks, plan shaping, alerts and weekly summaries.
"""

from mentalspace.analytics.constants import AnalyticsThresholds, DEFAULT_THRESHOLDS
from mentalspace.analytics.models import (
    CheckIn,
    DailyPlan,
    PlannedAction,
    TriggerDate,
    MetricTrend,
    DayOfWeekPattern,
    TriggerPattern,
    MoodPrediction,
    CrisisAssessment,
    ProactiveAlert,
    BadDayState,
    BadDayEvents,
    StreakInfo,
    WeeklySummary,
)
from mentalspace.analytics.metric_summary import summarize_metric, summarize_checkins
from mentalspace.analytics.pattern_analyzer import analyze_day_of_week, detect_trigger_patterns
from mentalspace.analytics.predictor import predict_mood
from mentalspace.analytics.crisis_detector import assess_metrics, evaluate_checkin
from mentalspace.analytics.bad_day_mode import transition, adjust_actions_for_bad_day
from mentalspace.analytics.streaks import current_streak, longest_streak, calculate_streaks
from mentalspace.analytics.alerts import generate_proactive_alert
from mentalspace.analytics.plan_shaping import shape_daily_plan
from mentalspace.analytics.weekly import build_weekly_summary, run_all_settled, BatchResult

__all__ = [
    "AnalyticsThresholds",
    "DEFAULT_THRESHOLDS",
    # Models
    "CheckIn",
    "DailyPlan",
    "PlannedAction",
    "TriggerDate",
    "MetricTrend",
    "DayOfWeekPattern",
    "TriggerPattern",
    "MoodPrediction",
    "CrisisAssessment",
    "ProactiveAlert",
    "BadDayState",
    "BadDayEvents",
    "StreakInfo",
    "WeeklySummary",
    # Operations
    "summarize_metric",
    "summarize_checkins",
    "analyze_day_of_week",
    "detect_trigger_patterns",
    "predict_mood",
    "assess_metrics",
    "evaluate_checkin",
    "transition",
    "adjust_actions_for_bad_day",
    "current_streak",
    "longest_streak",
    "calculate_streaks",
    "generate_proactive_alert",
    "shape_daily_plan",
    "build_weekly_summary",
    "run_all_settled",
    "BatchResult",
]

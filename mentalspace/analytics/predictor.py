"""
Next-day mood prediction.

Simple statistical pattern matching: the target weekday's historical mean
mood, nudged by the short-term trend of the most recent check-ins.
"""

import statistics
from datetime import date
from typing import Iterable, List, Optional

from mentalspace.analytics.constants import (
    CONFIDENCE_HIGH,
    CONFIDENCE_LOW,
    CONFIDENCE_MEDIUM,
    DEFAULT_THRESHOLDS,
    METRIC_MAX,
    METRIC_MIN,
    WEEKDAY_NAMES,
    AnalyticsThresholds,
)
from mentalspace.analytics.metric_summary import half_means, round_half_up
from mentalspace.analytics.models import CheckIn, DayOfWeekPattern, MoodPrediction
from mentalspace.analytics.pattern_analyzer import analyze_day_of_week, chronological

MAX_WEEKDAY_CONFIDENCE = 0.85
CONSISTENCY_BONUS = 0.1
CONSISTENT_STDEV = 1.0
RECENT_ONLY_CONFIDENCE = 0.25


def confidence_label(score: float) -> str:
    if score >= 0.6:
        return CONFIDENCE_HIGH
    if score >= 0.3:
        return CONFIDENCE_MEDIUM
    return CONFIDENCE_LOW


def recent_trend(moods: List[int]) -> float:
    """Second-half mean minus first-half mean; 0 with fewer than 2 values."""
    halves = half_means(moods)
    if halves is None:
        return 0.0
    return halves[1] - halves[0]


def predict_mood(
    checkins: Iterable[CheckIn],
    target_date: date,
    day_patterns: Optional[List[DayOfWeekPattern]] = None,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[MoodPrediction]:
    """
    Forecast mood for target_date.

    Args:
        checkins: Check-in history (any order)
        target_date: Day to forecast, usually tomorrow
        day_patterns: Precomputed analyze_day_of_week output, if available

    Returns:
        MoodPrediction, or None when there is no mood history at all
    """
    history = [c for c in chronological(checkins) if c.mood is not None and c.date < target_date]
    if not history:
        return None

    if day_patterns is None:
        day_patterns = analyze_day_of_week(history, thresholds)

    recent_moods = [c.mood for c in history[-thresholds.prediction_recent_window:]]
    recent_mean = sum(recent_moods) / len(recent_moods)
    trend = recent_trend(recent_moods)

    weekday = target_date.isoweekday()
    pattern = next((p for p in day_patterns if p.weekday == weekday), None)

    if pattern is not None and pattern.checkin_count > 0:
        predicted = pattern.average_mood
        based_on_trend = abs(trend) >= thresholds.recent_trend_min_delta
        if based_on_trend:
            predicted += trend * thresholds.recent_trend_weight

        score = min(pattern.checkin_count / 10, MAX_WEEKDAY_CONFIDENCE)
        if len(recent_moods) >= 3 and statistics.pstdev(recent_moods) <= CONSISTENT_STDEV:
            score += CONSISTENCY_BONUS

        day_name = WEEKDAY_NAMES[weekday - 1]
        plural = "" if pattern.checkin_count == 1 else "s"
        reasoning = f"Based on {pattern.checkin_count} previous {day_name}{plural}"
        if based_on_trend:
            reasoning += " and your recent trend"

        return MoodPrediction(
            target_date=target_date,
            predicted_mood=_clamp(predicted),
            confidence=confidence_label(score),
            confidence_score=round(score, 2),
            reasoning=reasoning,
            based_on_day_of_week=True,
            based_on_recent_trend=based_on_trend,
        )

    return MoodPrediction(
        target_date=target_date,
        predicted_mood=_clamp(recent_mean + trend * 0.5),
        confidence=CONFIDENCE_LOW,
        confidence_score=RECENT_ONLY_CONFIDENCE,
        reasoning="Based on your recent check-ins",
        based_on_day_of_week=False,
        based_on_recent_trend=True,
    )


def _clamp(value: float) -> float:
    return round_half_up(max(METRIC_MIN, min(METRIC_MAX, value)))

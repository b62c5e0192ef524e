"""
Metric summary engine.

Average/min/max/trend for a single metric over a value series.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from mentalspace.analytics.constants import (
    DEFAULT_THRESHOLDS,
    INVERTED_METRICS,
    METRIC_KEYS,
    TREND_DECLINING,
    TREND_IMPROVING,
    TREND_STABLE,
    AnalyticsThresholds,
)
from mentalspace.analytics.models import CheckIn, MetricTrend


def round_half_up(value: float, digits: int = 1) -> float:
    """Round like a human would: 2.25 -> 2.3, not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clean_values(values: Iterable[object]) -> List[float]:
    """Drop missing and non-numeric entries."""
    return [
        v for v in values
        if v is not None and not isinstance(v, bool) and isinstance(v, (int, float))
    ]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def half_means(values: Sequence[float]) -> Optional[tuple]:
    """
    Means of the first and second half of a chronological series.

    With odd length the extra element goes to the second half.
    Returns None when there are fewer than 2 values.
    """
    if len(values) < 2:
        return None
    mid = len(values) // 2
    return _mean(values[:mid]), _mean(values[mid:])


def classify_trend(
    values: Sequence[float],
    inverted: bool = False,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> str:
    """
    Classify the direction of a chronological series.

    Args:
        values: Metric values in chronological order
        inverted: True when lower is better (stress, anxiety)

    Returns:
        "improving", "declining" or "stable"
    """
    halves = half_means(values)
    if halves is None:
        return TREND_STABLE

    first_mean, second_mean = halves
    delta = second_mean - first_mean
    if abs(delta) < thresholds.trend_stable_margin:
        return TREND_STABLE

    went_up = delta > 0
    if inverted:
        return TREND_DECLINING if went_up else TREND_IMPROVING
    return TREND_IMPROVING if went_up else TREND_DECLINING


def summarize_metric(
    values: Iterable[object],
    inverted: bool = False,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> MetricTrend:
    """
    Summarize one metric series.

    Empty input is "no data", not an error: all-zero, stable.
    """
    cleaned = clean_values(values)
    if not cleaned:
        return MetricTrend()

    return MetricTrend(
        average=round_half_up(_mean(cleaned)),
        min=min(cleaned),
        max=max(cleaned),
        trend=classify_trend(cleaned, inverted, thresholds),
        values=cleaned,
    )


def summarize_checkins(
    checkins: Iterable[CheckIn],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Dict[str, MetricTrend]:
    """Per-metric MetricTrend over check-ins, ordered by date."""
    ordered = sorted(checkins, key=lambda c: c.date)
    return {
        metric: summarize_metric(
            [c.metric(metric) for c in ordered],
            inverted=metric in INVERTED_METRICS,
            thresholds=thresholds,
        )
        for metric in METRIC_KEYS
    }

"""
Shared thresholds for the check-in analytics core.

Every threshold used by pattern analysis, prediction, crisis detection,
bad-day mode and the weekly summaries lives here. Callers that need to
tune a value build an AnalyticsThresholds from settings instead of
redefining a constant.
"""

from dataclasses import dataclass
from typing import Dict, List

# ==========================================================================
# Metric scale
# ==========================================================================
METRIC_MIN = 1
METRIC_MAX = 10

METRIC_KEYS: List[str] = ["mood", "stress", "sleep", "energy", "focus", "anxiety"]

# Lower is better for these metrics
INVERTED_METRICS = frozenset({"stress", "anxiety"})

METRIC_LABELS: Dict[str, str] = {
    "mood": "Mood",
    "stress": "Stress",
    "sleep": "Sleep",
    "energy": "Energy",
    "focus": "Focus",
    "anxiety": "Anxiety",
}

JOURNAL_MAX_LENGTH = 2000

# ==========================================================================
# Trend labels
# ==========================================================================
TREND_IMPROVING = "improving"
TREND_DECLINING = "declining"
TREND_STABLE = "stable"

# ==========================================================================
# Severity labels
# ==========================================================================
SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

SEVERITY_RANK: Dict[str, int] = {SEVERITY_LOW: 1, SEVERITY_MEDIUM: 2, SEVERITY_HIGH: 3}

CONFIDENCE_LOW = "low"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_HIGH = "high"

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


@dataclass(frozen=True)
class AnalyticsThresholds:
    """
    Tunable thresholds for the analytics core.

    Comparisons are contractual: "<=" thresholds are inclusive lows,
    ">=" thresholds are inclusive highs.
    """

    # Trend classification
    trend_stable_margin: float = 0.5

    # Crisis detection
    low_mood: int = 3
    very_low_mood: int = 2
    elevated_anxiety: int = 7
    elevated_stress: int = 7
    high_anxiety: int = 8
    high_stress: int = 8
    low_energy: int = 2
    low_sleep: int = 3
    crisis_cooldown_hours: int = 24

    # Pattern analysis
    consecutive_low_days: int = 3
    stress_spike_min_days: int = 2
    harder_day_margin: float = 1.0
    min_weekday_samples: int = 2

    # Prediction
    prediction_recent_window: int = 7
    recent_trend_weight: float = 0.3
    recent_trend_min_delta: float = 1.0
    hard_day_prediction: float = 4.0

    # Bad-day mode
    bad_day_mood: int = 2
    bad_day_recovery_mood: int = 3
    missed_actions_trigger: int = 3
    trigger_date_lookahead_days: int = 2
    bad_day_max_actions: int = 1
    bad_day_max_duration: int = 2

    # Plans
    actions_per_plan: int = 3
    recent_action_days: int = 3

    # Weekly summaries
    summary_window_days: int = 7
    streak_lookback_days: int = 365
    max_insights: int = 3
    top_actions_limit: int = 5
    completion_praise_rate: int = 80
    completion_nudge_rate: int = 50
    low_mood_average: float = 4.0


DEFAULT_THRESHOLDS = AnalyticsThresholds()

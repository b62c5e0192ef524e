"""
MentalSpace application settings.

Extends the base settings with analytics tunables.
"""

from common.config import BaseAppSettings
from mentalspace.analytics.constants import AnalyticsThresholds


class Settings(BaseAppSettings):
    """MentalSpace-specific settings."""

    # ==========================================================================
    # Crisis / Pattern Thresholds
    # ==========================================================================
    CONSECUTIVE_LOW_DAYS_TRIGGER: int = 3
    LOW_MOOD_THRESHOLD: int = 3
    HIGH_STRESS_THRESHOLD: int = 8
    HIGH_ANXIETY_THRESHOLD: int = 8
    CRISIS_COOLDOWN_HOURS: int = 24

    # ==========================================================================
    # Prediction
    # ==========================================================================
    PREDICTION_RECENT_WINDOW: int = 7
    PREDICTION_HISTORY_DAYS: int = 90

    # ==========================================================================
    # Weekly Summaries
    # ==========================================================================
    # Users summarized concurrently by the weekly job
    WEEKLY_SUMMARY_CONCURRENCY: int = 25

    # ==========================================================================
    # Alerts
    # ==========================================================================
    ALERT_NOTIFIER: str = "none"  # "none" or "log"

    def thresholds(self) -> AnalyticsThresholds:
        """Analytics thresholds with the configured overrides applied."""
        return AnalyticsThresholds(
            consecutive_low_days=self.CONSECUTIVE_LOW_DAYS_TRIGGER,
            low_mood=self.LOW_MOOD_THRESHOLD,
            high_stress=self.HIGH_STRESS_THRESHOLD,
            high_anxiety=self.HIGH_ANXIETY_THRESHOLD,
            crisis_cooldown_hours=self.CRISIS_COOLDOWN_HOURS,
            prediction_recent_window=self.PREDICTION_RECENT_WINDOW,
        )


# Global settings instance
settings = Settings()

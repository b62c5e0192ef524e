"""
Check-in metrics validation.

Validates check-in metric values against allowed ranges.
"""

from datetime import date
from typing import Tuple, Optional, Dict, Any

from mentalspace.analytics.constants import JOURNAL_MAX_LENGTH, METRIC_KEYS, METRIC_MAX, METRIC_MIN


class MetricsValidator:
    """
    Validates check-in metric values against allowed ranges.
    """

    METRIC_RANGES: Dict[str, Tuple[int, int]] = {key: (METRIC_MIN, METRIC_MAX) for key in METRIC_KEYS}

    REQUIRED_METRICS = list(METRIC_KEYS)

    MAX_JOURNAL_LENGTH = JOURNAL_MAX_LENGTH

    @classmethod
    def validate(cls, metrics: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
        """
        Validate all metrics are present and within valid ranges.

        Args:
            metrics: dict with metric values

        Returns:
            tuple of (is_valid, error_message)
        """
        for metric in cls.REQUIRED_METRICS:
            if metric not in metrics:
                return False, f"Missing required field: {metric}"

            value = metrics[metric]

            if isinstance(value, bool) or not isinstance(value, int):
                return False, f"Field '{metric}' must be an integer"

            min_val, max_val = cls.METRIC_RANGES[metric]
            if value < min_val or value > max_val:
                return False, f"Field '{metric}' must be between {min_val} and {max_val}"

        return True, None

    @classmethod
    def validate_journal(cls, journal_entry: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate optional journal text.

        Rules:
            - Max 2000 characters after trimming whitespace
        """
        if journal_entry is None:
            return True, None

        if not isinstance(journal_entry, str):
            return False, "Journal entry must be a string"

        if len(journal_entry.strip()) > cls.MAX_JOURNAL_LENGTH:
            return False, f"Journal entry cannot exceed {cls.MAX_JOURNAL_LENGTH} characters"

        return True, None

    @classmethod
    def validate_date(cls, value: str) -> Tuple[bool, Optional[str]]:
        """Validate a YYYY-MM-DD calendar date string."""
        try:
            parsed = date.fromisoformat(value)
        except (TypeError, ValueError):
            return False, f"Invalid date '{value}', expected YYYY-MM-DD"
        if parsed.isoformat() != value:
            return False, f"Invalid date '{value}', expected YYYY-MM-DD"
        return True, None

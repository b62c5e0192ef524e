"""
Proactive alerts and trigger-date matching.
"""

import calendar
from datetime import date
from typing import Iterable, List, Optional, Tuple

from mentalspace.analytics.constants import (
    CONFIDENCE_LOW,
    DEFAULT_THRESHOLDS,
    SEVERITY_HIGH,
    WEEKDAY_NAMES,
    AnalyticsThresholds,
)
from mentalspace.analytics.models import (
    CheckIn,
    MoodPrediction,
    ProactiveAlert,
    TriggerDate,
    TriggerPattern,
)
from mentalspace.analytics.pattern_analyzer import chronological

RECOVERY_WINDOW = 3
RECOVERY_MIN_LOW_DAYS = 2


def occurrence_in_year(trigger: TriggerDate, year: int) -> date:
    """Anniversary of a repeating trigger date; Feb 29 falls on Feb 28 in non-leap years."""
    month, day = trigger.date.month, trigger.date.day
    if month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return date(year, month, day)


def matches_trigger_date(day: date, trigger_dates: Iterable[TriggerDate]) -> Optional[TriggerDate]:
    """The trigger date falling on day, considering annual repeats."""
    for trigger in trigger_dates:
        if trigger.date == day:
            return trigger
        if trigger.repeat_annually and day >= trigger.date and occurrence_in_year(trigger, day.year) == day:
            return trigger
    return None


def upcoming_trigger_dates(
    today: date,
    trigger_dates: Iterable[TriggerDate],
    lookahead_days: int = DEFAULT_THRESHOLDS.trigger_date_lookahead_days,
) -> List[Tuple[int, TriggerDate]]:
    """
    Trigger dates within [today, today + lookahead_days].

    Returns:
        (days_until, trigger) pairs, nearest first
    """
    found = []
    for trigger in trigger_dates:
        candidates = [trigger.date]
        if trigger.repeat_annually:
            candidates = [
                occurrence
                for occurrence in (
                    occurrence_in_year(trigger, today.year),
                    occurrence_in_year(trigger, today.year + 1),
                )
                if occurrence >= trigger.date
            ]
        for candidate in candidates:
            days_until = (candidate - today).days
            if 0 <= days_until <= lookahead_days:
                found.append((days_until, trigger))
                break
    return sorted(found, key=lambda pair: pair[0])


def _trigger_message(label: str, days_until: int) -> str:
    if days_until == 0:
        return f"Today is {label}. We're here for you with extra support."
    if days_until == 1:
        return f"Tomorrow is {label}. Would you like to prepare a lighter plan?"
    return f"{label} is in {days_until} days. Let's prepare together."


def generate_proactive_alert(
    today: date,
    prediction: Optional[MoodPrediction],
    patterns: List[TriggerPattern],
    trigger_dates: Iterable[TriggerDate],
    recent_checkins: Iterable[CheckIn],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[ProactiveAlert]:
    """
    Pick the single most relevant alert.

    Precedence: approaching trigger date, recovery mode, hard tomorrow,
    high-severity pattern (only when there is no prediction).
    """
    upcoming = upcoming_trigger_dates(today, trigger_dates, thresholds.trigger_date_lookahead_days)
    if upcoming:
        days_until, trigger = upcoming[0]
        return ProactiveAlert(
            type="trigger_approaching",
            title="Upcoming Difficult Date",
            message=_trigger_message(trigger.label, days_until),
            severity="critical" if days_until <= 1 else "warning",
            actionable=True,
            suggested_action="Activate a lighter plan",
            trigger_date=trigger.date,
        )

    recent = chronological(recent_checkins)[-RECOVERY_WINDOW:]
    recent_lows = [c for c in recent if c.mood is not None and c.mood <= thresholds.bad_day_mood]
    if len(recent_lows) >= RECOVERY_MIN_LOW_DAYS:
        return ProactiveAlert(
            type="recovery_mode",
            title="Recovery Support Active",
            message=(
                "We noticed you've been having a tough time. "
                "Your plan is adjusted to focus on what matters most."
            ),
            severity="warning",
            actionable=True,
            suggested_action="Continue with a lighter plan",
        )

    if (
        prediction is not None
        and prediction.predicted_mood <= thresholds.hard_day_prediction
        and prediction.confidence != CONFIDENCE_LOW
    ):
        day_name = WEEKDAY_NAMES[prediction.target_date.isoweekday() - 1]
        return ProactiveAlert(
            type="tomorrow_hard",
            title="Tomorrow Might Be Challenging",
            message=f"{day_name}s tend to be harder for you. Would you like a lighter, more manageable plan?",
            severity="info",
            actionable=True,
            suggested_action="Accept a lighter plan for tomorrow",
        )

    high_pattern = next((p for p in patterns if p.severity == SEVERITY_HIGH), None)
    if high_pattern is not None and prediction is None:
        return ProactiveAlert(
            type="pattern_detected",
            title="Pattern Noticed",
            message=f"{high_pattern.description}. We can help you prepare for these times.",
            severity="info",
            actionable=False,
        )

    return None

"""
Pattern analysis over a user's check-in history.

Groups check-ins by ISO weekday and scans the chronological history for
recurring trigger periods (consecutive low-mood runs, stress spikes).
"""

from collections import defaultdict
from datetime import timedelta
from typing import Callable, Dict, Iterable, List, Optional

from mentalspace.analytics.constants import (
    DEFAULT_THRESHOLDS,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    WEEKDAY_NAMES,
    AnalyticsThresholds,
)
from mentalspace.analytics.metric_summary import round_half_up
from mentalspace.analytics.models import CheckIn, DayOfWeekPattern, TriggerPattern


def chronological(checkins: Iterable[CheckIn]) -> List[CheckIn]:
    """Sort by date, keeping the last record when a date appears twice."""
    by_date: Dict = {}
    for checkin in checkins:
        by_date[checkin.date] = checkin
    return [by_date[day] for day in sorted(by_date)]


def analyze_day_of_week(
    checkins: Iterable[CheckIn],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[DayOfWeekPattern]:
    """
    Mean mood (and stress) per ISO weekday.

    A weekday is harder than average when its mean mood is more than
    harder_day_margin below the mean of all observed weekday means.
    Weekdays with fewer than min_weekday_samples check-ins are never flagged.

    Returns:
        One pattern per observed weekday, Monday first. Empty without data.
    """
    moods: Dict[int, List[int]] = defaultdict(list)
    stresses: Dict[int, List[int]] = defaultdict(list)

    for checkin in chronological(checkins):
        if checkin.mood is None:
            continue
        weekday = checkin.date.isoweekday()
        moods[weekday].append(checkin.mood)
        if checkin.stress is not None:
            stresses[weekday].append(checkin.stress)

    if not moods:
        return []

    means = {weekday: sum(values) / len(values) for weekday, values in moods.items()}
    overall = sum(means.values()) / len(means)

    patterns = []
    for weekday in sorted(means):
        count = len(moods[weekday])
        stress_values = stresses.get(weekday)
        patterns.append(DayOfWeekPattern(
            weekday=weekday,
            day_name=WEEKDAY_NAMES[weekday - 1],
            average_mood=round_half_up(means[weekday]),
            average_stress=(
                round_half_up(sum(stress_values) / len(stress_values)) if stress_values else None
            ),
            checkin_count=count,
            is_harder=(
                count >= thresholds.min_weekday_samples
                and means[weekday] < overall - thresholds.harder_day_margin
            ),
        ))

    return patterns


def find_runs(
    checkins: List[CheckIn],
    predicate: Callable[[CheckIn], bool],
    min_length: int,
) -> List[List[CheckIn]]:
    """
    Runs of consecutive calendar days whose check-ins satisfy predicate.

    A missing day breaks the run. Input must be chronological.
    """
    runs: List[List[CheckIn]] = []
    current: List[CheckIn] = []

    for checkin in checkins:
        if predicate(checkin):
            if current and checkin.date - current[-1].date == timedelta(days=1):
                current.append(checkin)
            else:
                if len(current) >= min_length:
                    runs.append(current)
                current = [checkin]
        else:
            if len(current) >= min_length:
                runs.append(current)
            current = []

    if len(current) >= min_length:
        runs.append(current)

    return runs


def _hard_days_pattern(patterns: List[DayOfWeekPattern]) -> Optional[TriggerPattern]:
    hard_days = [p for p in patterns if p.is_harder]
    if not hard_days:
        return None

    names = ", ".join(p.day_name for p in hard_days)
    verb = "tends" if len(hard_days) == 1 else "tend"
    if len(hard_days) >= 3:
        severity = SEVERITY_HIGH
    elif len(hard_days) == 2:
        severity = SEVERITY_MEDIUM
    else:
        severity = SEVERITY_LOW

    return TriggerPattern(
        type="day_of_week",
        description=f"{names} {verb} to be harder",
        severity=severity,
        occurrences=max(p.checkin_count for p in hard_days),
        affected_days=[p.weekday for p in hard_days],
    )


def detect_trigger_patterns(
    checkins: Iterable[CheckIn],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[TriggerPattern]:
    """
    Detect recurring trigger periods.

    - day_of_week: weekdays flagged harder than average
    - consecutive_low: consecutive_low_days+ days with mood <= low_mood
    - stress_spike: stress_spike_min_days+ days with stress >= high_stress

    Each run-based pattern carries its date range.
    """
    ordered = chronological(checkins)
    if not ordered:
        return []

    patterns: List[TriggerPattern] = []

    hard_days = _hard_days_pattern(analyze_day_of_week(ordered, thresholds))
    if hard_days:
        patterns.append(hard_days)

    low_runs = find_runs(
        ordered,
        lambda c: c.mood is not None and c.mood <= thresholds.low_mood,
        thresholds.consecutive_low_days,
    )
    for run in low_runs:
        patterns.append(TriggerPattern(
            type="consecutive_low",
            description=f"{len(run)} consecutive low-mood days",
            severity=SEVERITY_HIGH if len(run) > thresholds.consecutive_low_days else SEVERITY_MEDIUM,
            occurrences=len(run),
            start_date=run[0].date,
            end_date=run[-1].date,
        ))

    spike_runs = find_runs(
        ordered,
        lambda c: c.stress is not None and c.stress >= thresholds.high_stress,
        thresholds.stress_spike_min_days,
    )
    for run in spike_runs:
        extra_days = len(run) - thresholds.stress_spike_min_days
        if extra_days >= 2:
            severity = SEVERITY_HIGH
        elif extra_days == 1:
            severity = SEVERITY_MEDIUM
        else:
            severity = SEVERITY_LOW
        patterns.append(TriggerPattern(
            type="stress_spike",
            description=f"High stress for {len(run)} days in a row",
            severity=severity,
            occurrences=len(run),
            start_date=run[0].date,
            end_date=run[-1].date,
        ))

    return patterns

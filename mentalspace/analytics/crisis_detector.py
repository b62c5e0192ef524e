"""
Crisis indicator detection.

Classifies a single check-in against severity thresholds, screens journal
text, and checks the rolling low-mood window. The result is advisory: it
drives UI prompting, never an automated emergency response.
"""

import re
from datetime import timedelta
from typing import Iterable, List, Mapping, Optional, Union

from mentalspace.analytics.constants import (
    DEFAULT_THRESHOLDS,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    SEVERITY_RANK,
    AnalyticsThresholds,
)
from mentalspace.analytics.models import CheckIn, CrisisAssessment
from mentalspace.analytics.pattern_analyzer import chronological

Metrics = Union[CheckIn, Mapping[str, Optional[int]]]

HIGH_TEXT_PATTERNS = [
    re.compile(r"\b(want|going|plan|planning|decided)\s+to\s+(kill|end|hurt)\s+(myself|my\s*self|my\s+life)"),
    re.compile(r"\b(suicide|suicidal)\b"),
    re.compile(r"\bend\s+(it\s+all|my\s+life|everything)\b"),
    re.compile(r"\bcan'?t\s+go\s+on\b"),
    re.compile(r"\bno\s+(reason|point)\s+(to\s+live|in\s+living)"),
]

MEDIUM_TEXT_PATTERNS = [
    re.compile(r"\bwish\s+i\s+(wasn'?t|were\s+not)\s+(here|alive|born)"),
    re.compile(r"\b(everyone|world)\s+.*\s+better\s+(off|without)\s+.*\s+me\b"),
    re.compile(r"\bcan'?t\s+take\s+(it|this)\s+anymore\b"),
    re.compile(r"\bfeeling\s+(hopeless|worthless|empty)\b"),
]

LOW_TEXT_PATTERNS = [
    re.compile(r"\b(self[- ]?harm|hurting\s+myself)\b"),
    re.compile(r"\bgiving\s+up\b"),
    re.compile(r"\bno\s+hope\b"),
]

NEGATION_PATTERNS = [
    re.compile(r"\b(don'?t|do\s+not|never|no\s+longer)\s+want\s+to\s+(die|kill|hurt)"),
    re.compile(r"\bnot\s+(suicidal|thinking\s+about\s+suicide)"),
    re.compile(r"\b(glad|happy|grateful)\s+.*\s+(alive|here|living)"),
    re.compile(r"\bused\s+to\s+(feel|think|want)"),
    re.compile(r"\bif\s+i\s+(ever|was|were)\b"),
]


def _get(metrics: Metrics, name: str) -> Optional[int]:
    if isinstance(metrics, CheckIn):
        value = metrics.metric(name)
    else:
        value = metrics.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _at_most(value: Optional[int], limit: int) -> bool:
    return value is not None and value <= limit


def _at_least(value: Optional[int], limit: int) -> bool:
    return value is not None and value >= limit


def assess_metrics(
    metrics: Metrics,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[CrisisAssessment]:
    """
    Classify one check-in's metrics.

    Precedence:
        1. Count concerning flags: mood <= low_mood, anxiety >= elevated_anxiety,
           stress >= elevated_stress, energy <= low_energy
        2. mood <= very_low_mood or 3+ flags -> high
        3. 2+ flags -> medium
        4. any single weak indicator (mood <= low_mood, anxiety >= high_anxiety,
           stress >= high_stress, sleep <= low_sleep) -> low
        5. otherwise None

    Returns:
        CrisisAssessment or None when nothing is concerning
    """
    mood = _get(metrics, "mood")
    stress = _get(metrics, "stress")
    anxiety = _get(metrics, "anxiety")
    energy = _get(metrics, "energy")
    sleep = _get(metrics, "sleep")

    concerning = []
    if _at_most(mood, thresholds.low_mood):
        concerning.append(f"Low mood ({mood})")
    if _at_least(anxiety, thresholds.elevated_anxiety):
        concerning.append(f"High anxiety ({anxiety})")
    if _at_least(stress, thresholds.elevated_stress):
        concerning.append(f"High stress ({stress})")
    if _at_most(energy, thresholds.low_energy):
        concerning.append(f"Very low energy ({energy})")

    very_low_mood = _at_most(mood, thresholds.very_low_mood)

    if very_low_mood or len(concerning) >= 3:
        indicators = [i for i in concerning if not i.startswith("Low mood")]
        if very_low_mood:
            indicators.insert(0, f"Very low mood ({mood})")
        elif len(indicators) < len(concerning):
            indicators.insert(0, f"Low mood ({mood})")
        return _assessment(SEVERITY_HIGH, indicators)

    if len(concerning) >= 2:
        return _assessment(SEVERITY_MEDIUM, concerning)

    weak = []
    if _at_most(mood, thresholds.low_mood):
        weak.append(f"Low mood ({mood})")
    if _at_least(anxiety, thresholds.high_anxiety):
        weak.append(f"High anxiety ({anxiety})")
    if _at_least(stress, thresholds.high_stress):
        weak.append(f"High stress ({stress})")
    if _at_most(sleep, thresholds.low_sleep):
        weak.append(f"Poor sleep ({sleep})")

    if weak:
        return _assessment(SEVERITY_LOW, weak)

    return None


def _assessment(severity: str, indicators: List[str], trigger_type: str = "metrics") -> CrisisAssessment:
    return CrisisAssessment(
        severity=severity,
        reason=", ".join(indicators),
        indicators=indicators,
        trigger_type=trigger_type,
    )


def screen_journal_text(text: Optional[str]) -> Optional[CrisisAssessment]:
    """
    Screen journal text for crisis language.

    Negated, past-tense and hypothetical phrasing suppresses detection.
    """
    if not text or not text.strip():
        return None

    normalized = text.lower().strip()
    if any(p.search(normalized) for p in NEGATION_PATTERNS):
        return None

    for severity, patterns, label in (
        (SEVERITY_HIGH, HIGH_TEXT_PATTERNS, "Journal contains crisis language"),
        (SEVERITY_MEDIUM, MEDIUM_TEXT_PATTERNS, "Journal expresses hopelessness"),
        (SEVERITY_LOW, LOW_TEXT_PATTERNS, "Journal mentions distress"),
    ):
        if any(p.search(normalized) for p in patterns):
            return _assessment(severity, [label], trigger_type="keyword")

    return None


def detect_low_mood_window(
    checkins: Iterable[CheckIn],
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[CrisisAssessment]:
    """
    Flag the latest consecutive_low_days calendar days all at low mood.

    The window ends at the most recent check-in and must have no gaps.
    """
    window = thresholds.consecutive_low_days
    recent = chronological(checkins)[-window:]
    if len(recent) < window:
        return None

    if recent[-1].date - recent[0].date != timedelta(days=window - 1):
        return None

    if all(_at_most(c.mood, thresholds.low_mood) for c in recent):
        return _assessment(
            SEVERITY_MEDIUM,
            [f"Low mood for {window} consecutive days"],
            trigger_type="low_mood_pattern",
        )

    return None


def most_severe(*assessments: Optional[CrisisAssessment]) -> Optional[CrisisAssessment]:
    """Highest-severity assessment; earlier arguments win ties."""
    found = [a for a in assessments if a is not None]
    if not found:
        return None
    return max(found, key=lambda a: SEVERITY_RANK[a.severity])


def evaluate_checkin(
    checkin: CheckIn,
    history: Iterable[CheckIn] = (),
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[CrisisAssessment]:
    """
    Combined evaluation for a new check-in.

    Args:
        checkin: The check-in just recorded
        history: Earlier check-ins, used for the low-mood window

    Returns:
        The most severe of metric, journal and window assessments
    """
    window_input = [c for c in history if c.date != checkin.date] + [checkin]
    return most_severe(
        screen_journal_text(checkin.journal_entry),
        assess_metrics(checkin, thresholds),
        detect_low_mood_window(window_input, thresholds),
    )

"""Unit tests for weekday patterns and trigger-pattern detection."""

from datetime import date

from mentalspace.analytics.pattern_analyzer import (
    analyze_day_of_week,
    chronological,
    detect_trigger_patterns,
)
from tests.conftest import days_ago, make_checkin


def two_weeks_with_hard_mondays():
    """14 days ending today; Mondays at mood 2, every other day at 7."""
    checkins = []
    for n in range(14):
        day = days_ago(n)
        checkins.append(make_checkin(day, mood=2 if day.isoweekday() == 1 else 7))
    return checkins


# ─────────────────────────────────────────────────────────────────
# analyze_day_of_week
# ─────────────────────────────────────────────────────────────────


class TestAnalyzeDayOfWeek:
    def test_flags_weekday_below_overall_mean(self):
        patterns = analyze_day_of_week(two_weeks_with_hard_mondays())

        monday = next(p for p in patterns if p.weekday == 1)
        assert monday.day_name == "Monday"
        assert monday.average_mood == 2.0
        assert monday.checkin_count == 2
        assert monday.is_harder is True
        assert not any(p.is_harder for p in patterns if p.weekday != 1)

    def test_one_pattern_per_observed_weekday_monday_first(self):
        patterns = analyze_day_of_week(two_weeks_with_hard_mondays())

        assert [p.weekday for p in patterns] == [1, 2, 3, 4, 5, 6, 7]

    def test_single_sample_weekday_never_flagged(self):
        checkins = [
            make_checkin(days_ago(n), mood=7) for n in range(1, 7) if days_ago(n).isoweekday() != 1
        ]
        checkins.append(make_checkin(date(2026, 3, 16), mood=1))  # lone Monday

        monday = next(p for p in analyze_day_of_week(checkins) if p.weekday == 1)
        assert monday.checkin_count == 1
        assert monday.is_harder is False

    def test_empty_history(self):
        assert analyze_day_of_week([]) == []

    def test_average_stress_reported(self):
        checkins = [
            make_checkin(date(2026, 3, 16), stress=8),
            make_checkin(date(2026, 3, 9), stress=5),
        ]

        (monday,) = analyze_day_of_week(checkins)
        assert monday.average_stress == 6.5

    def test_checkins_without_mood_ignored(self):
        checkins = [make_checkin(days_ago(0), mood=None)]

        assert analyze_day_of_week(checkins) == []


# ─────────────────────────────────────────────────────────────────
# detect_trigger_patterns
# ─────────────────────────────────────────────────────────────────


class TestDetectTriggerPatterns:
    def test_three_consecutive_low_days(self):
        checkins = [
            make_checkin(days_ago(4), mood=6),
            make_checkin(days_ago(3), mood=3),
            make_checkin(days_ago(2), mood=2),
            make_checkin(days_ago(1), mood=3),
            make_checkin(days_ago(0), mood=6),
        ]

        (pattern,) = detect_trigger_patterns(checkins)

        assert pattern.type == "consecutive_low"
        assert pattern.severity == "medium"
        assert pattern.occurrences == 3
        assert pattern.start_date == days_ago(3)
        assert pattern.end_date == days_ago(1)

    def test_longer_low_run_is_high_severity(self):
        checkins = [make_checkin(days_ago(n), mood=2) for n in range(4)]

        (pattern,) = detect_trigger_patterns(checkins)

        assert pattern.type == "consecutive_low"
        assert pattern.severity == "high"
        assert pattern.occurrences == 4

    def test_missing_day_breaks_run(self):
        checkins = [
            make_checkin(days_ago(4), mood=2),
            make_checkin(days_ago(3), mood=2),
            make_checkin(days_ago(1), mood=2),
            make_checkin(days_ago(0), mood=2),
        ]

        assert detect_trigger_patterns(checkins) == []

    def test_two_day_stress_spike(self):
        checkins = [
            make_checkin(days_ago(2), stress=5),
            make_checkin(days_ago(1), stress=8),
            make_checkin(days_ago(0), stress=9),
        ]

        (pattern,) = detect_trigger_patterns(checkins)

        assert pattern.type == "stress_spike"
        assert pattern.severity == "low"
        assert pattern.start_date == days_ago(1)
        assert pattern.end_date == days_ago(0)

    def test_four_day_stress_spike_is_high(self):
        checkins = [make_checkin(days_ago(n), stress=9) for n in range(4)]

        (pattern,) = detect_trigger_patterns(checkins)
        assert pattern.severity == "high"

    def test_single_high_stress_day_is_not_a_spike(self):
        checkins = [make_checkin(days_ago(1), stress=4), make_checkin(days_ago(0), stress=9)]

        assert detect_trigger_patterns(checkins) == []

    def test_hard_weekday_reported_as_pattern(self):
        patterns = detect_trigger_patterns(two_weeks_with_hard_mondays())

        day_patterns = [p for p in patterns if p.type == "day_of_week"]
        assert len(day_patterns) == 1
        assert day_patterns[0].affected_days == [1]
        assert day_patterns[0].description == "Monday tends to be harder"
        assert day_patterns[0].severity == "low"

    def test_empty_history(self):
        assert detect_trigger_patterns([]) == []


class TestChronological:
    def test_sorts_and_keeps_last_duplicate(self):
        first = make_checkin(days_ago(0), mood=3)
        second = make_checkin(days_ago(0), mood=8)
        older = make_checkin(days_ago(1))

        result = chronological([first, older, second])

        assert result == [older, second]

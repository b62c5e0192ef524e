"""Unit tests for crisis indicator detection."""

import pytest

from mentalspace.analytics.crisis_detector import (
    assess_metrics,
    detect_low_mood_window,
    evaluate_checkin,
    most_severe,
    screen_journal_text,
)
from mentalspace.analytics.models import CrisisAssessment
from tests.conftest import days_ago, make_checkin


# ─────────────────────────────────────────────────────────────────
# assess_metrics
# ─────────────────────────────────────────────────────────────────


class TestAssessMetrics:
    def test_very_low_mood_alone_is_high(self):
        result = assess_metrics({"mood": 1})

        assert result.severity == "high"
        assert "Very low mood (1)" in result.reason

    def test_three_concerning_flags_is_high(self):
        result = assess_metrics({"mood": 5, "anxiety": 8, "stress": 8, "energy": 1})

        assert result.severity == "high"
        assert result.indicators == ["High anxiety (8)", "High stress (8)", "Very low energy (1)"]

    def test_two_concerning_flags_is_medium(self):
        result = assess_metrics({"mood": 3, "stress": 7, "anxiety": 4, "energy": 6, "sleep": 6})

        assert result.severity == "medium"
        assert result.reason == "Low mood (3), High stress (7)"

    def test_low_mood_alone_is_low(self):
        result = assess_metrics({"mood": 3})

        assert result.severity == "low"
        assert result.reason == "Low mood (3)"

    def test_poor_sleep_alone_is_low(self):
        result = assess_metrics({"mood": 6, "sleep": 3})

        assert result.severity == "low"
        assert result.indicators == ["Poor sleep (3)"]

    def test_healthy_metrics_return_none(self):
        assert assess_metrics({"mood": 6, "stress": 5, "anxiety": 4, "energy": 6, "sleep": 6}) is None

    def test_elevated_anxiety_alone_below_weak_threshold(self):
        # 7 counts toward the concerning total but is not a weak indicator on its own
        assert assess_metrics({"mood": 6, "anxiety": 7}) is None

    def test_high_anxiety_alone_is_low(self):
        assert assess_metrics({"mood": 6, "anxiety": 8}).severity == "low"

    def test_accepts_checkin(self, today):
        assert assess_metrics(make_checkin(today, mood=2)).severity == "high"

    def test_missing_metrics_are_not_concerning(self):
        assert assess_metrics({}) is None


# ─────────────────────────────────────────────────────────────────
# screen_journal_text
# ─────────────────────────────────────────────────────────────────


class TestScreenJournalText:
    @pytest.mark.parametrize("text", [
        "I just want to end it all",
        "Sometimes I feel suicidal",
        "I can't go on like this",
    ])
    def test_high_severity_language(self, text):
        result = screen_journal_text(text)

        assert result.severity == "high"
        assert result.trigger_type == "keyword"

    def test_hopelessness_is_medium(self):
        assert screen_journal_text("Been feeling hopeless all week").severity == "medium"

    def test_giving_up_is_low(self):
        assert screen_journal_text("I'm close to giving up on this project").severity == "low"

    @pytest.mark.parametrize("text", [
        "I'm not suicidal, just tired",
        "I used to feel suicidal but therapy helps",
        "I don't want to die, I want things to change",
    ])
    def test_negated_language_suppressed(self, text):
        assert screen_journal_text(text) is None

    def test_empty_text(self):
        assert screen_journal_text(None) is None
        assert screen_journal_text("   ") is None

    def test_ordinary_entry(self):
        assert screen_journal_text("Went for a walk and cooked dinner.") is None


# ─────────────────────────────────────────────────────────────────
# detect_low_mood_window
# ─────────────────────────────────────────────────────────────────


class TestDetectLowMoodWindow:
    def test_three_consecutive_low_days(self):
        checkins = [make_checkin(days_ago(n), mood=3) for n in range(3)]

        result = detect_low_mood_window(checkins)

        assert result.severity == "medium"
        assert result.trigger_type == "low_mood_pattern"

    def test_gap_in_window(self):
        checkins = [make_checkin(days_ago(n), mood=2) for n in (0, 1, 3)]

        assert detect_low_mood_window(checkins) is None

    def test_window_must_end_at_latest_checkin(self):
        checkins = [make_checkin(days_ago(n), mood=2) for n in (1, 2, 3)]
        checkins.append(make_checkin(days_ago(0), mood=7))

        assert detect_low_mood_window(checkins) is None

    def test_too_few_checkins(self):
        assert detect_low_mood_window([make_checkin(days_ago(0), mood=1)]) is None


# ─────────────────────────────────────────────────────────────────
# evaluate_checkin
# ─────────────────────────────────────────────────────────────────


class TestEvaluateCheckin:
    def test_journal_outranks_healthy_metrics(self, today):
        checkin = make_checkin(today, journal="I want to end it all")

        result = evaluate_checkin(checkin)

        assert result.severity == "high"
        assert result.trigger_type == "keyword"

    def test_low_mood_window_outranks_single_weak_indicator(self, today):
        history = [make_checkin(days_ago(n), mood=3) for n in (1, 2)]
        checkin = make_checkin(today, mood=3)

        result = evaluate_checkin(checkin, history)

        assert result.severity == "medium"
        assert result.trigger_type == "low_mood_pattern"

    def test_history_entry_for_same_day_replaced(self, today):
        history = [make_checkin(today, mood=1), make_checkin(days_ago(1), mood=7)]

        assert evaluate_checkin(make_checkin(today, mood=7), history) is None

    def test_nothing_concerning(self, today):
        assert evaluate_checkin(make_checkin(today), []) is None


class TestMostSevere:
    def test_ties_keep_first(self):
        first = CrisisAssessment(severity="medium", reason="a")
        second = CrisisAssessment(severity="medium", reason="b")

        assert most_severe(None, first, second) is first

    def test_all_none(self):
        assert most_severe(None, None) is None

"""Unit tests for next-day mood prediction."""

from datetime import date

from mentalspace.analytics.predictor import confidence_label, predict_mood, recent_trend
from tests.conftest import days_ago, make_checkin

THURSDAY = date(2026, 3, 19)


def steady_history(days, mood=6):
    return [make_checkin(days_ago(n), mood=mood) for n in range(days)]


class TestPredictMood:
    def test_no_history_means_no_prediction(self):
        assert predict_mood([], THURSDAY) is None

    def test_history_on_or_after_target_ignored(self):
        checkins = [make_checkin(THURSDAY, mood=5)]

        assert predict_mood(checkins, THURSDAY) is None

    def test_uses_weekday_mean(self):
        # 4 weeks: every weekday observed 4 times at mood 6
        prediction = predict_mood(steady_history(28), THURSDAY)

        assert prediction.target_date == THURSDAY
        assert prediction.predicted_mood == 6.0
        assert prediction.based_on_day_of_week is True
        assert prediction.based_on_recent_trend is False
        assert prediction.reasoning == "Based on 4 previous Thursdays"

    def test_consistent_recent_moods_add_confidence(self):
        prediction = predict_mood(steady_history(28), THURSDAY)

        # 4 samples -> 0.4, plus consistency bonus
        assert prediction.confidence_score == 0.5
        assert prediction.confidence == "medium"

    def test_confidence_grows_with_weekday_samples(self):
        prediction = predict_mood(steady_history(63), THURSDAY)

        assert prediction.confidence == "high"
        assert prediction.confidence_score == 0.95

    def test_falls_back_to_recent_trend_at_low_confidence(self):
        checkins = [
            make_checkin(date(2026, 3, 16), mood=4),
            make_checkin(date(2026, 3, 17), mood=5),
            make_checkin(date(2026, 3, 18), mood=6),
        ]

        prediction = predict_mood(checkins, THURSDAY)

        # recent mean 5 plus half the +1.5 trend
        assert prediction.predicted_mood == 5.8
        assert prediction.confidence == "low"
        assert prediction.based_on_day_of_week is False
        assert prediction.based_on_recent_trend is True

    def test_prediction_clamped_to_scale(self):
        checkins = [make_checkin(date(2026, 3, 12), mood=10)]
        checkins += [make_checkin(date(2026, 3, d), mood=1) for d in (13, 14)]
        checkins += [make_checkin(date(2026, 3, d), mood=10) for d in (15, 16, 17, 18)]

        prediction = predict_mood(checkins, THURSDAY)

        assert prediction.based_on_recent_trend is True
        assert prediction.predicted_mood == 10.0

    def test_same_input_same_output(self):
        history = steady_history(21, mood=5)

        assert predict_mood(history, THURSDAY) == predict_mood(history, THURSDAY)


class TestHelpers:
    def test_recent_trend(self):
        assert recent_trend([2, 2, 5, 5]) == 3.0
        assert recent_trend([5]) == 0.0

    def test_confidence_label_boundaries(self):
        assert confidence_label(0.29) == "low"
        assert confidence_label(0.3) == "medium"
        assert confidence_label(0.6) == "high"

"""Tests for keyword sentiment and emotion tagging."""

import pytest

from relay_agents.orchestrator.sentiment import analyze_sentiment, analyze_tone


class TestAnalyzeSentiment:
    """Test suite for analyze_sentiment."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("This is great, thanks!", "positive"),
            ("This is terrible and I hate it", "negative"),
            ("The meeting is at noon", "neutral"),
            ("good but bad", "neutral"),
        ],
    )
    def test_sentiment(self, text, expected):
        assert analyze_sentiment(text) == expected

    def test_whole_words_only(self):
        # "know" contains "no" and "badge" contains "bad"
        assert analyze_sentiment("I know about the badge") == "neutral"


class TestAnalyzeTone:
    """Test suite for analyze_tone."""

    def test_neutral_without_emotion_words(self):
        tone = analyze_tone("Schedule the report for Monday")
        assert tone.emotion == "neutral"
        assert tone.confidence == 0.5

    def test_dominant_emotion(self):
        tone = analyze_tone("I'm worried and nervous, a bit sad too")
        assert tone.emotion == "anxious"
        assert tone.confidence == 0.9

    def test_confidence_capped(self):
        tone = analyze_tone("anxious worried nervous stressed scared afraid")
        assert tone.confidence == 0.95

    def test_metadata(self):
        tone = analyze_tone("I am so happy, thanks")
        assert tone.to_metadata() == {
            "sentiment": "positive",
            "emotion": "happy",
            "confidence": 0.75,
        }

"""Keyword-based sentiment and emotion tagging for inbound messages."""

import re
from dataclasses import dataclass

POSITIVE_WORDS = ["good", "great", "awesome", "excellent", "love", "like", "happy", "yes", "thanks"]
NEGATIVE_WORDS = ["bad", "terrible", "hate", "no", "sad", "angry", "frustrated", "awful"]

EMOTION_LEXICON: dict[str, list[str]] = {
    "happy": ["happy", "joyful", "cheerful", "delighted", "pleased", "glad", "content"],
    "sad": ["sad", "unhappy", "depressed", "down", "upset", "heartbroken"],
    "angry": ["angry", "mad", "furious", "irritated", "annoyed"],
    "anxious": ["anxious", "worried", "nervous", "stressed", "scared", "afraid"],
    "excited": ["excited", "thrilled", "eager", "enthusiastic", "pumped"],
    "frustrated": ["frustrated", "stuck", "exasperated", "fed up"],
    "confused": ["confused", "puzzled", "lost", "unsure", "uncertain"],
    "calm": ["calm", "relaxed", "peaceful", "serene"],
}


@dataclass
class MessageTone:
    """Sentiment and dominant emotion of a message."""

    sentiment: str
    emotion: str
    confidence: float

    def to_metadata(self) -> dict:
        return {
            "sentiment": self.sentiment,
            "emotion": self.emotion,
            "confidence": self.confidence,
        }


def _count_words(text: str, words: list[str]) -> int:
    return sum(1 for word in words if re.search(rf"\b{re.escape(word)}\b", text))


def analyze_sentiment(text: str) -> str:
    """Classify text as positive, negative or neutral by word counts."""
    text_lower = text.lower()
    positive = _count_words(text_lower, POSITIVE_WORDS)
    negative = _count_words(text_lower, NEGATIVE_WORDS)

    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def analyze_tone(text: str) -> MessageTone:
    """Detect sentiment and the dominant emotion of a message.

    Emotions are scored by lexicon hits; ties keep lexicon order. Confidence
    grows with the number of hits and is capped at 0.95.
    """
    text_lower = text.lower()
    best_emotion = "neutral"
    best_hits = 0
    for emotion, words in EMOTION_LEXICON.items():
        hits = _count_words(text_lower, words)
        if hits > best_hits:
            best_emotion, best_hits = emotion, hits

    confidence = 0.5 if best_hits == 0 else min(0.6 + 0.15 * best_hits, 0.95)
    return MessageTone(
        sentiment=analyze_sentiment(text),
        emotion=best_emotion,
        confidence=round(confidence, 2),
    )

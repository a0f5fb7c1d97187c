"""Keyword intent rules for AstroBot.

Rules are plain data evaluated in order; the first rule with a keyword that
occurs (case-insensitive substring) in the message wins.
"""

from enum import Enum


class Intent(str, Enum):
    ASTEROID = "asteroid"
    MARS = "mars"
    APOD = "apod"


CASUAL_KEYWORDS = ("hello", "hi", "hey", "thanks", "thank you", "bye", "joke", "how are you")

TOPIC_RULES: list[tuple[Intent, tuple[str, ...]]] = [
    (Intent.ASTEROID, ("asteroid", "neo", "near-earth")),
    (Intent.MARS, ("mars", "rover")),
    (Intent.APOD, ("astronomy", "apod", "picture")),
]


def is_casual(message: str) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in CASUAL_KEYWORDS)


def classify_topic(message: str) -> Intent | None:
    """Return the first matching NASA topic, or None if nothing matches."""
    lowered = message.lower()
    for intent, keywords in TOPIC_RULES:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return None

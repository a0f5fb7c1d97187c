"""Tests for keyword intent classification."""

import pytest

from backend.agent.intents import Intent, classify_topic, is_casual


class TestCasual:

    @pytest.mark.parametrize("message", [
        "hello there",
        "Hi!",
        "HEY AstroBot",
        "thanks a lot",
        "Thank you",
        "bye",
        "tell me a joke",
        "How are you today?",
    ])
    def test_casual_messages(self, message):
        assert is_casual(message)

    @pytest.mark.parametrize("message", [
        "tell me about asteroids near earth",
        "latest rover images",
        "apod",
    ])
    def test_non_casual_messages(self, message):
        assert not is_casual(message)


class TestClassifyTopic:

    @pytest.mark.parametrize("message, expected", [
        ("Any asteroid passing by?", Intent.ASTEROID),
        ("What NEO objects are close?", Intent.ASTEROID),
        ("near-earth comets", Intent.ASTEROID),
        ("Show me Mars", Intent.MARS),
        ("what is the rover doing", Intent.MARS),
        ("astronomy picture please", Intent.APOD),
        ("today's APOD", Intent.APOD),
    ])
    def test_buckets(self, message, expected):
        assert classify_topic(message) == expected

    def test_asteroid_beats_mars(self):
        assert classify_topic("could an asteroid hit mars?") == Intent.ASTEROID

    def test_mars_beats_apod(self):
        assert classify_topic("a picture from the mars rover") == Intent.MARS

    def test_no_match(self):
        assert classify_topic("what is a black hole") is None

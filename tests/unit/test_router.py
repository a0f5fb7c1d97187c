"""Unit tests for AstroBot response routing and the fallback cascade."""

import re

import pytest

from backend.agent.prompts import (
    CANNED_REPLIES,
    DEFAULT_REPLY,
    PERSONA_PROMPT,
    VISION_APOLOGY,
    VISION_DEFAULT_PROMPT,
)
from backend.agent.router import AssistantQuery, AssistantRouter
from backend.api.schemas import ChatTurn
from backend.core.errors import UpstreamError, UpstreamTimeoutError
from backend.core.genai_adapter import GenAIAdapter
from backend.core.nasa_client import NasaClient, utc_today


@pytest.fixture
def nasa(mocker):
    client = mocker.MagicMock(spec=NasaClient)
    client.is_configured.return_value = True
    return client


@pytest.fixture
def genai(mocker):
    adapter = mocker.MagicMock(spec=GenAIAdapter)
    adapter.is_configured.return_value = True
    adapter.generate.return_value = "Space is wonderful!"
    adapter.describe_image.return_value = "A spiral galaxy."
    return adapter


@pytest.fixture
def router(nasa, genai, today):
    return AssistantRouter(nasa, genai, nasa_timeout=0.5, today=lambda: today)


class TestVisionPath:

    def test_image_goes_to_vision_regardless_of_keywords(self, router, nasa, genai):
        reply = router.route(AssistantQuery(message="asteroid mars apod", image=b"img"))

        assert reply.source == "ai"
        assert reply.text == "A spiral galaxy."
        nasa.browse_neos.assert_not_called()
        genai.generate.assert_not_called()

    def test_empty_message_uses_default_prompt(self, router, genai):
        router.route(AssistantQuery(message="  ", image=b"img", image_mime_type="image/png"))
        genai.describe_image.assert_called_once_with(VISION_DEFAULT_PROMPT, b"img", "image/png")

    def test_vision_failure_returns_apology_without_fallback(self, router, nasa, genai):
        genai.describe_image.side_effect = UpstreamTimeoutError("slow")

        reply = router.route(AssistantQuery(message="asteroid", image=b"img"))

        assert reply.text == VISION_APOLOGY
        assert reply.source == "ai"
        genai.generate.assert_not_called()
        nasa.browse_neos.assert_not_called()

    def test_image_without_ai_key_uses_keyword_routing(self, router, nasa, genai, neo_browse_payload):
        genai.is_configured.return_value = False
        nasa.browse_neos.return_value = neo_browse_payload

        reply = router.route(AssistantQuery(message="asteroid", image=b"img"))

        assert reply.source == "nasa"
        genai.describe_image.assert_not_called()


class TestCasualPath:

    def test_hello_with_only_ai_key(self, router, nasa, genai):
        nasa.is_configured.return_value = False

        reply = router.route(AssistantQuery(message="hello"))

        assert reply.source == "ai"
        assert reply.text
        kwargs = genai.generate.call_args.kwargs
        assert kwargs["system_instruction"] == PERSONA_PROMPT

    def test_casual_beats_nasa_topic(self, router, nasa):
        reply = router.route(AssistantQuery(message="hey, any asteroid news?"))
        assert reply.source == "ai"
        nasa.browse_neos.assert_not_called()

    def test_history_forwarded(self, router, genai):
        history = [ChatTurn(role="user", content="hi"), ChatTurn(role="assistant", content="Hello!")]
        router.route(AssistantQuery(message="thanks", history=history))
        assert genai.generate.call_args.kwargs["history"] == history

    def test_casual_ai_failure_goes_to_canned_without_second_call(self, router, genai):
        genai.generate.side_effect = UpstreamError("down")

        reply = router.route(AssistantQuery(message="hello"))

        assert reply.text == CANNED_REPLIES["hello"]
        assert reply.source == "ai"
        assert genai.generate.call_count == 1


class TestNasaPath:

    def test_asteroid_summary_has_count(self, router, nasa, neo_browse_payload):
        nasa.browse_neos.return_value = neo_browse_payload

        reply = router.route(AssistantQuery(message="tell me about asteroids near earth"))

        assert reply.source == "nasa"
        assert re.search(r"\d", reply.text)
        assert "38,412" in reply.text
        assert "1 is classified as potentially hazardous" in reply.text
        nasa.browse_neos.assert_called_once_with(timeout=0.5)

    def test_mars_summary(self, router, nasa, rover_payload):
        nasa.get_latest_photos.return_value = rover_payload["latest_photos"]

        reply = router.route(AssistantQuery(message="what is the rover up to?"))

        assert reply.source == "nasa"
        assert "2 new photos from Sol 4350" in reply.text
        nasa.get_latest_photos.assert_called_once_with("curiosity", timeout=0.5)

    def test_apod_summary_uses_yesterday(self, router, nasa, apod_payload):
        nasa.get_apod.return_value = apod_payload

        reply = router.route(AssistantQuery(message="astronomy picture"))

        assert reply.source == "nasa"
        assert apod_payload["title"] in reply.text
        nasa.get_apod.assert_called_once_with("2024-11-07", timeout=0.5)

    def test_asteroid_beats_mars(self, router, nasa, neo_browse_payload):
        nasa.browse_neos.return_value = neo_browse_payload

        router.route(AssistantQuery(message="asteroid near mars"))

        nasa.browse_neos.assert_called_once()
        nasa.get_latest_photos.assert_not_called()


class TestFallbackCascade:

    def test_nasa_error_falls_back_to_ai(self, router, nasa, genai):
        nasa.browse_neos.side_effect = UpstreamTimeoutError("slow")

        reply = router.route(AssistantQuery(message="asteroid"))

        assert reply.source == "ai"
        assert reply.text == "Space is wonderful!"

    def test_no_keyword_goes_to_ai(self, router, nasa, genai):
        reply = router.route(AssistantQuery(message="what is a black hole"))

        assert reply.source == "ai"
        nasa.browse_neos.assert_not_called()
        genai.generate.assert_called_once()

    def test_nasa_error_without_ai_key_uses_canned(self, router, nasa, genai):
        genai.is_configured.return_value = False
        nasa.get_latest_photos.side_effect = UpstreamError("down")

        reply = router.route(AssistantQuery(message="mars rover"))

        assert reply.source == "ai"
        assert reply.text == DEFAULT_REPLY

    def test_no_credentials_keyword_table(self, router, nasa, genai):
        nasa.is_configured.return_value = False
        genai.is_configured.return_value = False

        assert router.route(AssistantQuery(message="Tell me about the Universe")).text == CANNED_REPLIES["universe"]
        assert router.route(AssistantQuery(message="???")).text == DEFAULT_REPLY

    def test_empty_ai_answer_falls_back_to_canned(self, router, genai):
        genai.generate.return_value = "   "

        reply = router.route(AssistantQuery(message="what about earth"))

        assert reply.text == CANNED_REPLIES["earth"]
        assert genai.generate.call_count == 1

    def test_unexpected_nasa_payload_does_not_raise(self, router, nasa, genai):
        nasa.browse_neos.return_value = {"near_earth_objects": "garbage"}

        reply = router.route(AssistantQuery(message="asteroid"))

        assert reply.source == "ai"
        assert reply.text

    def test_everything_down_still_answers(self, router, nasa, genai):
        nasa.browse_neos.side_effect = UpstreamError("down")
        genai.generate.side_effect = UpstreamError("down")

        reply = router.route(AssistantQuery(message="asteroid"))

        assert reply.text == DEFAULT_REPLY
        assert reply.source == "ai"


def test_default_clock_is_utc(nasa, genai):
    assert AssistantRouter(nasa, genai)._today is utc_today

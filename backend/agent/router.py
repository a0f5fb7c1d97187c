"""AstroBot response routing.

Priority order (first success wins):

1. image attached + Gemini configured -> vision answer, or a static apology
2. casual chit-chat + Gemini configured -> persona answer
3. NASA topic keyword + NASA configured -> data-backed summary
4. Gemini persona answer
5. static keyword table

Steps 2-4 are an ordered list of strategies. A strategy returns None when it
does not apply, text on success, or raises on provider failure. A provider
that failed once is skipped for the rest of the request, so no call is retried.
Every path ends in non-empty text; nothing is raised to the caller.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

import structlog

from backend.agent.intents import Intent, classify_topic, is_casual
from backend.agent.prompts import (
    PERSONA_PROMPT,
    VISION_APOLOGY,
    VISION_DEFAULT_PROMPT,
    VISION_EMPTY_REPLY,
    canned_reply,
    summarize_apod,
    summarize_asteroids,
    summarize_rover_photos,
)
from backend.api.schemas import ChatTurn
from backend.core.errors import ProxyError
from backend.core.genai_adapter import GenAIAdapter
from backend.core.nasa_client import NasaClient, utc_today

logger = structlog.get_logger(__name__)

NASA = "nasa"
AI = "ai"


@dataclass
class AssistantQuery:
    """One assistant request, already parsed from JSON or multipart."""
    message: str
    history: list[ChatTurn] = field(default_factory=list)
    image: bytes | None = None
    image_mime_type: str = "image/jpeg"


@dataclass
class AssistantReply:
    text: str
    source: str


@dataclass
class _Strategy:
    name: str
    provider: str
    handler: Callable[[AssistantQuery], str | None]


class AssistantRouter:
    """Chooses exactly one backend per request and degrades to static text."""

    def __init__(
        self,
        nasa: NasaClient,
        genai: GenAIAdapter,
        nasa_timeout: float = 5.0,
        today: Callable[[], date] = utc_today,
    ):
        self._nasa = nasa
        self._genai = genai
        self._nasa_timeout = nasa_timeout
        self._today = today

        self._strategies = [
            _Strategy("casual", AI, self._casual),
            _Strategy("nasa_topic", NASA, self._nasa_topic),
            _Strategy("ai_chat", AI, self._ai_chat),
        ]
        self._topic_handlers = {
            Intent.ASTEROID: self._asteroids,
            Intent.MARS: self._mars,
            Intent.APOD: self._apod,
        }

    def route(self, query: AssistantQuery) -> AssistantReply:
        logger.info(
            "assistant.request",
            msg_len=len(query.message),
            history=len(query.history),
            has_image=query.image is not None,
        )

        if query.image is not None and self._genai.is_configured():
            return AssistantReply(self._describe_image(query), AI)

        failed: set[str] = set()
        for strategy in self._strategies:
            if strategy.provider in failed or not self._available(strategy.provider):
                continue

            try:
                text = strategy.handler(query)
            except ProxyError as e:
                logger.warning("assistant.strategy_failed", strategy=strategy.name,
                               error=e.message, status=e.status_code)
                failed.add(strategy.provider)
                continue
            except Exception as e:
                logger.error("assistant.strategy_crashed", strategy=strategy.name, error=str(e))
                failed.add(strategy.provider)
                continue

            if text is None:
                continue
            if not text.strip():
                logger.warning("assistant.empty_answer", strategy=strategy.name)
                failed.add(strategy.provider)
                continue

            logger.info("assistant.route", strategy=strategy.name, source=strategy.provider)
            return AssistantReply(text, strategy.provider)

        logger.info("assistant.route", strategy="static", source=AI)
        return AssistantReply(canned_reply(query.message), AI)

    def _available(self, provider: str) -> bool:
        if provider == NASA:
            return self._nasa.is_configured()
        return self._genai.is_configured()

    def _describe_image(self, query: AssistantQuery) -> str:
        prompt = query.message.strip() or VISION_DEFAULT_PROMPT
        try:
            text = self._genai.describe_image(prompt, query.image, query.image_mime_type)
        except ProxyError as e:
            logger.warning("assistant.vision_failed", error=e.message)
            return VISION_APOLOGY
        logger.info("assistant.route", strategy="vision", source=AI)
        return text or VISION_EMPTY_REPLY

    def _casual(self, query: AssistantQuery) -> str | None:
        if not is_casual(query.message):
            return None
        return self._ai_chat(query)

    def _ai_chat(self, query: AssistantQuery) -> str:
        return self._genai.generate(
            query.message,
            history=query.history,
            system_instruction=PERSONA_PROMPT,
            temperature=0.9,
            max_output_tokens=800,
            top_p=0.95,
            top_k=40,
        )

    def _nasa_topic(self, query: AssistantQuery) -> str | None:
        intent = classify_topic(query.message)
        if intent is None:
            return None
        logger.debug("assistant.intent", intent=intent.value)
        return self._topic_handlers[intent]()

    def _asteroids(self) -> str:
        return summarize_asteroids(self._nasa.browse_neos(timeout=self._nasa_timeout))

    def _mars(self) -> str:
        photos = self._nasa.get_latest_photos("curiosity", timeout=self._nasa_timeout)
        return summarize_rover_photos(photos)

    def _apod(self) -> str:
        yesterday = (self._today() - timedelta(days=1)).isoformat()
        return summarize_apod(self._nasa.get_apod(yesterday, timeout=self._nasa_timeout))

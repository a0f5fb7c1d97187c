"""Gemini adapter for text, vision and translation calls.

Wraps the google-genai SDK. Every failure is mapped onto the provider error
taxonomy so callers only ever see ProxyError subclasses; 429 stays
distinguishable as RateLimitedError for the translate route.
"""

from collections.abc import Sequence

import httpx
import structlog
from google import genai
from google.genai import errors, types

from backend.api.schemas import ChatTurn
from backend.core.config import Settings
from backend.core.errors import (
    ConfigMissingError,
    RateLimitedError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)

_ROLE_MAP = {"user": "user", "assistant": "model"}


class GenAIAdapter:
    """Single Gemini client shared by the assistant and translate routes."""

    def __init__(self, settings: Settings):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.timeout = settings.gemini_timeout
        self.history_limit = settings.chat_history_limit
        self._client = None

        if self.api_key:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )

    def is_configured(self) -> bool:
        return self._client is not None

    def generate(
        self,
        prompt: str,
        history: Sequence[ChatTurn] = (),
        system_instruction: str | None = None,
        temperature: float = 0.9,
        max_output_tokens: int = 800,
        top_p: float | None = None,
        top_k: int | None = None,
    ) -> str:
        """Plain text generation with optional prior turns as context.

        Args:
            prompt: The current user message.
            history: Earlier turns, oldest first. Only the last
                ``chat_history_limit`` are forwarded.
            system_instruction: Persona / behaviour prompt.

        Returns:
            Model text, or "" when the model produced no usable text.
        """
        contents = self._history_contents(history)
        contents.append(types.Content(role="user", parts=[types.Part(text=prompt)]))

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            top_p=top_p,
            top_k=top_k,
        )
        return self._call(contents, config, kind="text")

    def describe_image(
        self,
        prompt: str,
        image: bytes,
        mime_type: str = "image/jpeg",
        temperature: float = 0.7,
        max_output_tokens: int = 1000,
    ) -> str:
        """Vision call: one prompt plus one inline image."""
        contents = [
            types.Content(
                role="user",
                parts=[
                    types.Part(text=prompt),
                    types.Part.from_bytes(data=image, mime_type=mime_type),
                ],
            )
        ]
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        return self._call(contents, config, kind="vision")

    def _history_contents(self, history: Sequence[ChatTurn]) -> list[types.Content]:
        """Convert the most recent turns to Gemini contents (assistant -> model)."""
        if self.history_limit <= 0:
            return []
        recent = list(history)[-self.history_limit:]
        if len(recent) < len(history):
            logger.debug("genai.history_truncated", kept=len(recent), dropped=len(history) - len(recent))
        return [
            types.Content(role=_ROLE_MAP[turn.role], parts=[types.Part(text=turn.content)])
            for turn in recent
            if turn.content
        ]

    def _call(self, contents: list[types.Content], config: types.GenerateContentConfig, kind: str) -> str:
        if self._client is None:
            raise ConfigMissingError("Gemini API key not configured")

        logger.debug("genai.invoke", kind=kind, model=self.model, turns=len(contents))

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )

        except errors.APIError as e:
            logger.warning("genai.api_error", kind=kind, status=e.code)
            if e.code == 429:
                raise RateLimitedError("Gemini API rate limit reached") from e
            raise UpstreamError(f"Gemini API request failed ({e.code})") from e

        except httpx.TimeoutException as e:
            logger.warning("genai.timeout", kind=kind, threshold=self.timeout)
            raise UpstreamTimeoutError(f"Gemini API timed out after {self.timeout}s") from e

        except Exception as e:
            logger.warning("genai.unknown_error", kind=kind, error=str(e))
            raise UpstreamError(f"Gemini API request failed: {e}") from e

        text = _extract_text(response)
        logger.debug("genai.ok", kind=kind, chars=len(text))
        return text


def _extract_text(response) -> str:
    """Join text parts of the first candidate; empty when blocked or missing."""
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = candidates[0].content
        if content and content.parts:
            texts = [part.text for part in content.parts if getattr(part, "text", None)]
            if texts:
                return "".join(texts).strip()

    try:
        return (response.text or "").strip()
    except (ValueError, AttributeError):
        return ""

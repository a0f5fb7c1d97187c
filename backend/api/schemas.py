"""Pydantic models for the API layer.

Field names follow the JSON the browser UI already speaks (camelCase where
the UI expects it), exposed through aliases.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ApiSource = Literal["nasa", "ai"]
Rover = Literal["curiosity", "perseverance", "opportunity", "spirit"]
Language = Literal["hindi", "nepali"]


class ChatTurn(BaseModel):
    """One prior message in the browser-held conversation."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str = ""


MAX_MESSAGE_LENGTH = 4000


class AssistantRequest(BaseModel):
    """JSON body for the assistant endpoint (multipart is parsed into the same shape)."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field("", max_length=MAX_MESSAGE_LENGTH)
    conversation_history: list[ChatTurn] = Field(default_factory=list, alias="conversationHistory")


class AssistantResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    api_source: ApiSource = Field(..., alias="apiSource")


class MarsRoverResponse(BaseModel):
    photos: list[dict]
    total_photos: int


class NeoPage(BaseModel):
    total_elements: int = 0


class NeoFeedResponse(BaseModel):
    near_earth_objects: dict[str, list[dict]] = Field(default_factory=dict)
    page: NeoPage = Field(default_factory=NeoPage)


class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10_000)
    language: Language = "hindi"


class TranslateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(..., alias="translatedText")


class TranscribeRequest(BaseModel):
    audio: str | None = None


class TranscribeResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    model_config = ConfigDict(populate_by_name=True)

    error: str
    is_rate_limit: bool | None = Field(None, alias="isRateLimit")

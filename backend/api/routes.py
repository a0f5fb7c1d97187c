"""FastAPI endpoints for the Cosmos Explorer API.

GET  /api/apod          - Astronomy Picture of the Day (fallback when undated)
GET  /api/mars-rover    - latest rover photos (fallback when unparameterized)
GET  /api/neo-tracker   - last 7 days of close approaches (fallback on failure)
POST /api/assistant     - AstroBot chat, JSON or multipart with an image
POST /api/translate     - Gemini translation to Hindi / Nepali
POST /api/transcribe    - speech-to-text placeholder
GET  /health            - credential/component status
"""

import structlog
from fastapi import APIRouter, Query, Request
from pydantic import TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.responses import JSONResponse

from backend.agent.prompts import build_translation_prompt
from backend.agent.router import AssistantQuery
from backend.api.schemas import (
    AssistantRequest,
    AssistantResponse,
    ChatTurn,
    MAX_MESSAGE_LENGTH,
    ErrorResponse,
    MarsRoverResponse,
    NeoFeedResponse,
    Rover,
    TranscribeRequest,
    TranscribeResponse,
    TranslateRequest,
    TranslateResponse,
)
from backend.core.errors import (
    ConfigMissingError,
    ProxyError,
    RateLimitedError,
    UpstreamError,
)

logger = structlog.get_logger(__name__)

router = APIRouter()

MAX_IMAGE_BYTES = 10 * 1024 * 1024
TRANSCRIPTION_PLACEHOLDER = "Speech transcription is being processed..."

_history_adapter = TypeAdapter(list[ChatTurn])
_error_responses = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


@router.get("/api/apod", responses=_error_responses)
def apod(
    req: Request,
    date: str | None = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD"),
):
    """Pass through the NASA APOD object for ``date`` (default: yesterday)."""
    return req.app.state.apod_proxy.handle(date)


@router.get("/api/mars-rover", response_model=MarsRoverResponse, responses=_error_responses)
def mars_rover(
    req: Request,
    rover: Rover | None = None,
    camera: str | None = Query(None, min_length=2, max_length=32, pattern=r"^[A-Za-z_]+$"),
):
    """Latest-sol photos for a rover, optionally filtered to one camera."""
    return req.app.state.mars_rover_proxy.handle(rover, camera)


@router.get("/api/neo-tracker", response_model=NeoFeedResponse, responses=_error_responses)
def neo_tracker(req: Request):
    """Near-Earth object close approaches for the last seven days."""
    return req.app.state.neo_tracker_proxy.handle()


@router.post("/api/assistant", response_model=AssistantResponse, responses={400: {"model": ErrorResponse}})
async def assistant(req: Request):
    """Route a chat message to NASA data, Gemini, or a canned answer.

    Accepts a form (``message``, ``image``, ``conversationHistory``
    as a JSON string) or a JSON body (``message``, ``conversationHistory``).
    """
    content_type = req.headers.get("content-type", "")

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await req.form()
        message = str(form.get("message") or "")
        if len(message) > MAX_MESSAGE_LENGTH:
            logger.warning("assistant.message_too_long", transport="form", length=len(message))
            return _bad_request("Message too long")
        try:
            history = _history_adapter.validate_json(str(form.get("conversationHistory") or "[]"))
        except ValidationError:
            logger.warning("assistant.bad_history", transport="form")
            return _bad_request("Invalid conversationHistory")

        image = None
        mime_type = "image/jpeg"
        upload = form.get("image")
        if isinstance(upload, UploadFile):
            image = await upload.read() or None
            mime_type = upload.content_type or mime_type
            if image is not None and len(image) > MAX_IMAGE_BYTES:
                return _bad_request("Image too large")

        query = AssistantQuery(message=message, history=history, image=image, image_mime_type=mime_type)
    else:
        try:
            body = AssistantRequest.model_validate_json(await req.body() or b"{}")
        except ValidationError:
            logger.warning("assistant.bad_body", transport="json")
            return _bad_request("Invalid request body")
        query = AssistantQuery(message=body.message, history=body.conversation_history)

    reply = await run_in_threadpool(req.app.state.assistant.route, query)
    return AssistantResponse(response=reply.text, api_source=reply.source)


@router.post("/api/translate", response_model=TranslateResponse, responses=_error_responses)
def translate(request: TranslateRequest, req: Request):
    """Translate English text with Gemini. Rate limits are flagged for the UI."""
    genai = req.app.state.genai
    prompt = build_translation_prompt(request.text, request.language)

    try:
        text = genai.generate(prompt, temperature=0.3, max_output_tokens=2000, top_p=0.95)
    except ConfigMissingError:
        raise
    except RateLimitedError as e:
        raise RateLimitedError(
            "Translation temporarily unavailable due to rate limits. Please try again in a minute."
        ) from e
    except ProxyError as e:
        logger.error("translate.failed", error=e.message, language=request.language)
        raise UpstreamError("Translation failed. Please try again later.", status_code=e.status_code) from e

    logger.info("translate.ok", language=request.language, chars=len(request.text))
    return TranslateResponse(translated_text=text or request.text)


@router.post("/api/transcribe", response_model=TranscribeResponse, responses={400: {"model": ErrorResponse}})
def transcribe(request: TranscribeRequest, req: Request):
    """Placeholder; audio is accepted but not transcribed."""
    if not request.audio:
        return _bad_request("No audio data provided")
    if not req.app.state.genai.is_configured():
        raise ConfigMissingError("Gemini API key not configured")
    logger.info("transcribe.stub", audio_len=len(request.audio))
    return TranscribeResponse(text=TRANSCRIPTION_PLACEHOLDER)


@router.get("/health")
def health(req: Request):
    """Report which providers are configured."""
    components = {
        "nasa": "ok" if req.app.state.nasa.is_configured() else "error",
        "gemini": "ok" if req.app.state.genai.is_configured() else "error",
    }

    errors = [k for k, v in components.items() if v == "error"]
    if not errors:
        status = "healthy"
    elif len(errors) == len(components):
        status = "unhealthy"
    else:
        status = "degraded"

    return {"status": status, "components": components}


@router.get("/")
@router.head("/")
def root_health():
    """Basic root health check for deployment platforms."""
    return {"status": "ok", "service": "cosmos-explorer-api"}


def render_proxy_error(exc: ProxyError) -> JSONResponse:
    """Serialize a provider failure as ``{"error": ...}`` with its status code."""
    content = {"error": exc.message}
    if isinstance(exc, RateLimitedError):
        content["isRateLimit"] = True
    return JSONResponse(status_code=exc.status_code, content=content)


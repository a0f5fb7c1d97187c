"""Runtime settings for the Cosmos Explorer API.

Built once at startup from the process environment (after load_dotenv)
and handed to each client explicitly, so nothing downstream reads os.environ.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    """Provider credentials, endpoints and timeouts.

    Attributes:
        nasa_api_key: NASA open-data key. Empty string means not configured.
        gemini_api_key: Google Gemini key. Empty string means not configured.
        gemini_model: Model used for text, vision and translation calls.
        nasa_base_url: Root of the NASA API family.
        nasa_timeout: Seconds allowed for proxy lookups (APOD, rover, NEO).
        assistant_nasa_timeout: Seconds allowed for assistant sub-queries.
        gemini_timeout: Seconds allowed for any Gemini call.
        chat_history_limit: Most recent turns forwarded to Gemini as context.
        cors_origins: Allowed browser origins.
    """
    nasa_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    nasa_base_url: str = "https://api.nasa.gov"
    nasa_timeout: float = 10.0
    assistant_nasa_timeout: float = 5.0
    gemini_timeout: float = 10.0
    chat_history_limit: int = 10
    cors_origins: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from environment variables, falling back to defaults."""
        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            nasa_api_key=os.environ.get("NASA_API_KEY", ""),
            gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
            gemini_model=os.environ.get("GEMINI_MODEL", cls.gemini_model),
            nasa_base_url=os.environ.get("NASA_BASE_URL", cls.nasa_base_url).rstrip("/"),
            nasa_timeout=float(os.environ.get("NASA_TIMEOUT", "10")),
            assistant_nasa_timeout=float(os.environ.get("ASSISTANT_NASA_TIMEOUT", "5")),
            gemini_timeout=float(os.environ.get("GEMINI_TIMEOUT", "10")),
            chat_history_limit=max(0, int(os.environ.get("CHAT_HISTORY_LIMIT", "10"))),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )

    @property
    def nasa_configured(self) -> bool:
        return bool(self.nasa_api_key)

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

"""Thin httpx wrapper around the NASA open-data API family.

Each method performs one bounded-timeout GET and either returns the decoded
JSON body or raises one of the errors in backend.core.errors. No fallback
logic lives here; proxies and the assistant router decide what to do on failure.
"""

from datetime import date, datetime, timezone

import httpx
import structlog

from backend.core.config import Settings
from backend.core.errors import (
    ConfigMissingError,
    RateLimitedError,
    ResponseParseError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = structlog.get_logger(__name__)


def utc_today() -> date:
    """Current date in UTC, the calendar NASA publishes against."""
    return datetime.now(timezone.utc).date()


class NasaClient:
    """Calls APOD, Mars Rover Photos and NeoWs endpoints."""

    def __init__(self, settings: Settings, http: httpx.Client | None = None):
        self.api_key = settings.nasa_api_key
        self.base_url = settings.nasa_base_url
        self.timeout = settings.nasa_timeout
        self._http = http or httpx.Client()

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def close(self) -> None:
        self._http.close()

    def get_apod(self, date: str, timeout: float | None = None) -> dict:
        """Fetch the Astronomy Picture of the Day for a YYYY-MM-DD date."""
        return self._get("/planetary/apod", {"date": date}, timeout)

    def get_latest_photos(
        self,
        rover: str,
        camera: str | None = None,
        timeout: float | None = None,
    ) -> list[dict]:
        """Fetch the most recent sol's photos for a rover, optionally one camera.

        Returns:
            The ``latest_photos`` list (possibly empty).
        """
        params = {"camera": camera} if camera else {}
        data = self._get(f"/mars-photos/api/v1/rovers/{rover}/latest_photos", params, timeout)
        photos = data.get("latest_photos", [])
        if not isinstance(photos, list) or not all(isinstance(p, dict) for p in photos):
            raise ResponseParseError("Unexpected latest_photos payload from NASA")
        return photos

    def get_neo_feed(self, start_date: str, end_date: str, timeout: float | None = None) -> dict:
        """Fetch close approaches between two dates (NeoWs feed, max 7 days).

        Raises:
            ResponseParseError: ``element_count`` is not an integer or
                ``near_earth_objects`` is not a date -> list-of-objects map.
        """
        data = self._get(
            "/neo/rest/v1/feed",
            {"start_date": start_date, "end_date": end_date},
            timeout,
        )
        count = data.get("element_count")
        if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
            raise ResponseParseError("Unexpected element_count in NASA feed")
        neos = data.get("near_earth_objects")
        if neos is not None and not _is_neo_map(neos):
            raise ResponseParseError("Unexpected near_earth_objects in NASA feed")
        return data

    def browse_neos(self, timeout: float | None = None) -> dict:
        """Fetch the first page of the full NEO catalogue."""
        return self._get("/neo/rest/v1/neo/browse", {}, timeout)

    def _get(self, path: str, params: dict, timeout: float | None) -> dict:
        """Issue a GET and map every failure mode onto the error taxonomy.

        Raises:
            ConfigMissingError: No API key configured (checked before any I/O).
            UpstreamTimeoutError: No answer within the timeout.
            RateLimitedError: NASA answered 429.
            UpstreamError: Any other non-2xx or transport failure.
            ResponseParseError: 2xx with a body that is not a JSON object.
        """
        if not self.api_key:
            raise ConfigMissingError("NASA API key not configured")

        limit = timeout if timeout is not None else self.timeout
        url = f"{self.base_url}{path}"
        logger.debug("nasa.request", path=path, timeout=limit)

        try:
            resp = self._http.get(url, params={**params, "api_key": self.api_key}, timeout=limit)
            resp.raise_for_status()

        except httpx.TimeoutException as e:
            logger.warning("nasa.timeout", path=path, threshold=limit)
            raise UpstreamTimeoutError(f"NASA API timed out after {limit}s") from e

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("nasa.http_error", path=path, status=status)
            if status == 429:
                raise RateLimitedError("NASA API rate limit reached") from e
            raise UpstreamError(f"NASA API returned {status}", status_code=status) from e

        except httpx.RequestError as e:
            logger.warning("nasa.network_error", path=path, error=type(e).__name__)
            raise UpstreamError("Could not reach the NASA API") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("nasa.parse_error", path=path)
            raise ResponseParseError("NASA API returned a malformed body") from e

        if not isinstance(data, dict):
            logger.warning("nasa.parse_error", path=path, body_type=type(data).__name__)
            raise ResponseParseError("NASA API returned a malformed body")

        logger.debug("nasa.ok", path=path)
        return data


def _is_neo_map(value) -> bool:
    return isinstance(value, dict) and all(
        isinstance(day, str) and isinstance(items, list) and all(isinstance(i, dict) for i in items)
        for day, items in value.items()
    )

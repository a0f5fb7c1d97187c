"""Proxy handlers for the NASA-backed pages.

Each handler normalizes one NASA endpoint into the shape the UI renders.
Failure policy is the same for all three:

- ConfigMissingError always propagates (no fallback).
- Any other provider failure on the default request (no caller parameters)
  is masked with a fixed, previously-known-good payload.
- Any provider failure on an explicit request propagates, so a requested
  date/rover/camera never silently receives unrelated data.
"""

from collections.abc import Callable
from datetime import date, timedelta

import structlog

from backend.core.errors import ConfigMissingError, ProxyError
from backend.core.nasa_client import NasaClient, utc_today
from backend.data.fallbacks import fallback_apod, fallback_neo_feed, fallback_rover_photos

logger = structlog.get_logger(__name__)

DEFAULT_ROVER = "curiosity"
DEFAULT_CAMERA = "FHAZ"
NEO_WINDOW_DAYS = 7


class _ProxyHandler:
    """Shared fallback policy. Subclasses call ``_guarded`` around the upstream call."""

    name = "proxy"

    def __init__(self, nasa: NasaClient, today: Callable[[], date] = utc_today):
        self._nasa = nasa
        self._today = today

    def _guarded(self, fetch: Callable[[], dict], explicit: bool, fallback: Callable[[], dict]) -> dict:
        try:
            return fetch()
        except ConfigMissingError:
            logger.error(f"{self.name}.config_missing")
            raise
        except ProxyError as e:
            if explicit:
                logger.warning(f"{self.name}.upstream_failed", error=e.message, status=e.status_code)
                raise
            logger.warning(f"{self.name}.fallback", error=e.message)
            return fallback()


class ApodProxy(_ProxyHandler):
    name = "apod"

    def handle(self, requested_date: str | None = None) -> dict:
        """Return the APOD entry for ``requested_date`` or, by default, yesterday.

        Yesterday is used because today's entry may not be published yet
        in every timezone.
        """
        explicit = requested_date is not None
        target = requested_date or (self._today() - timedelta(days=1)).isoformat()
        logger.info("apod.request", date=target, explicit=explicit)
        return self._guarded(lambda: self._nasa.get_apod(target), explicit, fallback_apod)


class MarsRoverProxy(_ProxyHandler):
    name = "mars_rover"

    def handle(self, rover: str | None = None, camera: str | None = None) -> dict:
        """Return ``{photos, total_photos}`` for the rover's latest sol."""
        explicit = rover is not None or camera is not None
        rover_name = (rover or DEFAULT_ROVER).lower()
        camera_name = (camera or DEFAULT_CAMERA).upper()
        logger.info("mars_rover.request", rover=rover_name, camera=camera_name, explicit=explicit)

        def fetch() -> dict:
            photos = self._nasa.get_latest_photos(rover_name, camera_name)
            return {"photos": photos, "total_photos": len(photos)}

        def fallback() -> dict:
            photos = fallback_rover_photos()
            return {"photos": photos, "total_photos": len(photos)}

        return self._guarded(fetch, explicit, fallback)


class NeoTrackerProxy(_ProxyHandler):
    name = "neo_tracker"

    def handle(self) -> dict:
        """Return close approaches for the last seven days, grouped by date."""
        end = self._today()
        start = end - timedelta(days=NEO_WINDOW_DAYS)
        logger.info("neo_tracker.request", start=start.isoformat(), end=end.isoformat())

        def fetch() -> dict:
            data = self._nasa.get_neo_feed(start.isoformat(), end.isoformat())
            return {
                "near_earth_objects": data.get("near_earth_objects") or {},
                "page": {"total_elements": int(data.get("element_count") or 0)},
            }

        return self._guarded(fetch, explicit=False, fallback=fallback_neo_feed)

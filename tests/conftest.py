"""Shared fixtures for all tests."""

from datetime import date

import httpx
import pytest

from backend.core.config import Settings
from backend.core.nasa_client import NasaClient


@pytest.fixture
def today() -> date:
    """Fixed clock so date windows are deterministic."""
    return date(2024, 11, 8)


@pytest.fixture
def settings() -> Settings:
    """Both credentials configured, short timeouts."""
    return Settings(
        nasa_api_key="test-nasa-key",
        gemini_api_key="test-gemini-key",
        nasa_timeout=1.0,
        assistant_nasa_timeout=0.5,
        gemini_timeout=1.0,
        chat_history_limit=4,
    )


@pytest.fixture
def make_nasa_client(settings):
    """Build a NasaClient whose HTTP traffic goes to ``handler(request)``."""
    clients = []

    def _make(handler, api_key: str | None = None) -> NasaClient:
        cfg = settings if api_key is None else Settings(nasa_api_key=api_key, nasa_timeout=1.0)
        client = NasaClient(cfg, httpx.Client(transport=httpx.MockTransport(handler)))
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def apod_payload() -> dict:
    return {
        "date": "2024-11-07",
        "title": "Comet Tsuchinshan-ATLAS over the Dolomites",
        "explanation": "A bright comet hangs above the mountains. " * 12,
        "url": "https://apod.nasa.gov/apod/image/2411/comet_960.jpg",
        "hdurl": "https://apod.nasa.gov/apod/image/2411/comet.jpg",
        "media_type": "image",
        "service_version": "v1",
    }


@pytest.fixture
def rover_payload() -> dict:
    return {
        "latest_photos": [
            {
                "id": 1290321,
                "sol": 4350,
                "img_src": "https://mars.nasa.gov/msl-raw-images/a.jpg",
                "earth_date": "2024-11-06",
                "rover": {"name": "Curiosity"},
                "camera": {"name": "FHAZ", "full_name": "Front Hazard Avoidance Camera"},
            },
            {
                "id": 1290322,
                "sol": 4350,
                "img_src": "https://mars.nasa.gov/msl-raw-images/b.jpg",
                "earth_date": "2024-11-06",
                "rover": {"name": "Curiosity"},
                "camera": {"name": "FHAZ", "full_name": "Front Hazard Avoidance Camera"},
            },
        ]
    }


@pytest.fixture
def neo_feed_payload() -> dict:
    return {
        "element_count": 2,
        "near_earth_objects": {
            "2024-11-07": [
                {"id": "1", "name": "(2024 AB)", "is_potentially_hazardous_asteroid": False},
                {"id": "2", "name": "(2024 CD)", "is_potentially_hazardous_asteroid": True},
            ]
        },
    }


@pytest.fixture
def neo_browse_payload() -> dict:
    return {
        "page": {"size": 20, "total_elements": 38412, "total_pages": 1921, "number": 0},
        "near_earth_objects": [
            {"name": "433 Eros (A898 PA)", "is_potentially_hazardous_asteroid": False},
            {"name": "719 Albert (A911 TB)", "is_potentially_hazardous_asteroid": False},
            {"name": "1566 Icarus (1949 MA)", "is_potentially_hazardous_asteroid": True},
            {"name": "1620 Geographos", "is_potentially_hazardous_asteroid": True},
        ],
    }

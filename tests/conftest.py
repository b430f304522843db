# ABOUTME: Shared test fixtures for the elemental weather test suite.
# ABOUTME: Provides a URL-routing mock HTTP client, canned Open-Meteo payloads and an in-memory store.

import copy
from unittest.mock import AsyncMock

import httpx
import pytest

from elemental_weather.deps import AppDeps
from elemental_weather.settings import Settings
from elemental_weather.store import MemoryStore

FORECAST_PAYLOAD = {
    "latitude": 41.88,
    "longitude": -87.63,
    "timezone": "America/Chicago",
    "utc_offset_seconds": -18000,
    "current": {
        "time": "2025-06-03T15:00",
        "temperature_2m": 72.4,
        "apparent_temperature": 74.5,
        "relative_humidity_2m": 55,
        "weather_code": 95,
        "wind_speed_10m": 9.6,
        "precipitation": 0.12,
    },
    "daily": {
        "time": ["2025-06-03", "2025-06-04"],
        "temperature_2m_max": [80.5, 77.0],
        "temperature_2m_min": [61.2, 60.0],
        "precipitation_sum": [0.3, 0.0],
    },
}

PARIS_RESULT = {
    "id": 2988507,
    "name": "Paris",
    "latitude": 48.85,
    "longitude": 2.35,
    "admin1": "Île-de-France",
    "country_code": "fr",
    "timezone": "Europe/Paris",
}


def json_response(json_data: dict, status_code: int = 200, url: str = "https://test") -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", url))


@pytest.fixture
def make_client():
    """Factory for a mock httpx.AsyncClient that answers GETs by URL.

    Each route maps to a JSON dict, a ready httpx.Response, or an exception to raise.
    """

    def factory(routes: dict) -> httpx.AsyncClient:
        mock = AsyncMock(spec=httpx.AsyncClient)

        async def get(url, params=None, **kwargs):
            route = routes[url]
            if isinstance(route, Exception):
                raise route
            if isinstance(route, httpx.Response):
                return route
            return json_response(route, url=url)

        mock.get.side_effect = get
        return mock

    return factory


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def make_deps(store):
    """Factory for AppDeps around a routed mock client and the shared in-memory store."""

    def factory(client: httpx.AsyncClient, **settings) -> AppDeps:
        return AppDeps(http_client=client, store=store, settings=Settings(**settings))

    return factory


@pytest.fixture
def forecast_payload() -> dict:
    return copy.deepcopy(FORECAST_PAYLOAD)


@pytest.fixture
def paris_result() -> dict:
    return dict(PARIS_RESULT)

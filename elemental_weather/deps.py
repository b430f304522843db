# ABOUTME: Dependency container for the dashboard using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient, the location store and the settings.

from functools import partial

import httpx
from pydantic import BaseModel, ConfigDict

from elemental_weather.models import GeocodeCandidate
from elemental_weather.settings import Settings, load_settings
from elemental_weather.store import JsonFileStore, KeyValueStore
from elemental_weather.weather_service import search_locations


class AppDeps(BaseModel):
    """Dependencies shared by the dashboard flow, the picker and the web endpoints."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    store: KeyValueStore
    settings: Settings = Settings()

    async def geocode(self, query: str) -> list[GeocodeCandidate]:
        """Single best match for a city flag; transport errors propagate."""
        return await search_locations(self.http_client, query, limit=1)

    @property
    def search(self):
        """Suggestion lookup bound to the configured result cap."""
        return partial(search_locations, self.http_client, limit=self.settings.search_limit)


def create_http_client(timeout: float = 10.0) -> httpx.AsyncClient:
    """Create an httpx client with a fixed timeout; failed requests are not retried."""
    return httpx.AsyncClient(timeout=timeout)


def create_deps(settings: Settings | None = None) -> AppDeps:
    settings = settings or load_settings()
    return AppDeps(
        http_client=create_http_client(settings.http_timeout),
        store=JsonFileStore(settings.store_path),
        settings=settings,
    )

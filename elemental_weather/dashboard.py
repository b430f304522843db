# ABOUTME: Top-level flow: resolve the location, fetch its weather, classify and render it.
# ABOUTME: Any failure is logged and replaced by the fixed "unavailable" display.

import logging
from collections.abc import Callable, Mapping
from datetime import datetime

import httpx

from elemental_weather.deps import AppDeps
from elemental_weather.errors import ElementalWeatherError, WeatherFetchError
from elemental_weather.models import DisplayFields, GeocodeCandidate, Location
from elemental_weather.picker import LocationPicker, remember_choice
from elemental_weather.render import cue_requested, render, unavailable
from elemental_weather.resolver import resolve
from elemental_weather.store import load_saved_location
from elemental_weather.weather_service import get_current_weather

logger = logging.getLogger(__name__)


async def render_location(
    location: Location,
    deps: AppDeps,
    *,
    cue_enabled: bool = True,
    now: datetime | None = None,
) -> DisplayFields:
    """Fetch weather for a resolved location and render it; raises WeatherFetchError."""
    try:
        weather = await get_current_weather(
            deps.http_client, location.latitude, location.longitude, deps.settings.units
        )
    except (httpx.HTTPError, ValueError) as e:
        raise WeatherFetchError(f"Weather fetch failed for {location.label!r}: {e}") from e
    return render(location, weather, cue_enabled=cue_enabled, now=now)


async def load_dashboard(
    params: Mapping[str, str],
    deps: AppDeps,
    *,
    now: datetime | None = None,
) -> DisplayFields:
    """Render the dashboard for the given query flags, or the placeholder on failure."""
    # A city flag outranks the saved choice, so the store is only consulted without one.
    saved = None if params.get("city") else load_saved_location(deps.store)
    try:
        location = await resolve(params, saved, deps.geocode, deps.settings.default_location)
        return await render_location(location, deps, cue_enabled=cue_requested(params), now=now)
    except ElementalWeatherError:
        logger.exception("Dashboard render failed for params %s", dict(params))
        return unavailable()


async def _render_chosen(
    location: Location,
    deps: AppDeps,
    *,
    cue_enabled: bool,
    now: datetime | None = None,
) -> DisplayFields:
    try:
        return await render_location(location, deps, cue_enabled=cue_enabled, now=now)
    except WeatherFetchError:
        logger.exception("Weather fetch failed after choosing %r", location.label)
        return unavailable()


async def choose_location(
    candidate: GeocodeCandidate,
    deps: AppDeps,
    *,
    cue_enabled: bool = True,
    now: datetime | None = None,
) -> tuple[Location, DisplayFields]:
    """Remember a picked suggestion and render the dashboard for it.

    Raises pydantic.ValidationError when the candidate's coordinates are out of range.
    """
    location = remember_choice(deps.store, candidate)
    return location, await _render_chosen(location, deps, cue_enabled=cue_enabled, now=now)


def make_picker(
    deps: AppDeps,
    on_display: Callable[[DisplayFields], None],
    *,
    cue_enabled: bool = True,
) -> LocationPicker:
    """Picker wired to re-render the dashboard whenever a suggestion is chosen."""

    async def rerender(location: Location) -> None:
        on_display(await _render_chosen(location, deps, cue_enabled=cue_enabled))

    return LocationPicker(
        deps.search,
        deps.store,
        on_select=rerender,
        delay=deps.settings.debounce_seconds,
        min_chars=deps.settings.min_query_length,
    )

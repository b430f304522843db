# ABOUTME: Decides which location is active from query flags, a saved choice, or the default.
# ABOUTME: Tiers are tried strictly in order: coordinates, city lookup, saved location, default.

import logging
import math
from collections.abc import Awaitable, Callable, Mapping

import httpx

from elemental_weather.errors import GeocodingError
from elemental_weather.models import PLACEHOLDER_LABEL, GeocodeCandidate, Location

logger = logging.getLogger(__name__)

GeocodeFn = Callable[[str], Awaitable[list[GeocodeCandidate]]]


def build_label(candidate: GeocodeCandidate, region: str | None = None, country: str | None = None) -> str:
    """Join name, region and uppercased country code with ", ".

    The candidate's own region wins over the `region` hint; an explicit `country`
    overrides the candidate's country code.
    """
    parts = [candidate.name]
    if candidate.admin1:
        parts.append(candidate.admin1)
    elif region:
        parts.append(region)
    code = country or candidate.country_code
    if code:
        parts.append(code.upper())
    return ", ".join(parts)


def candidate_to_location(
    candidate: GeocodeCandidate,
    region: str | None = None,
    country: str | None = None,
) -> Location:
    return Location(
        latitude=candidate.latitude,
        longitude=candidate.longitude,
        label=build_label(candidate, region, country),
    )


def _parse_coordinate(raw: str | None, bound: float) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or abs(value) > bound:
        return None
    return value


def _explicit_location(params: Mapping[str, str]) -> Location | None:
    lat = _parse_coordinate(params.get("lat"), 90)
    lon = _parse_coordinate(params.get("lon"), 180)
    if lat is None or lon is None:
        return None
    return Location(latitude=lat, longitude=lon, label=params.get("label") or PLACEHOLDER_LABEL)


async def geocode_city(
    geocode_fn: GeocodeFn,
    city: str,
    region: str | None = None,
    country: str | None = None,
) -> Location:
    """Look up a city and build a Location from the first match.

    The search is by name only; region and country only shape the label.
    Raises GeocodingError when the lookup fails, finds nothing, or returns
    a match that cannot be used as a location.
    """
    try:
        candidates = await geocode_fn(city)
    except (httpx.HTTPError, ValueError) as e:
        raise GeocodingError(f"Geocoding failed for {city!r}: {e}") from e
    if not candidates:
        raise GeocodingError(f"No geocoding results for {city!r}")
    try:
        return candidate_to_location(candidates[0], region, country)
    except ValueError as e:
        raise GeocodingError(f"Unusable geocoding result for {city!r}: {e}") from e


async def resolve(
    params: Mapping[str, str],
    saved: Location | None,
    geocode_fn: GeocodeFn,
    default: Location,
) -> Location:
    """Return the active location; the first satisfied tier wins.

    A city lookup that fails raises instead of falling back to the saved or
    default location.
    """
    explicit = _explicit_location(params)
    if explicit is not None:
        logger.debug("Using explicit coordinates %s, %s", explicit.latitude, explicit.longitude)
        return explicit

    city = params.get("city")
    if city:
        return await geocode_city(geocode_fn, city, params.get("region") or None, params.get("country") or None)

    if saved is not None:
        logger.debug("Using saved location %r", saved.label)
        return saved

    return default

# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Handles geocoding search and current/daily forecast retrieval.

from datetime import date, datetime

import httpx

from elemental_weather.models import CurrentWeather, DailyWeather, GeocodeCandidate, Units, WeatherResponse

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_PARAMS = (
    "temperature_2m,apparent_temperature,relative_humidity_2m,"
    "weather_code,wind_speed_10m,precipitation"
)

DAILY_PARAMS = "temperature_2m_max,temperature_2m_min,precipitation_sum"

UNIT_PARAMS: dict[str, dict[str, str]] = {
    "imperial": {"temperature_unit": "fahrenheit", "wind_speed_unit": "mph", "precipitation_unit": "inch"},
    "metric": {"temperature_unit": "celsius", "wind_speed_unit": "kmh", "precipitation_unit": "mm"},
}


async def search_locations(
    client: httpx.AsyncClient,
    query: str,
    *,
    limit: int = 8,
) -> list[GeocodeCandidate]:
    """Search Open-Meteo geocoding for places matching a free-text query.

    Raises httpx.HTTPStatusError on a non-success response.
    """
    params: dict[str, str | int] = {"name": query, "count": limit, "language": "en", "format": "json"}
    resp = await client.get(GEOCODING_URL, params=params)
    resp.raise_for_status()
    data = resp.json()

    return [GeocodeCandidate.model_validate(r) for r in data.get("results") or []]


async def get_current_weather(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    units: Units = "imperial",
) -> WeatherResponse:
    """Fetch the current snapshot and today's daily summary for a location."""
    resp = await client.get(
        FORECAST_URL,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current": CURRENT_PARAMS,
            "daily": DAILY_PARAMS,
            "timezone": "auto",
            **UNIT_PARAMS[units],
        },
    )
    resp.raise_for_status()
    data = resp.json()

    return WeatherResponse(
        latitude=data["latitude"],
        longitude=data["longitude"],
        timezone=data.get("timezone", "GMT"),
        utc_offset_seconds=data.get("utc_offset_seconds", 0),
        units=units,
        current=parse_current_data(data.get("current", {})),
        daily=parse_daily_data(data.get("daily", {})),
    )


def parse_current_data(raw: dict) -> CurrentWeather:
    """Parse the Open-Meteo `current` block; the local ISO time has no offset."""
    t = raw.get("time")
    return CurrentWeather(
        time=datetime.fromisoformat(t) if t else None,
        temperature_2m=raw.get("temperature_2m"),
        apparent_temperature=raw.get("apparent_temperature"),
        relative_humidity_2m=raw.get("relative_humidity_2m"),
        weather_code=raw.get("weather_code"),
        wind_speed_10m=raw.get("wind_speed_10m"),
        precipitation=raw.get("precipitation"),
    )


def parse_daily_data(raw: dict) -> list[DailyWeather]:
    """Parse Open-Meteo column-oriented daily data into row-oriented DailyWeather objects."""
    dates = raw.get("time", [])
    if not dates:
        return []

    result = []
    for i, d in enumerate(dates):
        result.append(
            DailyWeather(
                date=date.fromisoformat(d),
                temperature_2m_max=_get_at(raw, "temperature_2m_max", i),
                temperature_2m_min=_get_at(raw, "temperature_2m_min", i),
                precipitation_sum=_get_at(raw, "precipitation_sum", i),
            )
        )
    return result


def _get_at(data: dict, key: str, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if col is None or index >= len(col):
        return None
    return col[index]

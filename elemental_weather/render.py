# ABOUTME: Formats a location and its weather into the text fields the dashboard displays.
# ABOUTME: Also builds the fixed "unavailable" placeholder shown when a render fails.

import math
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone

from elemental_weather.classifier import classify, summarize
from elemental_weather.models import DisplayFields, Location, Units, WeatherResponse

MISSING = "--"

UNIT_SUFFIXES: dict[str, dict[str, str]] = {
    "imperial": {"precip": "in", "wind": "mph"},
    "metric": {"precip": "mm", "wind": "km/h"},
}


def round_half_up(value: float) -> int:
    """Round like a browser's Math.round (halves go up, not to even)."""
    return math.floor(value + 0.5)


def _rounded(value: float | None, suffix: str = "") -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)}{suffix}"


def format_time(now: datetime) -> str:
    """Short weekday plus 12-hour clock, e.g. 'Tue 3:07 PM'."""
    hour = now.hour % 12 or 12
    return f"{now:%a} {hour}:{now:%M} {'AM' if now.hour < 12 else 'PM'}"


def cue_requested(params: Mapping[str, str]) -> bool:
    return params.get("cue", "1") != "0"


def render(
    location: Location,
    weather: WeatherResponse,
    *,
    cue_enabled: bool = True,
    now: datetime | None = None,
) -> DisplayFields:
    """Build the full set of display fields for one location and forecast."""
    if now is None:
        now = datetime.now(timezone(timedelta(seconds=weather.utc_offset_seconds)))
    units: Units = weather.units
    suffix = UNIT_SUFFIXES[units]
    cur = weather.current
    today = weather.daily[0] if weather.daily else None

    summary = summarize(cur.weather_code) if cur.weather_code is not None else MISSING
    element = classify(summary)

    high = today.temperature_2m_max if today else None
    low = today.temperature_2m_min if today else None

    return DisplayFields(
        location=location.label,
        time=format_time(now),
        temp=_rounded(cur.temperature_2m),
        summary=summary,
        hilow=f"H: {_rounded(high, '°')}  L: {_rounded(low, '°')}",
        precip=f"{(cur.precipitation or 0):.2f} {suffix['precip']}",
        wind=_rounded(cur.wind_speed_10m, f" {suffix['wind']}"),
        humidity=_rounded(cur.relative_humidity_2m, "%"),
        feels=_rounded(cur.apparent_temperature, "°"),
        element=element.label,
        cue=element.cue if cue_enabled else "",
    )


def unavailable() -> DisplayFields:
    """Placeholder shown instead of a partial render when anything fails."""
    return DisplayFields(location="Weather unavailable", summary="Check location params")

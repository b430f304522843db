# ABOUTME: Pydantic BaseModels for locations, geocoding candidates, weather data and display fields.
# ABOUTME: Defines structured types for Open-Meteo API data and the element classification.

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

PLACEHOLDER_LABEL = "Weather"

Units = Literal["imperial", "metric"]


class Location(BaseModel):
    """Active location: coordinates plus the label shown to the user."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    label: str = PLACEHOLDER_LABEL

    @field_validator("label")
    @classmethod
    def _label_never_empty(cls, value: str) -> str:
        return value if value.strip() else PLACEHOLDER_LABEL


class GeocodeCandidate(BaseModel):
    """One match returned by the Open-Meteo geocoding search."""

    name: str
    latitude: float
    longitude: float
    admin1: str | None = None
    country_code: str | None = None


class CurrentWeather(BaseModel):
    """Single snapshot from the Open-Meteo `current` block."""

    time: datetime | None = None
    temperature_2m: float | None = None
    apparent_temperature: float | None = None
    relative_humidity_2m: float | None = None
    weather_code: int | None = None
    wind_speed_10m: float | None = None
    precipitation: float | None = None


class DailyWeather(BaseModel):
    """One day of weather data from Open-Meteo daily endpoint."""

    date: date
    temperature_2m_max: float | None = None
    temperature_2m_min: float | None = None
    precipitation_sum: float | None = None


class WeatherResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint."""

    latitude: float
    longitude: float
    timezone: str = "GMT"
    utc_offset_seconds: int = 0
    units: Units = "imperial"
    current: CurrentWeather = CurrentWeather()
    daily: list[DailyWeather] = []


class Element(BaseModel):
    """Symbolic element derived from a condition summary."""

    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    cue: str


class DisplayFields(BaseModel):
    """Every text field the presentation layer shows, already formatted."""

    location: str
    time: str = ""
    temp: str = ""
    summary: str = ""
    hilow: str = ""
    precip: str = ""
    wind: str = ""
    humidity: str = ""
    feels: str = ""
    element: str = ""
    cue: str = ""

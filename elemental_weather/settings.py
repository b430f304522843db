# ABOUTME: Runtime configuration loaded from environment variables and an optional .env file.
# ABOUTME: Holds the fallback location, unit system, store path and HTTP/search tuning knobs.

import os
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from pydantic import BaseModel, Field

from elemental_weather.models import Location, Units

# Open-Meteo's geocoding search never returns more than this for our requests.
MAX_SEARCH_RESULTS = 8


class Settings(BaseModel):
    """Application settings; defaults reproduce the stock Chicago dashboard."""

    default_latitude: float = Field(default=41.8781, ge=-90, le=90)
    default_longitude: float = Field(default=-87.6298, ge=-180, le=180)
    default_label: str = "Chicago"
    units: Units = "imperial"
    store_path: Path = Path(".elemental_weather.json")
    http_timeout: float = Field(default=10.0, gt=0)
    search_limit: int = Field(default=MAX_SEARCH_RESULTS, ge=1, le=MAX_SEARCH_RESULTS)
    debounce_seconds: float = Field(default=0.25, ge=0)
    min_query_length: int = Field(default=2, ge=1)

    @property
    def default_location(self) -> Location:
        return Location(
            latitude=self.default_latitude,
            longitude=self.default_longitude,
            label=self.default_label,
        )


_ENV_FIELDS = {
    "ELEMENTAL_DEFAULT_LAT": "default_latitude",
    "ELEMENTAL_DEFAULT_LON": "default_longitude",
    "ELEMENTAL_DEFAULT_LABEL": "default_label",
    "ELEMENTAL_UNITS": "units",
    "ELEMENTAL_STORE_PATH": "store_path",
    "ELEMENTAL_HTTP_TIMEOUT": "http_timeout",
    "ELEMENTAL_SEARCH_LIMIT": "search_limit",
}


def load_settings() -> Settings:
    """Build Settings from .env in the working directory, overridden by the process environment.

    Raises pydantic.ValidationError when a variable holds an invalid value.
    """
    env = {**dotenv_values(find_dotenv(usecwd=True)), **os.environ}
    values = {field: env[var] for var, field in _ENV_FIELDS.items() if env.get(var)}
    return Settings.model_validate(values)

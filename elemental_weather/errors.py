# ABOUTME: Exception types raised while resolving a location or fetching weather.
# ABOUTME: The dashboard flow catches these and swaps in the "unavailable" display.


class ElementalWeatherError(Exception):
    """Base class for failures that abort a dashboard render."""


class GeocodingError(ElementalWeatherError):
    """A city lookup returned no results or the geocoding request failed."""


class WeatherFetchError(ElementalWeatherError):
    """The forecast request failed."""

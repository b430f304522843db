# ABOUTME: Maps Open-Meteo weather codes to summaries and summaries to symbolic elements.
# ABOUTME: Pure lookup functions; classification is an ordered first-match-wins rule list.

from elemental_weather.models import Element

CONDITION_SUMMARIES: dict[int, str] = {
    0: "Clear",
    1: "Mostly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Rime fog",
    51: "Light drizzle",
    53: "Drizzle",
    55: "Heavy drizzle",
    61: "Light rain",
    63: "Rain",
    65: "Heavy rain",
    71: "Light snow",
    73: "Snow",
    75: "Heavy snow",
    80: "Rain showers",
    81: "Rain showers",
    82: "Violent showers",
    95: "Thunderstorm",
    96: "Thunderstorm + hail",
    99: "Thunderstorm + hail",
}

WATER = Element(
    name="water",
    label="💧 Water",
    cue="Release, cleanse, soften. Small ritual: rinse hands + 3 slow breaths.",
)
AIR = Element(
    name="air",
    label="🌬 Air",
    cue="Clarify, communicate, reframe. Small ritual: 60s breath focus + jot 1 insight.",
)
FIRE = Element(
    name="fire",
    label="🔥 Fire",
    cue="Initiate, create, move. Small ritual: light a candle + name today’s intention.",
)
EARTH = Element(
    name="earth",
    label="🌱 Earth",
    cue="Stabilize, tend, ground. Small ritual: tidy one surface + feel your feet.",
)

# Evaluated in order; a summary with both water and air tokens is Water.
ELEMENT_RULES: tuple[tuple[tuple[str, ...], Element], ...] = (
    (("rain", "drizzle", "snow", "thunder", "showers"), WATER),
    (("fog", "wind"), AIR),
    (("clear",), FIRE),
)


def summarize(code: int) -> str:
    """Return the human-readable summary for a weather code, never failing."""
    return CONDITION_SUMMARIES.get(code, f"Weather ({code})")


def classify(summary: str) -> Element:
    """Pick the element for a summary; Earth when nothing else matches."""
    text = summary.lower()
    for tokens, element in ELEMENT_RULES:
        if any(token in text for token in tokens):
            return element
    return EARTH

# ABOUTME: Tests for the Starlette web entry point.
# ABOUTME: Drives the weather, search and location endpoints through TestClient with mocked HTTP.

import httpx
import pytest
from starlette.testclient import TestClient

from elemental_weather.store import load_saved_location
from elemental_weather.weather_service import FORECAST_URL, GEOCODING_URL
from elemental_weather.web import create_app


@pytest.fixture
def routed_app(make_client, make_deps, forecast_payload, paris_result):
    """TestClient over an app whose HTTP client answers geocoding and forecast calls."""
    client = make_client({GEOCODING_URL: {"results": [paris_result]}, FORECAST_URL: forecast_payload})
    return TestClient(create_app(make_deps(client)))


class TestWeatherEndpoint:
    def test_renders_fields_for_flags(self, routed_app):
        """GET /api/weather returns the display fields for the query flags.

        Implementation: Requests weather for a city with the cue disabled.
        Passing implies: Query parameters map to the dashboard flags.
        """
        resp = routed_app.get("/api/weather", params={"city": "Paris", "country": "FR", "cue": "0"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["location"] == "Paris, Île-de-France, FR"
        assert body["summary"] == "Thunderstorm"
        assert body["element"] == "💧 Water"
        assert body["cue"] == ""

    def test_failure_returns_placeholder(self, make_client, make_deps):
        """A failed lookup still answers with the placeholder fields.

        Implementation: Geocoding returns no results for the city.
        Passing implies: The page always gets something to display.
        """
        app = TestClient(create_app(make_deps(make_client({GEOCODING_URL: {"results": []}}))))
        body = app.get("/api/weather", params={"city": "Xyzzyville"}).json()
        assert body["location"] == "Weather unavailable"
        assert body["summary"] == "Check location params"


class TestSearchEndpoint:
    def test_returns_candidates(self, routed_app):
        """GET /api/search returns matching candidates.

        Implementation: Searches for "Paris".
        Passing implies: Suggestions are serialised with every candidate field.
        """
        body = routed_app.get("/api/search", params={"q": "Paris"}).json()
        assert body["no_matches"] is False
        assert body["results"][0]["name"] == "Paris"
        assert body["results"][0]["admin1"] == "Île-de-France"

    def test_short_query(self, routed_app):
        """A one-character query returns nothing and no "no matches" flag.

        Implementation: Searches for "P".
        Passing implies: Short queries are suppressed server-side too.
        """
        assert routed_app.get("/api/search", params={"q": "P"}).json() == {"results": [], "no_matches": False}

    def test_empty_and_failed_lookups_flag_no_matches(self, make_client, make_deps):
        """Empty results and failing lookups both report no matches.

        Implementation: Routes geocoding to an empty result, then to a connection error.
        Passing implies: The picker endpoint never errors on a flaky service.
        """
        app = TestClient(create_app(make_deps(make_client({GEOCODING_URL: {"results": []}}))))
        assert app.get("/api/search", params={"q": "Xyzzy"}).json() == {"results": [], "no_matches": True}

        app = TestClient(create_app(make_deps(make_client({GEOCODING_URL: httpx.ConnectError("down")}))))
        resp = app.get("/api/search", params={"q": "Xyzzy"})
        assert resp.status_code == 200
        assert resp.json() == {"results": [], "no_matches": True}


class TestLocationEndpoint:
    def test_choose_saves_and_renders(self, routed_app, store, paris_result):
        """POST /api/location saves the candidate and returns the new display.

        Implementation: Posts the Paris result, then loads weather with no flags.
        Passing implies: The selection persists and later loads use it.
        """
        resp = routed_app.post("/api/location", json=paris_result)

        assert resp.status_code == 200
        body = resp.json()
        assert body["location"] == {"latitude": 48.85, "longitude": 2.35, "label": "Paris, Île-de-France, FR"}
        assert body["display"]["location"] == "Paris, Île-de-France, FR"
        assert load_saved_location(store).label == "Paris, Île-de-France, FR"

        assert routed_app.get("/api/weather").json()["location"] == "Paris, Île-de-France, FR"

    @pytest.mark.parametrize(
        "payload", [{"name": "Nowhere"}, ["Paris"], {"name": "Nowhere", "latitude": 95, "longitude": 0}]
    )
    def test_invalid_body_rejected(self, routed_app, store, payload):
        """Bodies that are not a candidate are rejected with 422.

        Implementation: Posts a candidate missing coordinates, a JSON list and an out-of-range candidate.
        Passing implies: Nothing is saved from a malformed request.
        """
        resp = routed_app.post("/api/location", json=payload)
        assert resp.status_code == 422
        assert load_saved_location(store) is None

    def test_non_json_body_rejected(self, routed_app):
        """A body that is not JSON is rejected with 422.

        Implementation: Posts plain text.
        Passing implies: Parse errors do not surface as server errors.
        """
        resp = routed_app.post("/api/location", content=b"not json", headers={"content-type": "application/json"})
        assert resp.status_code == 422

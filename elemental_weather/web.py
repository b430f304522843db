# ABOUTME: ASGI web entry point serving the dashboard fields and the location picker endpoints.
# ABOUTME: Creates a Starlette app; run with `uvicorn elemental_weather.web:app`.

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from elemental_weather.dashboard import choose_location, load_dashboard
from elemental_weather.deps import AppDeps, create_deps
from elemental_weather.models import GeocodeCandidate
from elemental_weather.picker import search_suggestions
from elemental_weather.render import cue_requested

logger = logging.getLogger(__name__)

# Flags the dashboard understands; anything else in the query string is ignored.
QUERY_FLAGS = ("lat", "lon", "label", "city", "region", "country", "cue")


def create_app(deps: AppDeps | None = None) -> Starlette:
    """Build the Starlette app around a dependency container."""
    deps = deps or create_deps()

    async def weather(request: Request) -> JSONResponse:
        params = {k: request.query_params[k] for k in QUERY_FLAGS if k in request.query_params}
        display = await load_dashboard(params, deps)
        return JSONResponse(display.model_dump())

    async def search(request: Request) -> JSONResponse:
        query = request.query_params.get("q", "")
        results = await search_suggestions(deps.search, query, deps.settings.min_query_length)
        no_matches = len(query.strip()) >= deps.settings.min_query_length and not results
        return JSONResponse({"results": [r.model_dump() for r in results], "no_matches": no_matches})

    async def choose(request: Request) -> JSONResponse:
        try:
            candidate = GeocodeCandidate.model_validate(await request.json())
        except (json.JSONDecodeError, ValidationError) as e:
            return JSONResponse({"error": f"Invalid location: {e}"}, status_code=422)
        try:
            location, display = await choose_location(
                candidate, deps, cue_enabled=cue_requested(request.query_params)
            )
        except ValidationError as e:
            return JSONResponse({"error": f"Invalid location: {e}"}, status_code=422)
        return JSONResponse({"location": location.model_dump(), "display": display.model_dump()})

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        yield
        await deps.http_client.aclose()

    return Starlette(
        routes=[
            Route("/api/weather", weather, methods=["GET"]),
            Route("/api/search", search, methods=["GET"]),
            Route("/api/location", choose, methods=["POST"]),
        ],
        lifespan=lifespan,
    )


app = create_app()

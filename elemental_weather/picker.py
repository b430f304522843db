# ABOUTME: Debounced city-search picker that suggests locations and remembers the chosen one.
# ABOUTME: Sequences lookups so a slow, stale response never replaces newer suggestions.

import asyncio
import logging
from collections.abc import Awaitable, Callable

from elemental_weather.models import GeocodeCandidate, Location
from elemental_weather.resolver import candidate_to_location
from elemental_weather.store import KeyValueStore, save_location

logger = logging.getLogger(__name__)

SearchFn = Callable[[str], Awaitable[list[GeocodeCandidate]]]

NO_MATCHES = "No matches"


def remember_choice(store: KeyValueStore, candidate: GeocodeCandidate) -> Location:
    """Turn a picked suggestion into the saved location."""
    location = candidate_to_location(candidate)
    save_location(store, location)
    logger.info("Saved location %r", location.label)
    return location


async def search_suggestions(search_fn: SearchFn, query: str, min_chars: int = 2) -> list[GeocodeCandidate]:
    """Look up suggestions for a query; short queries and failures yield []."""
    query = query.strip()
    if len(query) < min_chars:
        return []
    try:
        return await search_fn(query)
    except Exception:
        logger.warning("Suggestion lookup failed for %r", query, exc_info=True)
        return []


class LocationPicker:
    """Search box state: debounced lookups, current suggestions and selection.

    Each keystroke cancels the pending timer, so one burst of typing issues at most
    one lookup. Lookups already in flight are left to finish, but only the response
    to the most recently issued lookup is applied.
    """

    def __init__(
        self,
        search_fn: SearchFn,
        store: KeyValueStore,
        *,
        on_select: Callable[[Location], Awaitable[None]] | None = None,
        on_suggestions: Callable[[list[GeocodeCandidate]], None] | None = None,
        delay: float = 0.25,
        min_chars: int = 2,
    ):
        self.search_fn = search_fn
        self.store = store
        self.on_select = on_select
        self.on_suggestions = on_suggestions
        self.delay = delay
        self.min_chars = min_chars
        self.suggestions: list[GeocodeCandidate] = []
        self.no_matches = False
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._issued = 0

    @property
    def placeholder(self) -> str:
        return NO_MATCHES if self.no_matches else ""

    def on_input(self, text: str) -> None:
        """Handle a keystroke; must be called from a running event loop."""
        self._cancel_timer()
        query = text.strip()
        if len(query) < self.min_chars:
            self._issued += 1  # anything still in flight is now stale
            self._apply([], no_matches=False)
            return
        self._timer = asyncio.create_task(self._debounce(query))

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self.delay)
        self._issued += 1
        task = asyncio.create_task(self._lookup(self._issued, query))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _lookup(self, seq: int, query: str) -> None:
        results = await search_suggestions(self.search_fn, query, self.min_chars)
        if seq != self._issued:
            logger.debug("Dropping stale suggestions for %r (request %d, latest %d)", query, seq, self._issued)
            return
        self._apply(results, no_matches=not results)

    def _apply(self, results: list[GeocodeCandidate], *, no_matches: bool) -> None:
        self.suggestions = results
        self.no_matches = no_matches
        if self.on_suggestions is not None:
            self.on_suggestions(results)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def wait_idle(self) -> None:
        """Wait until the pending timer has fired and every lookup has finished."""
        if self._timer is not None:
            await asyncio.gather(self._timer, return_exceptions=True)
        while self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    async def select(self, candidate: GeocodeCandidate) -> Location:
        """Persist the chosen candidate and hand the new location to on_select."""
        location = remember_choice(self.store, candidate)
        self._cancel_timer()
        self._issued += 1
        self._apply([], no_matches=False)
        if self.on_select is not None:
            await self.on_select(location)
        return location

    def close(self) -> None:
        self._cancel_timer()

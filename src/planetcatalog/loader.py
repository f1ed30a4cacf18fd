"""Incremental loading state: pure transitions plus an observable controller.

The controller owns one LoadState per browser session. Each trigger
(search, reset, load_more) replaces the state through a pure transition
function and notifies subscribers after every change.

Auto-load budget: scroll-triggered continuations are capped at
MAX_AUTO_LOADS per search. Once spent, only manual load_more(False)
calls continue paging, which bounds unattended request volume.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Protocol

from planetcatalog.models import PaginatedResponse, Planet

logger = logging.getLogger(__name__)

MAX_AUTO_LOADS = 3


class PlanetFetcher(Protocol):
    """Fetch collaborator. SwapiClient satisfies this."""

    async def fetch_planets(
        self, page: int = 1, search: str | None = None
    ) -> PaginatedResponse[Planet]: ...

    async def fetch_planets_by_url(self, url: str) -> PaginatedResponse[Planet]: ...


@dataclass(frozen=True)
class LoadState:
    """Snapshot of the paging state. Replaced, never mutated."""

    results: tuple[Planet, ...] = ()
    next_page: str | None = None  # Continuation url; None means no more pages
    auto_load_count: int = 0  # 0..MAX_AUTO_LOADS
    pending: bool = False  # True while one fetch is outstanding
    search_term: str = ""
    generation: int = 0  # Bumped by search/reset; stale responses are dropped
    total_count: int = 0  # Upstream match count of the latest page

    @property
    def can_auto_load(self) -> bool:
        return self.auto_load_count < MAX_AUTO_LOADS

    @property
    def has_more(self) -> bool:
        return self.next_page is not None

    @property
    def show_scroll_trigger(self) -> bool:
        """Automatic continuation is eligible."""
        return self.has_more and self.can_auto_load

    @property
    def show_load_button(self) -> bool:
        """Manual continuation is eligible."""
        return self.has_more and not self.can_auto_load and not self.pending


def start_search(state: LoadState, term: str) -> LoadState:
    """New search: drop results and budget, invalidate in-flight fetches."""
    return LoadState(
        search_term=term,
        pending=True,
        generation=state.generation + 1,
    )


def can_load_more(state: LoadState, is_automatic: bool) -> bool:
    if not state.has_more or state.pending:
        return False
    return state.can_auto_load or not is_automatic


def start_load_more(state: LoadState) -> LoadState:
    return replace(state, pending=True)


def complete_fetch(
    state: LoadState, page: PaginatedResponse[Planet], is_automatic: bool = False
) -> LoadState:
    """Append a fetched page. Only a successful automatic load spends budget."""
    auto_load_count = state.auto_load_count
    if is_automatic:
        auto_load_count = min(auto_load_count + 1, MAX_AUTO_LOADS)
    return replace(
        state,
        results=state.results + page.results,
        next_page=page.next,
        total_count=page.count,
        auto_load_count=auto_load_count,
        pending=False,
    )


def fail_fetch(state: LoadState) -> LoadState:
    return replace(state, pending=False)


class PlanetLoader:
    """Drives LoadState from user triggers and fetch completions.

    Args:
        fetcher: Fetch collaborator (normally a SwapiClient).
    """

    def __init__(self, fetcher: PlanetFetcher) -> None:
        self._fetcher = fetcher
        self._state = LoadState()
        self._listeners: list[Callable[[LoadState], None]] = []

    @property
    def state(self) -> LoadState:
        return self._state

    def subscribe(self, listener: Callable[[LoadState], None]) -> Callable[[], None]:
        """Register a listener called with the new state after each change.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: LoadState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    async def search(self, term: str) -> None:
        """Start a new search and load its first page.

        Raises:
            Whatever the fetcher raises, unless a newer search superseded this one.
        """
        self._set_state(start_search(self._state, term))
        generation = self._state.generation
        logger.info("Searching planets (term=%r)", term)
        try:
            page = await self._fetcher.fetch_planets(1, term)
        except Exception:
            if self._is_stale(generation):
                logger.info("Dropping failed response for superseded search %r", term)
                return
            self._set_state(fail_fetch(self._state))
            raise
        if self._is_stale(generation):
            logger.info("Dropping stale response for superseded search %r", term)
            return
        self._set_state(complete_fetch(self._state, page))

    async def reset(self) -> None:
        """Clear the search term and reload from the first page."""
        await self.search("")

    async def load_more(self, is_automatic: bool = False) -> bool:
        """Load the next page if one exists and no fetch is outstanding.

        Automatic (scroll-triggered) calls are also refused once the
        auto-load budget is spent.

        Returns:
            True if a fetch was issued, False if the call was ignored.

        Raises:
            Whatever the fetcher raises; the state keeps its results.
        """
        url = self._state.next_page
        if url is None or not can_load_more(self._state, is_automatic):
            logger.debug(
                "load_more ignored (automatic=%s, has_more=%s, pending=%s, auto_loads=%s)",
                is_automatic,
                self._state.has_more,
                self._state.pending,
                self._state.auto_load_count,
            )
            return False

        self._set_state(start_load_more(self._state))
        generation = self._state.generation
        try:
            page = await self._fetcher.fetch_planets_by_url(url)
        except Exception:
            if self._is_stale(generation):
                logger.info("Dropping failed continuation %s after a new search", url)
                return True
            self._set_state(fail_fetch(self._state))
            raise
        if self._is_stale(generation):
            logger.info("Dropping stale continuation %s after a new search", url)
            return True
        self._set_state(complete_fetch(self._state, page, is_automatic))
        return True

    def _is_stale(self, generation: int) -> bool:
        return generation != self._state.generation

"""Tests for the incremental loading state machine."""

import asyncio

import httpx
import pytest

from conftest import FakeFetcher, make_page

from planetcatalog.loader import (
    MAX_AUTO_LOADS,
    LoadState,
    PlanetLoader,
    complete_fetch,
    start_search,
)


def _loaded(fetcher: FakeFetcher) -> PlanetLoader:
    loader = PlanetLoader(fetcher)
    asyncio.run(loader.search(""))
    return loader


def test_initial_state():
    state = LoadState()
    assert state.results == ()
    assert state.auto_load_count == 0
    assert state.can_auto_load
    assert not state.has_more
    assert not state.pending


def test_search_loads_first_page(fetcher):
    loader = PlanetLoader(fetcher)
    asyncio.run(loader.search("too"))

    assert fetcher.calls == [("page", 1, "too")]
    assert [p.id for p in loader.state.results] == [1, 2]
    assert loader.state.next_page == "https://swapi.dev/api/planets/?page=2"
    assert loader.state.search_term == "too"
    assert loader.state.total_count == 20
    assert not loader.state.pending


def test_three_automatic_loads_then_blocked(fetcher):
    """Test the auto-load budget allows exactly MAX_AUTO_LOADS scroll loads."""
    loader = _loaded(fetcher)

    for expected in range(1, MAX_AUTO_LOADS + 1):
        assert loader.state.can_auto_load
        assert asyncio.run(loader.load_more(is_automatic=True)) is True
        assert loader.state.auto_load_count == expected

    assert not loader.state.can_auto_load
    before = loader.state
    calls_before = len(fetcher.calls)

    assert asyncio.run(loader.load_more(is_automatic=True)) is False
    assert loader.state == before
    assert len(fetcher.calls) == calls_before


def test_manual_load_never_changes_auto_count(fetcher):
    loader = _loaded(fetcher)

    asyncio.run(loader.load_more(is_automatic=False))
    assert loader.state.auto_load_count == 0

    for _ in range(MAX_AUTO_LOADS):
        asyncio.run(loader.load_more(is_automatic=True))
    results_before = len(loader.state.results)

    assert asyncio.run(loader.load_more(is_automatic=False)) is True
    assert loader.state.auto_load_count == MAX_AUTO_LOADS
    assert len(loader.state.results) == results_before + fetcher.page_size


def test_pages_append_in_order(fetcher):
    loader = _loaded(fetcher)
    asyncio.run(loader.load_more())
    asyncio.run(loader.load_more())

    assert [p.id for p in loader.state.results] == [1, 2, 3, 4, 5, 6]
    assert fetcher.calls[1:] == [
        ("url", "https://swapi.dev/api/planets/?page=2"),
        ("url", "https://swapi.dev/api/planets/?page=3"),
    ]


def test_load_more_without_next_page_is_ignored():
    fetcher = FakeFetcher(last_page=1)
    loader = _loaded(fetcher)

    assert not loader.state.has_more
    assert asyncio.run(loader.load_more()) is False
    assert len(fetcher.calls) == 1


class GatedFetcher(FakeFetcher):
    """Continuations wait until `gate` is set, so a fetch stays outstanding."""

    gate: asyncio.Event

    async def fetch_planets_by_url(self, url):
        await self.gate.wait()
        return await super().fetch_planets_by_url(url)


def test_load_more_while_pending_is_ignored():
    fetcher = GatedFetcher()
    loader = _loaded(fetcher)

    async def overlapping():
        fetcher.gate = asyncio.Event()
        first = asyncio.ensure_future(loader.load_more())
        await asyncio.sleep(0)
        assert loader.state.pending
        second = await loader.load_more()
        fetcher.gate.set()
        return await first, second

    first, second = asyncio.run(overlapping())
    assert first is True
    assert second is False
    assert len(fetcher.calls) == 2
    assert len(loader.state.results) == 4


@pytest.mark.parametrize("trigger", ["search", "reset"])
def test_search_and_reset_clear_state(fetcher, trigger):
    loader = _loaded(fetcher)
    for _ in range(MAX_AUTO_LOADS):
        asyncio.run(loader.load_more(is_automatic=True))
    assert loader.state.auto_load_count == MAX_AUTO_LOADS

    seen: list[LoadState] = []
    loader.subscribe(seen.append)
    if trigger == "search":
        asyncio.run(loader.search("hoth"))
    else:
        asyncio.run(loader.reset())

    # First notification is the cleared, pending state
    assert seen[0].results == ()
    assert seen[0].auto_load_count == 0
    assert seen[0].next_page is None
    assert seen[0].pending
    assert loader.state.auto_load_count == 0
    assert [p.id for p in loader.state.results] == [1, 2]
    assert loader.state.search_term == ("hoth" if trigger == "search" else "")


def test_fetch_error_propagates_and_keeps_results(fetcher):
    loader = _loaded(fetcher)
    results_before = loader.state.results
    fetcher.error = httpx.ConnectError("boom")

    with pytest.raises(httpx.ConnectError):
        asyncio.run(loader.load_more(is_automatic=True))

    assert loader.state.results == results_before
    assert not loader.state.pending
    # Failed automatic loads do not spend the budget
    assert loader.state.auto_load_count == 0
    assert loader.state.has_more


def test_search_error_propagates(fetcher):
    loader = PlanetLoader(fetcher)
    fetcher.error = httpx.ConnectError("down")

    with pytest.raises(httpx.ConnectError):
        asyncio.run(loader.search("x"))

    assert not loader.state.pending
    assert loader.state.results == ()


def test_stale_response_after_search_is_discarded():
    """Test a continuation that lands after a new search is not appended."""
    fetcher = GatedFetcher()
    loader = _loaded(fetcher)

    async def race():
        fetcher.gate = asyncio.Event()
        stale = asyncio.ensure_future(loader.load_more())
        await asyncio.sleep(0)
        await loader.search("alderaan")
        fetcher.gate.set()
        return await stale

    assert asyncio.run(race()) is True
    assert loader.state.search_term == "alderaan"
    assert [p.id for p in loader.state.results] == [1, 2]
    assert not loader.state.pending


def test_stale_error_after_search_is_dropped():
    fetcher = GatedFetcher()
    loader = _loaded(fetcher)

    async def race():
        fetcher.gate = asyncio.Event()
        stale = asyncio.ensure_future(loader.load_more())
        await asyncio.sleep(0)
        await loader.search("hoth")
        fetcher.error = httpx.ReadTimeout("slow")
        fetcher.gate.set()
        return await stale

    assert asyncio.run(race()) is True
    assert loader.state.search_term == "hoth"
    assert [p.id for p in loader.state.results] == [1, 2]


def test_visibility_predicates():
    state = LoadState(next_page="https://swapi.dev/api/planets/?page=2")
    assert state.show_scroll_trigger
    assert not state.show_load_button

    exhausted = LoadState(
        next_page="https://swapi.dev/api/planets/?page=5", auto_load_count=MAX_AUTO_LOADS
    )
    assert not exhausted.show_scroll_trigger
    assert exhausted.show_load_button

    pending = LoadState(
        next_page="https://swapi.dev/api/planets/?page=5",
        auto_load_count=MAX_AUTO_LOADS,
        pending=True,
    )
    assert not pending.show_load_button

    last_page = LoadState(next_page=None)
    assert not last_page.show_scroll_trigger
    assert not last_page.show_load_button


def test_complete_fetch_caps_auto_count():
    state = LoadState(auto_load_count=MAX_AUTO_LOADS, pending=True)
    state = complete_fetch(state, make_page(1), is_automatic=True)
    assert state.auto_load_count == MAX_AUTO_LOADS
    assert not state.pending


def test_start_search_bumps_generation():
    state = LoadState(results=make_page(1).results, auto_load_count=2, generation=4)
    new = start_search(state, "bespin")
    assert new.generation == 5
    assert new.results == ()
    assert new.auto_load_count == 0
    assert new.pending


def test_unsubscribe_stops_notifications(fetcher):
    loader = PlanetLoader(fetcher)
    seen: list[LoadState] = []
    unsubscribe = loader.subscribe(seen.append)

    asyncio.run(loader.search(""))
    count = len(seen)
    unsubscribe()
    asyncio.run(loader.load_more())

    assert count == 2  # pending, then loaded
    assert len(seen) == count

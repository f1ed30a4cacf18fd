"""Shared fixtures: raw SWAPI records and a scripted fetcher."""

import pytest

from planetcatalog.models import PaginatedResponse, Planet, SwapiPlanet
from planetcatalog.transform import transform_planet


def make_raw_planet(planet_id: int = 1, **overrides) -> SwapiPlanet:
    raw: SwapiPlanet = {
        "name": "Tatooine",
        "rotation_period": "23",
        "orbital_period": "304",
        "diameter": "10465",
        "climate": "arid",
        "gravity": "1 standard",
        "terrain": "desert",
        "surface_water": "1",
        "population": "200000",
        "residents": [],
        "films": [],
        "created": "2014-12-09T13:50:49.641000Z",
        "edited": "2014-12-20T20:58:18.411000Z",
        "url": f"https://swapi.dev/api/planets/{planet_id}/",
    }
    raw.update(overrides)  # type: ignore[typeddict-item]
    return raw


def make_page(
    start_id: int, size: int = 2, next_url: str | None = None, count: int = 60
) -> PaginatedResponse[Planet]:
    return PaginatedResponse(
        count=count,
        next=next_url,
        previous=None,
        results=tuple(
            transform_planet(make_raw_planet(i, name=f"Planet {i}"))
            for i in range(start_id, start_id + size)
        ),
    )


class FakeFetcher:
    """Scripted fetch collaborator.

    Every call records its arguments and returns a page whose `next` points
    at the following page, up to `last_page`. Set `error` to make the next
    call raise it instead.
    """

    def __init__(self, last_page: int = 10, page_size: int = 2) -> None:
        self.last_page = last_page
        self.page_size = page_size
        self.calls: list[tuple] = []
        self.error: Exception | None = None

    def _page(self, page: int) -> PaginatedResponse[Planet]:
        next_url = (
            f"https://swapi.dev/api/planets/?page={page + 1}"
            if page < self.last_page
            else None
        )
        return make_page(
            (page - 1) * self.page_size + 1,
            size=self.page_size,
            next_url=next_url,
            count=self.last_page * self.page_size,
        )

    def _raise_if_scripted(self) -> None:
        if self.error is not None:
            error, self.error = self.error, None
            raise error

    async def fetch_planets(self, page: int = 1, search: str | None = None):
        self.calls.append(("page", page, search))
        self._raise_if_scripted()
        return self._page(page)

    async def fetch_planets_by_url(self, url: str):
        self.calls.append(("url", url))
        self._raise_if_scripted()
        return self._page(int(url.rsplit("=", 1)[1]))


@pytest.fixture
def raw_planet() -> SwapiPlanet:
    return make_raw_planet()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()

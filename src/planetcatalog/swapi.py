"""SWAPI fetch layer: paginated planet requests over httpx."""

import logging
import os

import httpx

from planetcatalog.models import PaginatedResponse, Planet
from planetcatalog.transform import transform_planet

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://swapi.dev/api"
_HEADERS = {"User-Agent": "PlanetCatalog/1.0"}


def _to_page(data: dict) -> PaginatedResponse[Planet]:
    return PaginatedResponse(
        count=int(data.get("count") or 0),
        next=data.get("next"),
        previous=data.get("previous"),
        results=tuple(transform_planet(raw) for raw in data.get("results", [])),
    )


class SwapiClient:
    """Async client for the SWAPI planets endpoint.

    A fresh httpx.AsyncClient is opened per request so the client can be
    driven from separate event loops (Streamlit reruns call asyncio.run).

    Args:
        base_url: API root. Defaults to $SWAPI_BASE_URL or swapi.dev.
        timeout: Request timeout in seconds. Defaults to $SWAPI_TIMEOUT or 10.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (
            base_url or os.environ.get("SWAPI_BASE_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        self.timeout = (
            timeout
            if timeout is not None
            else float(os.environ.get("SWAPI_TIMEOUT", "10"))
        )
        self._transport = transport

    async def _get_json(self, url: str, params: dict | None = None) -> dict:
        async with httpx.AsyncClient(
            headers=_HEADERS,
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            try:
                return resp.json()
            except ValueError as e:
                raise httpx.DecodingError(
                    f"Invalid JSON from {resp.url}: {e}", request=resp.request
                ) from e

    async def fetch_planets(
        self, page: int = 1, search: str | None = None
    ) -> PaginatedResponse[Planet]:
        """Fetch one page of planets, optionally filtered by name.

        Args:
            page: 1-based page number.
            search: Name filter. Blank or whitespace-only means no filter.

        Returns:
            PaginatedResponse with transformed planets.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response.
        """
        params: dict[str, str | int] = {"page": page}
        if search and search.strip():
            params["search"] = search.strip()
        try:
            data = await self._get_json(f"{self.base_url}/planets/", params=params)
        except httpx.HTTPError as e:
            logger.error("Error fetching planets (page=%s, search=%r): %s", page, search, e)
            raise
        logger.debug("Fetched planets page %s (search=%r)", page, search)
        return _to_page(data)

    async def fetch_planets_by_url(self, url: str) -> PaginatedResponse[Planet]:
        """Fetch the page behind a continuation url (the `next` of a previous page).

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response.
        """
        try:
            data = await self._get_json(url)
        except httpx.HTTPError as e:
            logger.error("Error fetching planets by url %s: %s", url, e)
            raise
        logger.debug("Fetched planets from %s", url)
        return _to_page(data)

    async def fetch_planet(self, planet_id: int) -> Planet:
        """Fetch a single planet by id.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx response (404 for unknown ids).
        """
        try:
            data = await self._get_json(f"{self.base_url}/planets/{planet_id}/")
        except httpx.HTTPError as e:
            logger.error("Error fetching planet %s: %s", planet_id, e)
            raise
        return transform_planet(data)

"""CLI entry point for browsing the planet catalog from a terminal.

    uv run python -m planetcatalog.catalog --search too --pages 2 --sort distance_from_sun
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

import httpx
from dotenv import load_dotenv

load_dotenv()

from planetcatalog.loader import PlanetLoader  # noqa: E402
from planetcatalog.models import Planet  # noqa: E402
from planetcatalog.sort import sort_planets  # noqa: E402
from planetcatalog.swapi import SwapiClient  # noqa: E402
from planetcatalog.transform import format_distance, format_number  # noqa: E402

logger = logging.getLogger(__name__)


def format_row(planet: Planet) -> str:
    return (
        f"{planet.id:>4}  {planet.name:<20} {format_number(planet.population):>16}"
        f"  {format_distance(planet.distance_from_sun):>8}  {planet.climate}"
    )


async def collect(loader: PlanetLoader, search: str, pages: int) -> tuple[Planet, ...]:
    """Run a search and page forward manually until `pages` pages are loaded."""
    await loader.search(search)
    for _ in range(pages - 1):
        if not await loader.load_more(is_automatic=False):
            break
    return loader.state.results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse SWAPI planets")
    parser.add_argument("--search", default="", help="Filter planets by name")
    parser.add_argument("--pages", type=int, default=1, help="Number of pages to load")
    parser.add_argument(
        "--sort", choices=["population", "distance_from_sun"], default=None
    )
    parser.add_argument("--order", choices=["asc", "desc"], default="asc")
    parser.add_argument("--id", type=int, default=None, help="Show a single planet")
    parser.add_argument(
        "--save-chart", type=Path, default=None, help="Write an orbit map PNG"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=os.environ.get("PLANETCATALOG_LOG_LEVEL", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    client = SwapiClient()
    try:
        if args.id is not None:
            planets: tuple[Planet, ...] = (asyncio.run(client.fetch_planet(args.id)),)
        else:
            loader = PlanetLoader(client)
            planets = asyncio.run(collect(loader, args.search, max(args.pages, 1)))
            logger.info(
                "Loaded %d of %d planets", len(planets), loader.state.total_count
            )
    except httpx.HTTPError as e:
        print(f"Could not load planets: {e}", file=sys.stderr)
        return 1

    if args.sort:
        planets = sort_planets(planets, args.sort, args.order)

    for planet in planets:
        print(format_row(planet))

    if args.save_chart is not None:
        from planetcatalog.renderers.static import save_static_chart

        path = save_static_chart(planets, args.save_chart)
        print(f"Saved: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Planet transform layer: string parsing, id extraction, and Kepler distance."""

import math
import re

from planetcatalog.models import Planet, SwapiPlanet

_PLANET_URL_RE = re.compile(r"/planets/(\d+)/?$")
# Leading float, read the way JavaScript parseFloat reads it ("12.5 km" -> 12.5)
_LEADING_FLOAT_RE = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_UNKNOWN = "Unknown"


def calculate_distance_from_sun(orbital_period: float) -> float:
    """Relative distance from the star using Kepler's third law.

    Formula: distance ∝ orbital_period^(2/3). The result is in arbitrary
    units, useful only for comparing planets with each other.

    Args:
        orbital_period: Orbital period in days.

    Returns:
        Relative distance, or 0 when the period is unknown (<= 0).
    """
    if not orbital_period > 0:  # also catches NaN
        return 0.0
    return orbital_period ** (2 / 3)


def extract_planet_id(url: str) -> int:
    """Extract the planet id from a SWAPI url.

    "https://swapi.dev/api/planets/1/" -> 1. Any other resource -> 0.
    """
    match = _PLANET_URL_RE.search(url or "")
    return int(match.group(1)) if match else 0


def parse_number_or_zero(value: str) -> float:
    """Parse a SWAPI numeric string, mapping "unknown"/"n/a"/garbage to 0."""
    if not value or value.lower() == "unknown" or value == "n/a":
        return 0.0
    cleaned = value.replace(",", "")
    match = _LEADING_FLOAT_RE.match(cleaned)
    if match is None:
        return 0.0
    parsed = float(match.group(1))
    return parsed if math.isfinite(parsed) else 0.0


def transform_planet(swapi_planet: SwapiPlanet) -> Planet:
    """Convert a raw SWAPI record to a Planet. Pure; never raises on bad field data."""
    orbital_period = parse_number_or_zero(swapi_planet["orbital_period"])
    population = parse_number_or_zero(swapi_planet["population"])
    diameter = parse_number_or_zero(swapi_planet["diameter"])

    return Planet(
        id=extract_planet_id(swapi_planet["url"]),
        name=swapi_planet["name"],
        population=population,
        population_display=swapi_planet["population"],
        orbital_period=orbital_period,
        distance_from_sun=calculate_distance_from_sun(orbital_period),
        diameter=diameter,
        diameter_display=swapi_planet["diameter"],
        climate=swapi_planet["climate"],
        gravity=swapi_planet["gravity"],
        terrain=swapi_planet["terrain"],
        url=swapi_planet["url"],
    )


def format_number(num: float) -> str:
    """Thousands-grouped number; 0 renders as "Unknown"."""
    if num == 0:
        return _UNKNOWN
    if float(num).is_integer():
        return f"{int(num):,}"
    # Up to three fraction digits, trailing zeros dropped
    return f"{num:,.3f}".rstrip("0").rstrip(".")


def format_distance(distance: float) -> str:
    """Distance rounded to two decimals; 0 renders as "Unknown"."""
    if distance == 0:
        return _UNKNOWN
    return f"{distance:.2f}"

"""Data model definitions: explicit boundaries between fetch, transform, and render layers."""

from dataclasses import dataclass
from typing import Generic, Literal, TypedDict, TypeVar

T = TypeVar("T")

SortField = Literal["population", "distance_from_sun"]
SortOrder = Literal["asc", "desc"]


class SwapiPlanet(TypedDict):
    """Raw planet record as returned by SWAPI. Numeric fields are strings."""

    name: str
    rotation_period: str
    orbital_period: str  # Days, or "unknown"
    diameter: str  # Kilometres, or "unknown"
    climate: str
    gravity: str
    terrain: str
    surface_water: str
    population: str  # May contain "unknown"
    residents: list[str]
    films: list[str]
    created: str
    edited: str
    url: str  # "https://swapi.dev/api/planets/1/"


@dataclass(frozen=True)
class Planet:
    """Normalized planet. Unknown numeric values are 0."""

    id: int  # Trailing /planets/<n>/ segment of url; 0 if absent
    name: str
    population: float
    population_display: str  # Upstream string, keeps "unknown"
    orbital_period: float  # Days
    distance_from_sun: float  # Kepler's third law, relative units
    diameter: float
    diameter_display: str  # Upstream string, keeps "unknown"
    climate: str
    gravity: str
    terrain: str
    url: str


@dataclass(frozen=True)
class PaginatedResponse(Generic[T]):
    """One page of a SWAPI list endpoint."""

    count: int  # Total matches across all pages
    next: str | None  # Continuation URL; None on the last page
    previous: str | None
    results: tuple[T, ...]

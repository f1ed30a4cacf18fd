"""HTML card renderer for the Streamlit page."""

from __future__ import annotations

import html

from planetcatalog.i18n import t
from planetcatalog.models import Planet
from planetcatalog.transform import format_distance, format_number

_CARD_STYLE = (
    "background:rgba(13,27,53,0.85);border:1px solid rgba(201,169,110,0.25);"
    "border-radius:10px;padding:0.9rem 1.1rem;margin-bottom:0.8rem;color:#e8d5a3;"
)


def render_planet_card(planet: Planet, lang: str = "en") -> str:
    """Return one planet as an HTML card. All upstream text is escaped.

    Population and diameter show the upstream display string when it is
    "unknown" so missing data stays distinguishable from a formatted number.
    """
    population = (
        format_number(planet.population)
        if planet.population
        else html.escape(planet.population_display or "Unknown")
    )
    diameter = (
        f"{format_number(planet.diameter)} km"
        if planet.diameter
        else html.escape(planet.diameter_display or "Unknown")
    )
    rows = [
        (t("field_population", lang), population),
        (t("field_diameter", lang), diameter),
        (t("field_distance", lang), format_distance(planet.distance_from_sun)),
        (t("field_climate", lang), html.escape(planet.climate)),
        (t("field_terrain", lang), html.escape(planet.terrain)),
        (t("field_gravity", lang), html.escape(planet.gravity)),
    ]
    body = "".join(
        f"<div style='display:flex;justify-content:space-between;font-size:0.85rem;'>"
        f"<span style='color:#aaaaaa'>{label}</span><span>{value}</span></div>"
        for label, value in rows
    )
    return (
        f"<div class='planet-card' data-planet-id='{planet.id}' style='{_CARD_STYLE}'>"
        f"<h4 style='margin:0 0 0.5rem;color:#f0e0b0'>{html.escape(planet.name)}</h4>"
        f"{body}</div>"
    )


def render_planet_grid(planets: tuple[Planet, ...], lang: str = "en") -> str:
    """Concatenate cards for a list of planets."""
    return "".join(render_planet_card(p, lang) for p in planets)

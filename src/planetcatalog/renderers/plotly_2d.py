"""Plotly polar orbit chart renderer.

Each planet with a known orbital period is drawn at radius
distance_from_sun and a fixed angle derived from its id, so a planet keeps
its place as more pages load. Marker size follows log10(population).
"""

import numpy as np
import plotly.graph_objects as go

from planetcatalog.models import Planet
from planetcatalog.transform import format_distance, format_number

_BG = "#0d1b35"
_PLANET_COLOR = "#f0e0b0"
_UNKNOWN_POP_COLOR = "#7ec8e3"
_SUN_COLOR = "#ffcc55"
_GOLDEN_ANGLE_DEG = 137.508


def _marker_sizes(populations: np.ndarray) -> np.ndarray:
    """log10(population) → marker size; unknown population gets the minimum."""
    logs = np.log10(np.where(populations > 0, populations, 1.0))
    return np.clip(4 + logs, 6, 18)


def render_orbit_chart(planets: tuple[Planet, ...], title: str = "") -> go.Figure:
    """Render planets as points on a polar chart around a central star.

    Planets with an unknown orbital period (distance 0) are omitted.

    Args:
        planets: Planets to plot, typically LoadState.results.
        title: Optional chart title.

    Returns:
        Plotly Figure object.
    """
    known = [p for p in planets if p.distance_from_sun > 0]

    radii = np.array([p.distance_from_sun for p in known])
    # Golden-angle spread by id: stable between reruns, few overlaps
    thetas = np.array([(p.id * _GOLDEN_ANGLE_DEG) % 360 for p in known])
    pops = np.array([p.population for p in known], dtype=float)
    colors = [_PLANET_COLOR if p.population > 0 else _UNKNOWN_POP_COLOR for p in known]
    hover = [
        f"{p.name}<br>distance {format_distance(p.distance_from_sun)}"
        f"<br>population {format_number(p.population)}"
        for p in known
    ]

    planet_trace = go.Scatterpolar(
        r=list(radii),
        theta=list(thetas),
        mode="markers+text",
        text=[p.name for p in known],
        textposition="top center",
        textfont=dict(color="#aaaaaa", size=10),
        marker=dict(
            size=list(_marker_sizes(pops)) if len(known) else [],
            color=colors,
            opacity=0.9,
            line=dict(width=0),
        ),
        hovertext=hover,
        hoverinfo="text",
        name="planets",
    )

    sun_trace = go.Scatterpolar(
        r=[0],
        theta=[0],
        mode="markers",
        marker=dict(size=16, color=_SUN_COLOR),
        hoverinfo="skip",
        name="sun",
    )

    fig = go.Figure(data=[sun_trace, planet_trace])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=20, r=20, t=40 if title else 20, b=20),
        height=520,
        polar=dict(
            bgcolor=_BG,
            radialaxis=dict(
                visible=True,
                range=[0, float(radii.max()) * 1.1 if len(known) else 1.0],
                gridcolor="rgba(201,169,110,0.15)",
                tickfont=dict(color="#667799"),
            ),
            angularaxis=dict(visible=False),
        ),
    )
    if title:
        fig.update_layout(title=dict(text=title, font=dict(color="#e8d5a3")))
    return fig

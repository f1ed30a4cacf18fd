"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
from matplotlib.patches import Circle  # noqa: E402

from planetcatalog.models import Planet  # noqa: E402

_ROOT = Path(__file__).parent.parent.parent.parent
_GOLDEN_ANGLE_RAD = np.deg2rad(137.508)


def render_static_chart(planets: tuple[Planet, ...], chart_size: int = 10) -> Figure:
    """Render planets as a static top-down orbit map.

    Planets sit on circles of radius distance_from_sun around a star at the
    origin. Planets with an unknown orbital period are left out.

    Args:
        planets: Planets to draw.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_size, chart_size))
    fig.patch.set_facecolor("black")
    ax.set_facecolor("black")

    known = [p for p in planets if p.distance_from_sun > 0]
    radii = np.array([p.distance_from_sun for p in known])
    angles = np.array([p.id for p in known]) * _GOLDEN_ANGLE_RAD
    x_vals = radii * np.cos(angles)
    y_vals = radii * np.sin(angles)
    extent = float(radii.max()) * 1.1 if len(known) else 1.0

    for r in radii:
        ax.add_patch(
            Circle((0, 0), r, fill=False, color="#7ec8e3", linewidth=0.4, alpha=0.4)
        )

    ax.scatter([0], [0], s=300, color="#ffcc55", zorder=3)
    ax.scatter(x_vals, y_vals, s=40, color="white", linewidths=0, zorder=2)
    for p, x, y in zip(known, x_vals, y_vals):
        ax.annotate(p.name, (x, y), color="#aaaaaa", fontsize=7, xytext=(3, 3),
                    textcoords="offset points")

    ax.set_xlim(-extent, extent)
    ax.set_ylim(-extent, extent)
    ax.set_aspect("equal")
    ax.axis("off")

    return fig


def save_static_chart(planets: tuple[Planet, ...], output_path: Path | None = None) -> Path:
    """Save an orbit map as a PNG file.

    Args:
        planets: Planets to draw.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = _ROOT / "results" / f"orbits_{len(planets)}_planets.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(planets)
    fig.savefig(output_path, facecolor="black")
    plt.close(fig)
    return output_path

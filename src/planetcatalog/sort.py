"""Client-side planet ordering."""

from planetcatalog.models import Planet, SortField, SortOrder


def sort_planets(
    planets: tuple[Planet, ...] | list[Planet],
    field: SortField = "population",
    order: SortOrder = "asc",
) -> tuple[Planet, ...]:
    """Order planets by population or distance from the star.

    Unknown values (0) always go last, in either order. Equal values keep
    their fetch order.
    """
    known = [p for p in planets if getattr(p, field) != 0]
    unknown = [p for p in planets if getattr(p, field) == 0]
    known.sort(key=lambda p: getattr(p, field), reverse=order == "desc")
    return tuple(known + unknown)

"""Rectangular domains and wraparound rectification.

A Bounds is an axis-aligned rectangle over two generic axes. The geohash
codec bisects bounds to build its codes, and spherical_rectify folds a point
that wandered outside a longitude/latitude-like domain back inside it.

Typical usage:
    from oldnav.navdata.bounds import LATLON_BOUNDS, Position, spherical_rectify

    p = Position(x=185.0, y=95.0)
    spherical_rectify(p, LATLON_BOUNDS)  # p is now (5.0, 85.0)
"""

import math
from dataclasses import dataclass


@dataclass
class Position:
    """A point used for hashing.

    Attributes:
        x: X coordinate (longitude for LATLON_BOUNDS).
        y: Y coordinate (latitude for LATLON_BOUNDS).
    """

    x: float
    y: float


@dataclass
class Bounds:
    """A rectangular boundary.

    Attributes:
        x_min: X coordinate minimum.
        x_max: X coordinate maximum.
        y_min: Y coordinate minimum.
        y_max: Y coordinate maximum.

    Examples:
        >>> b = Bounds(-21.0, 0.0, 2.0, 4.0)
        >>> b.contains(Position(-2.1, 2.45))
        True
        >>> b.contains(Position(-100.0, 2.45))
        False
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        if self.x_min > self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must not exceed x_max ({self.x_max})")
        if self.y_min > self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must not exceed y_max ({self.y_max})")

    def mid(self) -> Position:
        """Get the midpoint of these bounds."""
        return Position(
            x=(self.x_max + self.x_min) / 2.0,
            y=(self.y_max + self.y_min) / 2.0,
        )

    def contains(self, position: Position) -> bool:
        """Test whether a position falls within these bounds (edges included)."""
        return (
            self.x_min <= position.x <= self.x_max and self.y_min <= position.y <= self.y_max
        )

    def x_range(self) -> float:
        """Extent of the x axis."""
        return abs(self.x_max - self.x_min)

    def y_range(self) -> float:
        """Extent of the y axis."""
        return abs(self.y_max - self.y_min)

    def copy(self) -> "Bounds":
        """Return an independent copy of these bounds."""
        return Bounds(self.x_min, self.x_max, self.y_min, self.y_max)


# Bounds for the lat/lon coordinate system (x = longitude, y = latitude).
# Treat as read-only; the codec only ever narrows copies of it.
LATLON_BOUNDS = Bounds(x_min=-180.0, x_max=180.0, y_min=-90.0, y_max=90.0)


def _wrap_into(value: float, low: float, high: float, period: float) -> float:
    """Shift value by whole periods until it lies within [low, high]."""
    if period <= 0.0:
        return value
    if value > high:
        value -= math.ceil((value - high) / period) * period
    elif value < low:
        value += math.ceil((low - value) / period) * period
    return value


def spherical_rectify(position: Position, bounds: Bounds) -> Position:
    """Fold a position back into bounds treated as a sphere, in place.

    The y axis behaves like latitude: travelling past y_max (or y_min) comes
    back down on the other side of the pole, so y is reflected about the
    edge and x moves by half its range. The x axis behaves like longitude
    and simply wraps around.

    Args:
        position: Position to rectify. Modified in place.
        bounds: Domain to fold into, typically LATLON_BOUNDS.

    Returns:
        The same position object, for chaining.
    """
    x_range = bounds.x_range()
    y_range = bounds.y_range()

    # A full trip over both poles is two y extents.
    position.y = _wrap_into(
        position.y, bounds.y_min - y_range, bounds.y_max + y_range, 2.0 * y_range
    )

    if position.y > bounds.y_max:
        position.y = 2.0 * bounds.y_max - position.y
        position.x += x_range / 2.0
    elif position.y < bounds.y_min:
        position.y = 2.0 * bounds.y_min - position.y
        position.x += x_range / 2.0

    position.x = _wrap_into(position.x, bounds.x_min, bounds.x_max, x_range)
    return position

"""Plane navigation for ships and islands.

Positions are points on a flat plane measured in nautical miles. Headings
follow the compass convention: 0 degrees points along +y (north) and angles
increase clockwise, so 90 degrees points along +x (east).

All functions are pure; callers are responsible for guarding degenerate
inputs (e.g. asking for the bearing between identical points).
"""

import math
from dataclasses import dataclass

from .constants import ARRIVAL_TOLERANCE, TICK_HOURS


@dataclass(frozen=True)
class Point:
    """Immutable position on the plane."""

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


def normalize_heading(heading: float) -> float:
    """Wrap a heading in degrees into [0, 360)."""
    result = heading % 360.0
    # -1e-14 % 360.0 rounds to exactly 360.0
    if result >= 360.0:
        result = 0.0
    return result


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def bearing(origin: Point, target: Point) -> float:
    """Compass bearing from origin to target.

    Args:
        origin: Point the bearing is taken from
        target: Point the bearing points at

    Returns:
        Heading in degrees, [0, 360). Returns 0.0 when the points coincide;
        that value carries no meaning and callers should not rely on it.

    Examples:
        >>> bearing(Point(0, 0), Point(0, 5))
        0.0
        >>> bearing(Point(10, 0), Point(0, 0))
        270.0
    """
    dx = target.x - origin.x
    dy = target.y - origin.y
    if dx == 0.0 and dy == 0.0:
        return 0.0
    return normalize_heading(math.degrees(math.atan2(dx, dy)))


def project(position: Point, heading: float, speed: float, dt: float = TICK_HOURS) -> Point:
    """Position reached after travelling at speed along heading for dt hours."""
    travelled = speed * dt
    radians = math.radians(heading)
    return Point(
        position.x + travelled * math.sin(radians),
        position.y + travelled * math.cos(radians),
    )


def has_arrived(
    position: Point, destination: Point, speed: float, dt: float = TICK_HOURS
) -> bool:
    """Whether one more tick at speed reaches the destination.

    A ship at zero speed only counts as arrived if it is already exactly at
    the destination.
    """
    if speed <= 0.0:
        return position == destination
    return distance(position, destination) <= speed * dt + ARRIVAL_TOLERANCE

"""Utility functions and constants for the ship simulation."""

from .constants import (
    ARRIVAL_TOLERANCE,
    DEFAULT_DOCK_RADIUS,
    FUEL_EPSILON,
    SHIP_TYPE_STATS,
    TICK_HOURS,
    UNLIMITED,
)
from .navigation import Point, bearing, distance, has_arrived, normalize_heading, project

__all__ = [
    "ARRIVAL_TOLERANCE",
    "DEFAULT_DOCK_RADIUS",
    "FUEL_EPSILON",
    "SHIP_TYPE_STATS",
    "TICK_HOURS",
    "UNLIMITED",
    "Point",
    "bearing",
    "distance",
    "has_arrived",
    "normalize_heading",
    "project",
]

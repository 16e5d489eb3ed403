"""Simulation engine components."""

from .observer import WorldObserver
from .tick_executor import TickExecutor, TickResults
from .world import World
from .world_setup import create_default_world

__all__ = [
    "WorldObserver",
    "TickExecutor",
    "TickResults",
    "World",
    "create_default_world",
]

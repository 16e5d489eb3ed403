"""Observer protocol for things that watch the world (views, loggers)."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .world import World


class WorldObserver(Protocol):
    """Receives a notification whenever the world changes.

    The notification carries no description of the change; observers read
    what they need from the world through its read-only accessors. They must
    not mutate entities while being notified.
    """

    def on_world_changed(self, world: "World") -> None:
        ...

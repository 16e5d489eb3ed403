"""Base data model shared by islands and ships."""

from dataclasses import dataclass

from ..utils.navigation import Point
from .errors import DomainError


@dataclass(eq=False)
class Entity:
    """Something with a name and a position in the world.

    Entities are owned by the World and compared by identity. Other holders
    (views, attackers) refer to them by name and look them up again through
    the World when they need them.
    """

    name: str  # Unique, case-sensitive
    position: Point

    def __post_init__(self):
        """Validate entity data after initialization."""
        if not self.name:
            raise DomainError("Name cannot be empty!")

    def is_movable(self) -> bool:
        return False

    def describe(self) -> str:
        raise NotImplementedError

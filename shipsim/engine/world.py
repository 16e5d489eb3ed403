"""World: the single owner of every island and ship.

Everything else (views, attackers, the controller) refers to entities by
name and looks them up here, so a ship that sinks and is removed can never
be reached through a stale reference.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models.entity import Entity
from ..models.errors import DomainError
from ..models.events import ShipEvent
from ..models.island import Island
from ..models.ship import Ship
from .observer import WorldObserver
from .tick_executor import TickExecutor, TickResults

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class World:
    """Simulation state container.

    Holds the current time, the name -> entity mapping (insertion ordered,
    which is also the order ships are advanced in), and the attached
    observers (insertion order is notification order).
    """

    time: int = 0
    entities: dict[str, Entity] = field(default_factory=dict)
    observers: list[WorldObserver] = field(default_factory=list)
    last_events: list[ShipEvent] = field(default_factory=list)  # Events of the latest tick
    executor: TickExecutor = field(default_factory=TickExecutor)

    def __post_init__(self):
        """Validate world data after initialization."""
        if self.time < 0:
            raise ValueError(f"Invalid time: {self.time} (must be >= 0)")

    # =========================================================================
    # LOOKUP
    # =========================================================================

    @property
    def ships(self) -> list[Ship]:
        return [entity for entity in self.entities.values() if isinstance(entity, Ship)]

    @property
    def islands(self) -> list[Island]:
        return [entity for entity in self.entities.values() if isinstance(entity, Island)]

    def is_name_in_use(self, name: str) -> bool:
        return name in self.entities

    def is_ship_present(self, name: str) -> bool:
        return isinstance(self.entities.get(name), Ship)

    def get_entity(self, name: str) -> Entity:
        entity = self.entities.get(name)
        if entity is None:
            raise DomainError("Object not found!")
        return entity

    def find_ship(self, name: str) -> Optional[Ship]:
        """Resolve a ship name, or None if no such ship exists (any more)."""
        entity = self.entities.get(name)
        return entity if isinstance(entity, Ship) else None

    def get_ship(self, name: str) -> Ship:
        ship = self.find_ship(name)
        if ship is None:
            raise DomainError("Ship not found!")
        return ship

    def get_island(self, name: str) -> Island:
        entity = self.entities.get(name)
        if not isinstance(entity, Island):
            raise DomainError("Island not found!")
        return entity

    # =========================================================================
    # STRUCTURAL CHANGES
    # =========================================================================

    def add_island(self, island: Island) -> None:
        self._add(island)

    def add_ship(self, ship: Ship) -> None:
        self._add(ship)

    def _add(self, entity: Entity) -> None:
        if self.is_name_in_use(entity.name):
            raise DomainError("Name is already in use!")
        self.entities[entity.name] = entity
        logger.debug("Added %s", entity.name)
        self.notify()

    def remove_ship(self, name: str) -> Ship:
        """Take a ship out of the world and notify observers."""
        ship = self.get_ship(name)
        del self.entities[name]
        logger.debug("Removed %s", name)
        self.notify()
        return ship

    def restore_ship(self, ship: Ship) -> Ship:
        """Insert a ship, or overwrite the live ship of the same name in place.

        Returns:
            The ship object now held by the world
        """
        existing = self.entities.get(ship.name)
        if existing is None:
            self.add_ship(ship)
            return ship
        if not isinstance(existing, Ship):
            raise DomainError("Name is already in use!")
        existing.copy_state_from(ship)
        self.notify()
        return existing

    def restore_island(self, island: Island) -> Island:
        """Insert an island, or overwrite the same-named island in place."""
        existing = self.entities.get(island.name)
        if existing is None:
            self.add_island(island)
            return island
        if not isinstance(existing, Island):
            raise DomainError("Name is already in use!")
        vars(existing).update(vars(island))
        self.notify()
        return existing

    # =========================================================================
    # OBSERVERS
    # =========================================================================

    def attach(self, observer: WorldObserver) -> None:
        """Attach an observer and bring it up to date right away."""
        if observer in self.observers:
            raise DomainError("Observer is already attached!")
        self.observers.append(observer)
        observer.on_world_changed(self)

    def detach(self, observer: WorldObserver) -> None:
        if observer not in self.observers:
            raise DomainError("Observer is not attached!")
        self.observers.remove(observer)

    def notify(self) -> None:
        for observer in list(self.observers):
            observer.on_world_changed(self)

    # =========================================================================
    # TIME
    # =========================================================================

    def advance_tick(self) -> TickResults:
        """Advance every ship by one tick and notify observers."""
        return self.executor.execute_tick(self)

    def describe(self) -> str:
        """Descriptions of every island and ship, in name order."""
        return "\n".join(self.entities[name].describe() for name in sorted(self.entities))

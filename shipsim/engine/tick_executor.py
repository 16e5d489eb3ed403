"""Per-tick world update.

One tick runs these phases in order:
1. Snapshot: record every ship's position before anything moves
2. Ships: advance each afloat ship once, in insertion order
3. Removal: take sunk ships out of the world
4. Notify: tell every observer once that the world changed

Range checks during phase 2 use the snapshot from phase 1, so no ship sees
another ship's already-advanced position. Damage takes effect immediately,
so a ship sunk earlier in the tick does not act later in it.

Architecture:
Each phase is an independent method so it can be tested or reordered on its
own; execute_tick() composes them.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models.events import EventKind, ShipEvent, TickContext
from ..utils.navigation import Point

if TYPE_CHECKING:
    from .world import World

logger = logging.getLogger(__name__)


@dataclass
class TickResults:
    """Everything that happened during one tick.

    Attributes:
        time: World time after the tick
        events: Ship events in the order they happened
        sunk: Names of ships removed from the world this tick
    """

    time: int
    events: list[ShipEvent] = field(default_factory=list)
    sunk: list[str] = field(default_factory=list)

    def events_of_kind(self, kind: EventKind) -> list[ShipEvent]:
        return [event for event in self.events if event.kind is kind]


class TickExecutor:
    """Runs the tick phases in the correct order."""

    # =========================================================================
    # INDEPENDENT PHASE METHODS
    # =========================================================================

    def execute_phase_snapshot(self, world: "World") -> dict[str, Point]:
        """Phase 1: record pre-tick positions of all ships."""
        return {ship.name: ship.position for ship in world.ships}

    def execute_phase_ships(self, world: "World", ctx: TickContext) -> None:
        """Phase 2: advance every ship that is still afloat.

        The ship list is copied first; ships are only removed in phase 3.
        """
        for ship in list(world.ships):
            if ship.is_afloat():
                ship.update(ctx)

    def execute_phase_removal(self, world: "World") -> list[str]:
        """Phase 3: remove sunk ships. Each removal notifies observers.

        Returns:
            Names of the removed ships
        """
        sunk = [ship.name for ship in world.ships if not ship.is_afloat()]
        for name in sunk:
            world.remove_ship(name)
        return sunk

    def execute_phase_notify(self, world: "World") -> None:
        """Phase 4: notify observers once."""
        world.notify()

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def execute_tick(self, world: "World") -> TickResults:
        """Advance the world by one tick.

        Args:
            world: World to advance

        Returns:
            TickResults for the tick just executed
        """
        world.time += 1
        positions = self.execute_phase_snapshot(world)
        ctx = TickContext(tick=world.time, world=world, positions=positions)

        self.execute_phase_ships(world, ctx)
        world.last_events = list(ctx.events)
        sunk = self.execute_phase_removal(world)

        logger.debug("Tick %d: %d events, %d ships sunk", world.time, len(ctx.events), len(sunk))

        self.execute_phase_notify(world)
        return TickResults(time=world.time, events=ctx.events, sunk=sunk)

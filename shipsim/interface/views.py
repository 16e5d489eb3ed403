"""Text views of the world.

Each view is a WorldObserver: on every notification it copies what it needs
out of the world, and draw() renders that copy. A view never keeps entity
objects, only names and values, so ships that sink and are removed simply
drop out of the next picture.

Rendering uses two characters per cell:
- '. ' = empty water
- 'Aj' = first two letters of the object's name
- '* ' = more than one object in the cell
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..models.errors import DomainError
from ..utils.constants import (
    BRIDGE_VIEW_COLUMNS,
    BRIDGE_VIEW_MIN_RANGE,
    BRIDGE_VIEW_RANGE,
    BRIDGE_VIEW_STEP,
    MAP_DEFAULT_ORIGIN,
    MAP_DEFAULT_SCALE,
    MAP_DEFAULT_SIZE,
    MAP_MAX_SIZE,
    MAP_MIN_SIZE,
)
from ..utils.navigation import Point, bearing, distance

if TYPE_CHECKING:
    from ..engine.world import World

EMPTY_CELL = ". "
CROWDED_CELL = "* "
WATER_CELL = "w-"


def _cell_symbol(names: list[str]) -> str:
    if not names:
        return EMPTY_CELL
    if len(names) > 1:
        return CROWDED_CELL
    return names[0][:2].ljust(2)


def _snapshot_positions(world: "World") -> dict[str, Point]:
    return {name: world.entities[name].position for name in sorted(world.entities)}


class MapView:
    """Top-down grid of the world around a movable origin."""

    def __init__(self):
        self.positions: dict[str, Point] = {}
        self.set_defaults()

    def set_defaults(self) -> None:
        self.size = MAP_DEFAULT_SIZE
        self.scale = MAP_DEFAULT_SCALE
        self.origin = Point(*MAP_DEFAULT_ORIGIN)

    def set_size(self, size: int) -> None:
        if size > MAP_MAX_SIZE:
            raise DomainError("New map size is too big!")
        if size <= MAP_MIN_SIZE:
            raise DomainError("New map size is too small!")
        self.size = size

    def set_scale(self, scale: float) -> None:
        if scale <= 0.0:
            raise DomainError("New map scale must be positive!")
        self.scale = scale

    def set_origin(self, origin: Point) -> None:
        self.origin = origin

    def on_world_changed(self, world: "World") -> None:
        self.positions = _snapshot_positions(world)

    def _cell_of(self, position: Point) -> Optional[tuple[int, int]]:
        """Grid (column, row) of a position, or None if it is off the map."""
        col = math.floor((position.x - self.origin.x) / self.scale)
        row = math.floor((position.y - self.origin.y) / self.scale)
        if 0 <= col < self.size and 0 <= row < self.size:
            return col, row
        return None

    def draw(self) -> str:
        """Render the map.

        Returns:
            Header line, optional list of off-map objects, the grid (north
            up, y labels every third row) and the x axis labels
        """
        grid: list[list[list[str]]] = [[[] for _ in range(self.size)] for _ in range(self.size)]
        outside = []
        for name, position in self.positions.items():
            cell = self._cell_of(position)
            if cell is None:
                outside.append(name)
            else:
                col, row = cell
                grid[row][col].append(name)

        lines = [f"Display size: {self.size}, scale: {self.scale:g}, origin: {self.origin}"]
        if outside:
            lines.append(f"{', '.join(outside)} outside the map")

        for row in range(self.size - 1, -1, -1):
            if row % 3 == 0:
                label = f"{self.origin.y + row * self.scale:4.0f} "
            else:
                label = "     "
            lines.append(label + "".join(_cell_symbol(names) for names in grid[row]))

        axis = "".join(
            f"{self.origin.x + col * self.scale:<6.0f}" for col in range(0, self.size, 3)
        )
        lines.append("     " + axis.rstrip())
        return "\n".join(lines)


@dataclass
class _SailingRow:
    name: str
    fuel: float
    course: float
    speed: float


class SailingView:
    """Table of fuel, course and speed for every ship."""

    def __init__(self):
        self.rows: list[_SailingRow] = []

    def on_world_changed(self, world: "World") -> None:
        self.rows = [
            _SailingRow(ship.name, ship.fuel, ship.heading, ship.speed)
            for ship in sorted(world.ships, key=lambda s: s.name)
        ]

    def draw(self) -> str:
        lines = [
            "----- Sailing Data -----",
            f"{'Ship':>10}{'Fuel':>10}{'Course':>10}{'Speed':>10}",
        ]
        for row in self.rows:
            lines.append(f"{row.name:>10}{row.fuel:>10.1f}{row.course:>10.1f}{row.speed:>10.1f}")
        return "\n".join(lines)


class BridgeView:
    """What one ship sees ahead: objects within range across its bow.

    The single row spans -90 to +90 degrees relative to the ship's heading.
    Once the ship has sunk the view shows only water at its last position.
    """

    def __init__(self, ship_name: str):
        self.ship_name = ship_name
        self.position: Optional[Point] = None
        self.heading = 0.0
        self.sunk = False
        self.others: dict[str, Point] = {}

    def on_world_changed(self, world: "World") -> None:
        ship = world.find_ship(self.ship_name)
        if ship is None or not ship.is_afloat():
            # Keep the last known position
            self.sunk = True
            self.others = {}
            return
        # A new ship may have been created under the same name
        self.sunk = False
        self.position = ship.position
        self.heading = ship.heading
        self.others = {
            name: point
            for name, point in _snapshot_positions(world).items()
            if name != self.ship_name
        }

    def _column_of(self, point: Point) -> Optional[int]:
        gap = distance(self.position, point)
        if gap < BRIDGE_VIEW_MIN_RANGE or gap > BRIDGE_VIEW_RANGE:
            return None
        relative = bearing(self.position, point) - self.heading
        if relative >= 180.0:
            relative -= 360.0
        elif relative < -180.0:
            relative += 360.0
        half_arc = (BRIDGE_VIEW_COLUMNS - 1) * BRIDGE_VIEW_STEP / 2
        if not -half_arc <= relative <= half_arc:
            return None
        return min(int((relative + half_arc) // BRIDGE_VIEW_STEP), BRIDGE_VIEW_COLUMNS - 1)

    def draw(self) -> str:
        if self.position is None:
            return f"Bridge view from {self.ship_name}: no data"

        if self.sunk:
            header = f"Bridge view from {self.ship_name} sunk at {self.position}"
            cells = WATER_CELL * BRIDGE_VIEW_COLUMNS
        else:
            header = (
                f"Bridge view from {self.ship_name} position {self.position} "
                f"heading {self.heading:.2f}"
            )
            columns: list[list[str]] = [[] for _ in range(BRIDGE_VIEW_COLUMNS)]
            for name, point in self.others.items():
                col = self._column_of(point)
                if col is not None:
                    columns[col].append(name)
            cells = "".join(_cell_symbol(names) for names in columns)

        half_arc = int((BRIDGE_VIEW_COLUMNS - 1) * BRIDGE_VIEW_STEP / 2)
        labels = "".join(f"{angle:<6d}" for angle in range(-half_arc, half_arc + 1, 30))
        return "\n".join([header, "     " + cells, "     " + labels.rstrip()])

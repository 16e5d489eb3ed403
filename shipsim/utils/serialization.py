"""World state serialization to/from JSON.

This module saves a world to a JSON file and restores it, either into a
fresh world or over a live one. Restoring over a live world overwrites
same-named islands and ships in place, so views and other holders of those
objects keep working.

Unlimited island fuel and demand (math.inf) are written as null.
"""

import json
import math
from pathlib import Path
from typing import Any, Callable, Optional

from ..engine.world import World
from ..models.capabilities import CargoState, CruisePhase
from ..models.errors import DomainError
from ..models.island import Island
from ..models.ship import Ship, ShipState
from ..models.ship_factory import create_ship
from .constants import DEFAULT_DOCK_RADIUS
from .navigation import Point

IslandLookup = Callable[[str], Island]


def save_world(world: World, filepath: str) -> None:
    """Save world state to a JSON file.

    Args:
        world: World to save
        filepath: Destination path (parent directories are created)
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(serialize_world(world), f, indent=2)


def load_world(filepath: str) -> World:
    """Load a saved world into a new World.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
    """
    world = World()
    load_world_into(world, filepath)
    return world


def load_world_into(world: World, filepath: str) -> None:
    """Restore a saved world over an existing one.

    Islands are restored first so ship records can refer to them by name.
    Entities absent from the file are left untouched. If any record is bad
    nothing in the world changes.

    Args:
        world: World to restore into
        filepath: Path to saved world file

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
    """
    with open(filepath) as f:
        data = json.load(f)
    restore_world(world, data)


def serialize_world(world: World) -> dict[str, Any]:
    """Convert World to a JSON-compatible dictionary."""
    return {
        "time": world.time,
        "islands": [serialize_island(island) for island in world.islands],
        "ships": [serialize_ship(ship) for ship in world.ships],
    }


def restore_world(world: World, data: dict[str, Any]) -> None:
    """Apply a serialized world dictionary to world.

    Every record is read and checked before the world is touched, so a
    rejected restore leaves the world exactly as it was.

    Raises:
        ValueError: If a record is malformed
        DomainError: If a record names an unknown island or ship type, or
            reuses a name held by the other kind of object
    """
    try:
        time = int(data["time"])
        island_records = list(data["islands"])
        ship_records = list(data["ships"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed world record: {e}") from e
    if time < 0:
        raise ValueError(f"Invalid time: {time} (must be >= 0)")

    islands = [deserialize_island(record) for record in island_records]

    # Ship records resolve to the island objects the world will hold afterwards:
    # a live island keeps its identity, a new one is the record's object
    resulting_islands = {island.name: island for island in world.islands}
    for island in islands:
        if world.is_ship_present(island.name):
            raise DomainError("Name is already in use!")
        resulting_islands.setdefault(island.name, island)

    def find_island(name: str) -> Island:
        island = resulting_islands.get(name)
        if island is None:
            raise DomainError("Island not found!")
        return island

    ships = [deserialize_ship(record, find_island) for record in ship_records]
    for ship in ships:
        if ship.name in resulting_islands:
            raise DomainError("Name is already in use!")

    for island in islands:
        world.restore_island(island)
    for ship in ships:
        world.restore_ship(ship)
    world.time = time


def serialize_island(island: Island) -> dict[str, Any]:
    """Convert Island to dictionary."""
    return {
        "name": island.name,
        "x": island.position.x,
        "y": island.position.y,
        "fuel": _encode_amount(island.fuel),
        "dock_radius": island.dock_radius,
        "fuel_demand": _encode_amount(island.fuel_demand),
    }


def deserialize_island(data: dict[str, Any]) -> Island:
    """Reconstruct Island from dictionary.

    Raises:
        ValueError: If the record is malformed
    """
    try:
        return Island(
            name=str(data["name"]),
            position=_read_point(data),
            fuel=_decode_amount(data.get("fuel")),
            dock_radius=float(data.get("dock_radius", DEFAULT_DOCK_RADIUS)),
            fuel_demand=_decode_amount(data.get("fuel_demand")),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Malformed island record: {e}") from e


def serialize_ship(ship: Ship) -> dict[str, Any]:
    """Convert Ship, including its capability sub-state, to dictionary."""
    record: dict[str, Any] = {
        "type": ship.type_name,
        "name": ship.name,
        "x": ship.position.x,
        "y": ship.position.y,
        "fuel": ship.fuel,
        "resistance": ship.resistance,
        "state": ship.state.value,
        "heading": ship.heading,
        "speed": ship.speed,
        "destination_point": _encode_point(ship.destination_point),
        "destination_island": _island_name(ship.destination_island),
        "docked_at": _island_name(ship.docked_at),
    }
    if ship.cargo is not None:
        record["cargo"] = {
            "amount": ship.cargo.cargo,
            "load_island": _island_name(ship.cargo.load_island),
            "unload_island": _island_name(ship.cargo.unload_island),
            "state": ship.cargo.state.value,
        }
    if ship.weapons is not None:
        record["weapons"] = {"target": ship.weapons.target_name}
    if ship.itinerary is not None:
        record["cruise"] = {
            "origin": _island_name(ship.itinerary.origin),
            "stop": _island_name(ship.itinerary.stop),
            "speed": ship.itinerary.speed,
            "visited": list(ship.itinerary.visited),
            "phase": ship.itinerary.phase.value,
        }
    return record


def deserialize_ship(data: dict[str, Any], find_island: IslandLookup) -> Ship:
    """Reconstruct Ship from dictionary.

    Args:
        data: Dictionary produced by serialize_ship
        find_island: Resolves island names (e.g. World.get_island)

    Returns:
        New Ship carrying the saved state

    Raises:
        DomainError: If the ship type or a referenced island is unknown
        ValueError: If the record is malformed or a field holds an invalid value
    """
    try:
        name = str(data["name"])
        type_name = str(data["type"])
        position = _read_point(data)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Malformed ship record: {e}") from e

    ship = create_ship(name, type_name, position)
    try:
        _read_ship_state(ship, data, find_island)
    except DomainError:
        raise
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Malformed ship record for {name}: {e}") from e
    return ship


def _read_ship_state(ship: Ship, data: dict[str, Any], find_island: IslandLookup) -> None:
    ship.fuel = float(data.get("fuel", ship.fuel))
    ship.resistance = int(data.get("resistance", ship.resistance))
    ship.state = ShipState(data.get("state", ShipState.STOPPED.value))
    ship.heading = float(data.get("heading", 0.0))
    ship.speed = float(data.get("speed", 0.0))
    ship.destination_point = _decode_point(data.get("destination_point"))
    ship.destination_island = _resolve(data.get("destination_island"), find_island)
    ship.docked_at = _resolve(data.get("docked_at"), find_island)

    if not 0.0 <= ship.fuel <= ship.fuel_capacity:
        raise ValueError(f"Invalid fuel for {ship.name}: {ship.fuel}")

    cargo = data.get("cargo")
    if cargo is not None and ship.cargo is not None:
        ship.cargo.cargo = float(cargo.get("amount", 0.0))
        ship.cargo.load_island = _resolve(cargo.get("load_island"), find_island)
        ship.cargo.unload_island = _resolve(cargo.get("unload_island"), find_island)
        ship.cargo.state = CargoState(cargo.get("state", CargoState.NO_CARGO_DESTINATIONS.value))

    weapons = data.get("weapons")
    if weapons is not None and ship.weapons is not None:
        ship.weapons.target_name = weapons.get("target")

    cruise = data.get("cruise")
    if cruise is not None and ship.itinerary is not None:
        ship.itinerary.origin = _resolve(cruise.get("origin"), find_island)
        ship.itinerary.stop = _resolve(cruise.get("stop"), find_island)
        ship.itinerary.speed = float(cruise.get("speed", 0.0))
        ship.itinerary.visited = list(cruise.get("visited", []))
        ship.itinerary.phase = CruisePhase(cruise.get("phase", CruisePhase.IDLE.value))


def _encode_amount(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


def _decode_amount(value: Optional[float]) -> float:
    return math.inf if value is None else float(value)


def _encode_point(point: Optional[Point]) -> Optional[list[float]]:
    return None if point is None else [point.x, point.y]


def _decode_point(value: Optional[list[float]]) -> Optional[Point]:
    return None if value is None else Point(float(value[0]), float(value[1]))


def _read_point(data: dict[str, Any]) -> Point:
    point = Point(float(data["x"]), float(data["y"]))
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise ValueError(f"Invalid position: {point}")
    return point


def _island_name(island: Optional[Island]) -> Optional[str]:
    return None if island is None else island.name


def _resolve(name: Optional[str], find_island: IslandLookup) -> Optional[Island]:
    if name is None:
        return None
    island = find_island(name)
    if island is None:
        raise DomainError("Island not found!")
    return island

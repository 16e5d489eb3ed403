"""Ship kinds: performance figures and the capabilities each kind carries."""

from dataclasses import dataclass
from typing import Optional

from ..utils.constants import SHIP_TYPE_STATS
from .capabilities import CargoHold, CruiseItinerary, HitResponse, Weapons
from .errors import DomainError


@dataclass(frozen=True)
class ShipSpec:
    """Fixed characteristics of a ship kind.

    A kind carries a capability when its figures for it are present:
    cargo_capacity for a cargo hold, firepower for weapons, cruise for an
    island tour itinerary.
    """

    type_name: str
    fuel_capacity: float  # tons
    max_speed: float  # knots
    fuel_consumption: float  # tons per nm
    resistance: int
    cargo_capacity: Optional[float] = None
    cargo_transfer_rate: float = 0.0
    firepower: Optional[int] = None
    weapon_range: float = 0.0
    hit_response: HitResponse = HitResponse.NONE
    cruise: bool = False

    def __post_init__(self):
        """Validate spec data after initialization."""
        if self.fuel_capacity <= 0:
            raise ValueError(f"Invalid fuel_capacity: {self.fuel_capacity} (must be > 0)")
        if self.max_speed <= 0:
            raise ValueError(f"Invalid max_speed: {self.max_speed} (must be > 0)")
        if self.fuel_consumption <= 0:
            raise ValueError(
                f"Invalid fuel_consumption: {self.fuel_consumption} (must be > 0)"
            )
        if self.cargo_capacity is not None and self.cargo_transfer_rate <= 0:
            raise ValueError("Cargo-capable ships need a positive cargo_transfer_rate")

    def make_cargo_hold(self) -> Optional[CargoHold]:
        if self.cargo_capacity is None:
            return None
        return CargoHold(capacity=self.cargo_capacity, transfer_rate=self.cargo_transfer_rate)

    def make_weapons(self) -> Optional[Weapons]:
        if self.firepower is None:
            return None
        return Weapons(
            firepower=self.firepower,
            range=self.weapon_range,
            hit_response=self.hit_response,
        )

    def make_itinerary(self) -> Optional[CruiseItinerary]:
        if not self.cruise:
            return None
        return CruiseItinerary()


def _build_specs() -> dict[str, ShipSpec]:
    specs = {}
    for type_name, stats in SHIP_TYPE_STATS.items():
        stats = dict(stats)
        if "hit_response" in stats:
            stats["hit_response"] = HitResponse(stats["hit_response"])
        specs[type_name] = ShipSpec(type_name=type_name, **stats)
    return specs


SHIP_TYPES: dict[str, ShipSpec] = _build_specs()


def get_ship_spec(type_name: str) -> ShipSpec:
    """Look up a ship kind by its type name (case-sensitive).

    Raises:
        DomainError: If no such kind exists
    """
    spec = SHIP_TYPES.get(type_name)
    if spec is None:
        raise DomainError("Trying to create ship of unknown type!")
    return spec

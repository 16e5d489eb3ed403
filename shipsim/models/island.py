"""Island data model: a fixed fuel port."""

import math
from dataclasses import dataclass

from ..utils.constants import DEFAULT_DOCK_RADIUS, UNLIMITED
from .entity import Entity
from .errors import DomainError


@dataclass(eq=False)
class Island(Entity):
    """An immobile port where ships dock, refuel and trade fuel cargo.

    Islands supply fuel to docked ships and tankers, and accept fuel unloaded
    by tankers up to their remaining demand. Either amount may be unlimited
    (math.inf).
    """

    fuel: float = UNLIMITED  # Tons available to ships
    dock_radius: float = DEFAULT_DOCK_RADIUS  # nm
    fuel_demand: float = UNLIMITED  # Tons the island will still accept

    def __post_init__(self):
        """Validate island data after initialization."""
        super().__post_init__()
        if self.fuel < 0:
            raise DomainError(f"Invalid fuel: {self.fuel} (must be >= 0)")
        if self.dock_radius < 0:
            raise DomainError(f"Invalid dock radius: {self.dock_radius} (must be >= 0)")
        if self.fuel_demand < 0:
            raise DomainError(f"Invalid fuel demand: {self.fuel_demand} (must be >= 0)")

    def has_fuel(self) -> bool:
        return self.fuel > 0

    def provide_fuel(self, request: float) -> float:
        """Hand over up to request tons of fuel.

        Args:
            request: Tons asked for

        Returns:
            Tons actually supplied (never more than the island holds)
        """
        granted = min(max(request, 0.0), self.fuel)
        if not math.isinf(self.fuel):
            self.fuel -= granted
        return granted

    def accept_fuel(self, amount: float) -> float:
        """Take in up to amount tons of fuel, bounded by remaining demand.

        Returns:
            Tons actually accepted
        """
        accepted = min(max(amount, 0.0), self.fuel_demand)
        if not math.isinf(self.fuel_demand):
            self.fuel_demand -= accepted
        if not math.isinf(self.fuel):
            self.fuel += accepted
        return accepted

    def describe(self) -> str:
        fuel = "unlimited" if math.isinf(self.fuel) else f"{self.fuel:.2f} tons"
        return f"Island {self.name} at position {self.position}\nFuel available: {fuel}"

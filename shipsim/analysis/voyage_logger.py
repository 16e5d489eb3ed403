"""Voyage logger for after-the-fact review of a session.

Attached to the world as an observer, it appends one JSON line per tick with
every afloat ship's position, fuel and state plus the events of that tick.
Notifications that do not advance time (ships created, views opened) are
not logged.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..engine.world import World


class VoyageLogger:
    """Logs per-tick ship state to a JSONL file."""

    def __init__(self, output_dir: str = "logs", filename: Optional[str] = None):
        """Initialize voyage logger.

        Args:
            output_dir: Directory to write the log file to
            filename: Log file name (default: voyage_<timestamp>.jsonl)
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        if filename is None:
            filename = f"voyage_{datetime.now().strftime('%Y%m%d_%H%M%S')}.jsonl"
        self.path = self.output_dir / filename
        self.log_file = open(self.path, "a")
        self.last_logged_time: Optional[int] = None

    def on_world_changed(self, world: "World") -> None:
        if world.time == 0 or world.time == self.last_logged_time:
            return
        self.log_tick(world)

    def log_tick(self, world: "World") -> None:
        """Write the entry for the world's current time."""
        log_entry = {
            "time": world.time,
            "timestamp": datetime.now().isoformat(),
            "ships": [self._ship_record(ship) for ship in world.ships if ship.is_afloat()],
            "events": [
                {"ship": event.ship, "kind": event.kind.value, "message": event.message}
                for event in world.last_events
            ],
        }
        self.log_file.write(json.dumps(log_entry) + "\n")
        self.log_file.flush()
        self.last_logged_time = world.time

    @staticmethod
    def _ship_record(ship) -> dict[str, Any]:
        return {
            "name": ship.name,
            "type": ship.type_name,
            "x": round(ship.position.x, 4),
            "y": round(ship.position.y, 4),
            "fuel": round(ship.fuel, 4),
            "speed": ship.speed,
            "heading": round(ship.heading, 4),
            "state": ship.state.value,
        }

    def close(self) -> None:
        """Close the log file."""
        if not self.log_file.closed:
            self.log_file.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

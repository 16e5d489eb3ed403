"""Operator controller: reads commands, runs them, manages the views.

The controller is the only place that turns text into world changes. Domain
and usage errors are reported to the operator and the session continues;
anything else is logged and ends the session.
"""

import logging
from typing import Callable, Optional, Union

from ..engine.world import World
from ..models.errors import DomainError
from ..models.ship import Ship
from ..models.ship_factory import create_ship
from ..utils.constants import MIN_SHIP_NAME_LENGTH
from ..utils.navigation import Point
from ..utils.serialization import load_world_into, save_world
from . import commands as cmd
from .command_parser import CommandParser, UsageError
from .views import BridgeView, MapView, SailingView

logger = logging.getLogger(__name__)

View = Union[MapView, SailingView, BridgeView]


class Controller:
    """Dispatches parsed commands to the world and the open views."""

    def __init__(self, world: World, write: Callable[[str], None] = print):
        """Initialize controller.

        Args:
            world: World the commands act on
            write: Output sink for everything shown to the operator
        """
        self.world = world
        self.write = write
        self.parser = CommandParser()
        self.running = True

        self.map_view: Optional[MapView] = None
        self.sailing_view: Optional[SailingView] = None
        self.bridge_views: dict[str, BridgeView] = {}
        self.views: list[View] = []  # Drawing order is opening order

        self._handlers: dict[str, Callable] = {
            "course": self._course,
            "position": self._position,
            "destination": self._destination,
            "load_at": self._load_at,
            "unload_at": self._unload_at,
            "dock_at": self._dock_at,
            "attack": self._attack,
            "refuel": self._refuel,
            "stop": self._stop,
            "stop_attack": self._stop_attack,
            "go": self._go,
            "status": self._status,
            "show": self._show,
            "create": self._create,
            "save": self._save,
            "load": self._load,
            "quit": self._quit,
            "default": self._default,
            "size": self._size,
            "zoom": self._zoom,
            "pan": self._pan,
            "open_map_view": self._open_map_view,
            "close_map_view": self._close_map_view,
            "open_sailing_view": self._open_sailing_view,
            "close_sailing_view": self._close_sailing_view,
            "open_bridge_view": self._open_bridge_view,
            "close_bridge_view": self._close_bridge_view,
        }

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def prompt(self) -> str:
        return f"\nTime {self.world.time}: Enter command: "

    def execute_line(self, line: str) -> bool:
        """Parse and run one input line.

        "quit" is recognized before ship names, so a ship cannot shadow it.

        Returns:
            False once the session should end
        """
        try:
            command = self.parser.parse(line, self._is_ship_name)
            if command is not None:
                self.execute(command)
        except (DomainError, UsageError) as e:
            self.write(str(e))
        return self.running

    def execute(self, command: cmd.Command) -> None:
        """Run an already-parsed command.

        Raises:
            DomainError: If the world rejects the command
        """
        logger.debug("Executing %s", command)
        self._handlers[command.kind](command)

    def run(self, read: Callable[[str], str] = input) -> None:
        """Read-eval loop until quit or end of input."""
        while self.running:
            try:
                line = read(self.prompt())
            except EOFError:
                self._quit(cmd.QuitCommand())
                break
            try:
                self.execute_line(line)
            except Exception:
                logger.exception("Unexpected error, ending session")
                self._quit(cmd.QuitCommand())
                break

    def _is_ship_name(self, word: str) -> bool:
        return word != "quit" and self.world.is_ship_present(word)

    # =========================================================================
    # SHIP COMMANDS
    # =========================================================================

    def _ship(self, command: cmd.ShipCommand) -> Ship:
        return self.world.get_ship(command.ship)

    @staticmethod
    def _check_heading(heading: float) -> None:
        if not 0.0 <= heading < 360.0:
            raise DomainError("Invalid heading entered!")

    @staticmethod
    def _check_speed(speed: float) -> None:
        if speed < 0.0:
            raise DomainError("Negative speed entered!")

    def _course(self, command: cmd.CourseCommand) -> None:
        ship = self._ship(command)
        self._check_heading(command.heading)
        self._check_speed(command.speed)
        ship.set_course_and_speed(command.heading, command.speed)

    def _position(self, command: cmd.PositionCommand) -> None:
        ship = self._ship(command)
        self._check_speed(command.speed)
        ship.set_destination_position_and_speed(Point(command.x, command.y), command.speed)

    def _destination(self, command: cmd.DestinationCommand) -> None:
        ship = self._ship(command)
        island = self.world.get_island(command.island)
        self._check_speed(command.speed)
        ship.set_destination_island_and_speed(island, command.speed)

    def _load_at(self, command: cmd.LoadAtCommand) -> None:
        self._ship(command).set_load_destination(self.world.get_island(command.island))

    def _unload_at(self, command: cmd.UnloadAtCommand) -> None:
        self._ship(command).set_unload_destination(self.world.get_island(command.island))

    def _dock_at(self, command: cmd.DockAtCommand) -> None:
        self._ship(command).dock(self.world.get_island(command.island))

    def _attack(self, command: cmd.AttackCommand) -> None:
        ship = self._ship(command)
        ship.attack(self.world.get_ship(command.target))

    def _refuel(self, command: cmd.RefuelCommand) -> None:
        self._ship(command).refuel()

    def _stop(self, command: cmd.StopCommand) -> None:
        self._ship(command).stop()

    def _stop_attack(self, command: cmd.StopAttackCommand) -> None:
        self._ship(command).stop_attack()

    # =========================================================================
    # WORLD COMMANDS
    # =========================================================================

    def _go(self, command: cmd.GoCommand) -> None:
        results = self.world.advance_tick()
        for event in results.events:
            self.write(str(event))

    def _status(self, command: cmd.StatusCommand) -> None:
        self.write(self.world.describe())

    def _show(self, command: cmd.ShowCommand) -> None:
        for view in self.views:
            self.write(view.draw())

    def _create(self, command: cmd.CreateCommand) -> None:
        if len(command.name) < MIN_SHIP_NAME_LENGTH:
            raise DomainError("Name is too short!")
        if self.world.is_name_in_use(command.name):
            raise DomainError("Name is invalid!")
        ship = create_ship(command.name, command.type_name, Point(command.x, command.y))
        self.world.add_ship(ship)

    def _save(self, command: cmd.SaveCommand) -> None:
        try:
            save_world(self.world, command.path)
        except OSError as e:
            self.write(f"Error saving world: {e}")
            return
        self.write(f"World saved to {command.path}")

    def _load(self, command: cmd.LoadCommand) -> None:
        try:
            load_world_into(self.world, command.path)
        except (OSError, ValueError) as e:
            self.write(f"Error loading world: {e}")
            return
        self.write(f"World loaded from {command.path} (time {self.world.time})")

    def _quit(self, command: cmd.QuitCommand) -> None:
        for view in list(self.views):
            self._close(view)
        self.running = False
        self.write("Done")

    # =========================================================================
    # VIEW COMMANDS
    # =========================================================================

    def _open(self, view: View) -> None:
        self.views.append(view)
        self.world.attach(view)

    def _close(self, view: View) -> None:
        self.views.remove(view)
        self.world.detach(view)

    def _require_map(self) -> MapView:
        if self.map_view is None:
            raise DomainError("Map view is not open!")
        return self.map_view

    def _default(self, command: cmd.DefaultCommand) -> None:
        self._require_map().set_defaults()

    def _size(self, command: cmd.SizeCommand) -> None:
        self._require_map().set_size(command.size)

    def _zoom(self, command: cmd.ZoomCommand) -> None:
        self._require_map().set_scale(command.scale)

    def _pan(self, command: cmd.PanCommand) -> None:
        self._require_map().set_origin(Point(command.x, command.y))

    def _open_map_view(self, command: cmd.OpenMapViewCommand) -> None:
        if self.map_view is not None:
            raise DomainError("Map view is already open!")
        self.map_view = MapView()
        self._open(self.map_view)

    def _close_map_view(self, command: cmd.CloseMapViewCommand) -> None:
        self._close(self._require_map())
        self.map_view = None

    def _open_sailing_view(self, command: cmd.OpenSailingViewCommand) -> None:
        if self.sailing_view is not None:
            raise DomainError("Sailing data view is already open!")
        self.sailing_view = SailingView()
        self._open(self.sailing_view)

    def _close_sailing_view(self, command: cmd.CloseSailingViewCommand) -> None:
        if self.sailing_view is None:
            raise DomainError("Sailing data view is not open!")
        self._close(self.sailing_view)
        self.sailing_view = None

    def _open_bridge_view(self, command: cmd.OpenBridgeViewCommand) -> None:
        self.world.get_ship(command.ship)
        if command.ship in self.bridge_views:
            raise DomainError("Bridge view is already open for that ship!")
        view = BridgeView(command.ship)
        self.bridge_views[command.ship] = view
        self._open(view)

    def _close_bridge_view(self, command: cmd.CloseBridgeViewCommand) -> None:
        view = self.bridge_views.pop(command.ship, None)
        if view is None:
            raise DomainError("Bridge view for that ship is not open!")
        self._close(view)

"""Pydantic models for operator commands.

Every command carries a `kind` literal; Command is the discriminated union of
all of them, so a plain dict (e.g. from a script file) validates straight
into the right model through COMMAND_ADAPTER.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# ========== Ship Commands ==========


class ShipCommand(BaseModel):
    """Base for commands addressed to one ship."""

    ship: str = Field(description="Name of the ship receiving the command")

    model_config = ConfigDict(frozen=True)


class CourseCommand(ShipCommand):
    kind: Literal["course"] = "course"
    heading: float = Field(description="Compass heading in degrees")
    speed: float = Field(description="Speed in knots")


class PositionCommand(ShipCommand):
    kind: Literal["position"] = "position"
    x: float
    y: float
    speed: float


class DestinationCommand(ShipCommand):
    kind: Literal["destination"] = "destination"
    island: str
    speed: float


class LoadAtCommand(ShipCommand):
    kind: Literal["load_at"] = "load_at"
    island: str


class UnloadAtCommand(ShipCommand):
    kind: Literal["unload_at"] = "unload_at"
    island: str


class DockAtCommand(ShipCommand):
    kind: Literal["dock_at"] = "dock_at"
    island: str


class AttackCommand(ShipCommand):
    kind: Literal["attack"] = "attack"
    target: str


class RefuelCommand(ShipCommand):
    kind: Literal["refuel"] = "refuel"


class StopCommand(ShipCommand):
    kind: Literal["stop"] = "stop"


class StopAttackCommand(ShipCommand):
    kind: Literal["stop_attack"] = "stop_attack"


# ========== World Commands ==========


class WorldCommand(BaseModel):
    """Base for commands addressed to the world or the views."""

    model_config = ConfigDict(frozen=True)


class GoCommand(WorldCommand):
    kind: Literal["go"] = "go"


class StatusCommand(WorldCommand):
    kind: Literal["status"] = "status"


class ShowCommand(WorldCommand):
    kind: Literal["show"] = "show"


class CreateCommand(WorldCommand):
    kind: Literal["create"] = "create"
    name: str
    type_name: str = Field(description="Ship kind, e.g. Cruiser or Tanker")
    x: float
    y: float


class SaveCommand(WorldCommand):
    kind: Literal["save"] = "save"
    path: str


class LoadCommand(WorldCommand):
    kind: Literal["load"] = "load"
    path: str


class QuitCommand(WorldCommand):
    kind: Literal["quit"] = "quit"


# ========== View Commands ==========


class DefaultCommand(WorldCommand):
    kind: Literal["default"] = "default"


class SizeCommand(WorldCommand):
    kind: Literal["size"] = "size"
    size: int


class ZoomCommand(WorldCommand):
    kind: Literal["zoom"] = "zoom"
    scale: float


class PanCommand(WorldCommand):
    kind: Literal["pan"] = "pan"
    x: float
    y: float


class OpenMapViewCommand(WorldCommand):
    kind: Literal["open_map_view"] = "open_map_view"


class CloseMapViewCommand(WorldCommand):
    kind: Literal["close_map_view"] = "close_map_view"


class OpenSailingViewCommand(WorldCommand):
    kind: Literal["open_sailing_view"] = "open_sailing_view"


class CloseSailingViewCommand(WorldCommand):
    kind: Literal["close_sailing_view"] = "close_sailing_view"


class OpenBridgeViewCommand(WorldCommand):
    kind: Literal["open_bridge_view"] = "open_bridge_view"
    ship: str


class CloseBridgeViewCommand(WorldCommand):
    kind: Literal["close_bridge_view"] = "close_bridge_view"
    ship: str


Command = Annotated[
    Union[
        CourseCommand,
        PositionCommand,
        DestinationCommand,
        LoadAtCommand,
        UnloadAtCommand,
        DockAtCommand,
        AttackCommand,
        RefuelCommand,
        StopCommand,
        StopAttackCommand,
        GoCommand,
        StatusCommand,
        ShowCommand,
        CreateCommand,
        SaveCommand,
        LoadCommand,
        QuitCommand,
        DefaultCommand,
        SizeCommand,
        ZoomCommand,
        PanCommand,
        OpenMapViewCommand,
        CloseMapViewCommand,
        OpenSailingViewCommand,
        CloseSailingViewCommand,
        OpenBridgeViewCommand,
        CloseBridgeViewCommand,
    ],
    Field(discriminator="kind"),
]

COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)

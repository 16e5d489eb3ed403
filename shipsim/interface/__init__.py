"""Operator interface: command parsing, controller and views."""

from .command_parser import CommandParser, ErrorType, UsageError
from .commands import COMMAND_ADAPTER, Command
from .controller import Controller
from .views import BridgeView, MapView, SailingView

__all__ = [
    "CommandParser",
    "ErrorType",
    "UsageError",
    "COMMAND_ADAPTER",
    "Command",
    "Controller",
    "BridgeView",
    "MapView",
    "SailingView",
]

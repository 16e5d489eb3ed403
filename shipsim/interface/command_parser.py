"""Text command parser for the operator.

This module turns one input line such as "Ajax course 90 10" or "zoom 2.5"
into a typed command model. It only checks the shape of the input (known
command word, right number and type of arguments); whether the command
makes sense for the world is decided when it is executed.
"""

import math
from enum import Enum
from typing import Any, Callable, Optional

from .commands import COMMAND_ADAPTER, Command


class ErrorType(Enum):
    """Classification of command input errors."""
    UNKNOWN_COMMAND = "unknown_command"
    SYNTAX_ERROR = "syntax_error"


class UsageError(Exception):
    """Raised when command parsing fails with classification."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


def _read_double(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        raise UsageError(ErrorType.SYNTAX_ERROR, "Expected a double!") from None
    if not math.isfinite(value):
        raise UsageError(ErrorType.SYNTAX_ERROR, "Expected a double!")
    return value


def _read_integer(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise UsageError(ErrorType.SYNTAX_ERROR, "Expected an integer!") from None


def _read_word(token: str) -> str:
    return token


# Command word -> (field name, reader) for each argument, in input order
SHIP_COMMANDS: dict[str, list[tuple[str, Callable[[str], Any]]]] = {
    "course": [("heading", _read_double), ("speed", _read_double)],
    "position": [("x", _read_double), ("y", _read_double), ("speed", _read_double)],
    "destination": [("island", _read_word), ("speed", _read_double)],
    "load_at": [("island", _read_word)],
    "unload_at": [("island", _read_word)],
    "dock_at": [("island", _read_word)],
    "attack": [("target", _read_word)],
    "refuel": [],
    "stop": [],
    "stop_attack": [],
}

WORLD_COMMANDS: dict[str, list[tuple[str, Callable[[str], Any]]]] = {
    "go": [],
    "status": [],
    "show": [],
    "create": [
        ("name", _read_word),
        ("type_name", _read_word),
        ("x", _read_double),
        ("y", _read_double),
    ],
    "save": [("path", _read_word)],
    "load": [("path", _read_word)],
    "quit": [],
    "default": [],
    "size": [("size", _read_integer)],
    "zoom": [("scale", _read_double)],
    "pan": [("x", _read_double), ("y", _read_double)],
    "open_map_view": [],
    "close_map_view": [],
    "open_sailing_view": [],
    "close_sailing_view": [],
    "open_bridge_view": [("ship", _read_word)],
    "close_bridge_view": [("ship", _read_word)],
}


class CommandParser:
    """Parse operator input lines into Command models."""

    def parse(self, line: str, is_ship_name: Callable[[str], bool]) -> Optional[Command]:
        """Parse one input line.

        A line whose first word names a ship is a ship command
        ("<ship> <verb> <args>"); anything else must be a world or view
        command. Command words are case-sensitive.

        Args:
            line: Raw input line
            is_ship_name: Tells whether a word names a ship currently in the world

        Returns:
            Parsed command, or None for a blank line

        Raises:
            UsageError: If the command word is unknown or the arguments are malformed
        """
        words = line.split()
        if not words:
            return None

        first, rest = words[0], words[1:]
        if is_ship_name(first):
            if not rest or rest[0] not in SHIP_COMMANDS:
                raise UsageError(ErrorType.UNKNOWN_COMMAND, "Unrecognized command!")
            verb = rest[0]
            fields = self._read_arguments(SHIP_COMMANDS[verb], rest[1:])
            fields["ship"] = first
        elif first in WORLD_COMMANDS:
            verb = first
            fields = self._read_arguments(WORLD_COMMANDS[verb], rest)
        else:
            raise UsageError(ErrorType.UNKNOWN_COMMAND, "Unrecognized command!")

        fields["kind"] = verb
        return COMMAND_ADAPTER.validate_python(fields)

    def _read_arguments(
        self, readers: list[tuple[str, Callable[[str], Any]]], tokens: list[str]
    ) -> dict[str, Any]:
        """Convert argument tokens with their readers.

        Raises:
            UsageError: On a missing, extra or malformed argument
        """
        fields: dict[str, Any] = {}
        for index, (name, reader) in enumerate(readers):
            if index >= len(tokens):
                if reader is _read_double:
                    raise UsageError(ErrorType.SYNTAX_ERROR, "Expected a double!")
                if reader is _read_integer:
                    raise UsageError(ErrorType.SYNTAX_ERROR, "Expected an integer!")
                raise UsageError(ErrorType.SYNTAX_ERROR, "Expected a name!")
            fields[name] = reader(tokens[index])
        if len(tokens) > len(readers):
            raise UsageError(ErrorType.SYNTAX_ERROR, "Unexpected extra input!")
        return fields

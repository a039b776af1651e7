"""Command-line argument parsing for the tracer commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

SESSION_COMMANDS: tuple[str, ...] = ("log", "view", "update", "delete")
_START_COMMAND = "start"
_PROGRAM_COMMAND = "tracer"


class ArgsError(ValueError):
    """Raised when a command line cannot be understood."""

    def __init__(self, message: str, allowed: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.allowed = tuple(allowed)


@dataclass(frozen=True)
class Args:
    """A parsed command: the program word and the requested action."""

    init_command: str
    query: str


def _check_count(items: Sequence[str], expected: int) -> None:
    if len(items) < expected:
        raise ArgsError("You need to enter more arguments")
    if len(items) > expected:
        raise ArgsError("You entered too many arguments")


def parse_args(argv: Sequence[str]) -> Args:
    """Parse the process arguments: program path, ``tracer`` and ``start``."""
    _check_count(argv, 3)
    _, init_command, query = argv
    if init_command != _PROGRAM_COMMAND:
        raise ArgsError(f"{init_command} is not a recognized command")
    if query not in _START_COMMAND:
        raise ArgsError(f"{query} is not a recognized command")
    return Args(init_command, query)


def parse_session_args(items: Sequence[str]) -> Args:
    """Parse a command typed inside a session, such as ``tracer log``."""
    _check_count(items, 2)
    init_command, query = (item.lower() for item in items)
    if init_command != _PROGRAM_COMMAND:
        raise ArgsError(f"{init_command} is not a recognized command")
    if query not in SESSION_COMMANDS:
        raise ArgsError(f"{query} is not a recognized command", SESSION_COMMANDS)
    return Args(init_command, query)
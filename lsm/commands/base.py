"""Command abstraction and registry.

Commands are registered explicitly into a ``CommandRegistry`` built by the
caller at startup (see :func:`lsm.commands.build_registry`); there is no
module-level registration side effect.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping

from ..errors import LsmError, UnknownCommandError
from ..sources import CandidateSource

logger = logging.getLogger(__name__)

SourceFactory = Callable[[str], CandidateSource]


class Command(ABC):
    """A named operation run against one collection."""

    name: str = ""

    @abstractmethod
    def help(self) -> str:
        """One-line description used by listings."""

    @abstractmethod
    def run(self, request: Mapping[str, Any], source: CandidateSource) -> Dict[str, Any]:
        """Execute the command and return its response document.

        Raises:
            LsmError: On invalid requests or candidate failures
        """


def command_target(request: Mapping[str, Any]) -> tuple[str, str]:
    """Return ``(command name, collection)`` from a command document.

    The first key names the command and its value names the collection,
    e.g. ``{"levenshtein": "words", ...}``.
    """
    if not request:
        raise UnknownCommandError("Empty command document")
    name, collection = next(iter(request.items()))
    return name, collection


class CommandRegistry:
    """Name -> Command table owned by the caller."""

    def __init__(self):
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command instance.

        Raises:
            ValueError: If a command with the same name is already registered
        """
        if not command.name:
            raise ValueError(f"Command {type(command).__name__} has no name")
        if command.name in self._commands:
            raise ValueError(f"Command '{command.name}' is already registered")
        self._commands[command.name] = command

    def get(self, name: str) -> Command:
        """Get a registered command.

        Raises:
            UnknownCommandError: If no command has this name
        """
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(f"no such command: '{name}'") from None

    def names(self) -> List[str]:
        return sorted(self._commands.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def dispatch(self, request: Mapping[str, Any], source_factory: SourceFactory) -> Dict[str, Any]:
        """Run the command named by ``request`` and wrap the outcome.

        Library errors are turned into ``{"ok": 0, "errmsg": ...}``; any
        other exception propagates.
        """
        try:
            name, collection = command_target(request)
            command = self.get(name)
            if not isinstance(collection, str) or not collection:
                raise UnknownCommandError(f"command '{name}' requires a collection name")
            logger.debug(f"[command] {name} on '{collection}'")
            response = command.run(request, source_factory(collection))
        except LsmError as e:
            # KeyError subclasses quote their message in str(); use the raw argument
            message = e.args[0] if e.args else str(e)
            logger.debug(f"[command] failed: {message}")
            return {"ok": 0, "errmsg": message}
        response["ok"] = 1
        return response


__all__ = ["Command", "CommandRegistry", "SourceFactory", "command_target"]

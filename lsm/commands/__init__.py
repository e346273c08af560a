"""Command dispatch: request parsing, commands and their registry."""
from __future__ import annotations
from typing import Any, Dict

from .base import Command, CommandRegistry, SourceFactory, command_target
from .levenshtein import LevenshteinCommand, parse_request


def build_registry(matching: Dict[str, Any] | None = None, logging_cfg: Dict[str, Any] | None = None) -> CommandRegistry:
    """Create a registry holding every built-in command.

    Args:
        matching: ``matching`` config section (distance backend, field error policy)
        logging_cfg: ``logging`` config section (progress settings)

    Returns:
        CommandRegistry owned by the caller
    """
    matching = matching or {}
    logging_cfg = logging_cfg or {}
    registry = CommandRegistry()
    registry.register(LevenshteinCommand(
        distance_backend=matching.get("distance_backend", "native"),
        on_field_error=matching.get("on_field_error", "abort"),
        progress_enabled=logging_cfg.get("progress_enabled", False),
        progress_interval=int(logging_cfg.get("progress_interval", 1000)),
    ))
    return registry


__all__ = [
    "Command",
    "CommandRegistry",
    "SourceFactory",
    "command_target",
    "LevenshteinCommand",
    "parse_request",
    "build_registry",
]

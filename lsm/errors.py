"""Exception hierarchy shared by the matcher, sources and commands."""

from __future__ import annotations


class LsmError(Exception):
    """Base class for all errors raised by lsm."""


class ConfigurationError(LsmError, ValueError):
    """A matching request is missing a field or carries a wrong type/value.

    Raised before any candidate is scanned.
    """


class CandidateAccessError(LsmError, LookupError):
    """The comparison field of a candidate is absent or not text."""

    def __init__(self, field: str, reason: str, position: int | None = None):
        self.field = field
        self.reason = reason
        self.position = position
        where = f" (candidate #{position})" if position is not None else ""
        super().__init__(f"Field '{field}' {reason}{where}")


class SourceError(LsmError):
    """A candidate source could not produce its next record."""


class StoreError(LsmError):
    """The SQLite record store could not be opened."""


class UnknownCommandError(LsmError, KeyError):
    """Dispatch of a command name that was never registered."""


__all__ = [
    "LsmError",
    "ConfigurationError",
    "CandidateAccessError",
    "SourceError",
    "StoreError",
    "UnknownCommandError",
]

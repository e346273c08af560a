"""SQLite-backed record store used as a candidate collection."""

from .sqlite_impl import RecordStore

__all__ = ["RecordStore"]

"""Candidate sources feeding the matching engine.

Currently three sources are implemented: in-memory iterables, JSON-lines
files and collections of the SQLite record store.
"""

from .base import CandidateSource, Record, RecordPredicate, field_equals
from .iterable import IterableSource
from .jsonl import JsonLinesSource
from .sqlite_source import SQLiteSource

__all__ = [
    "CandidateSource",
    "Record",
    "RecordPredicate",
    "field_equals",
    "IterableSource",
    "JsonLinesSource",
    "SQLiteSource",
]

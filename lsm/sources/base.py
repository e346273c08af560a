"""Candidate source abstraction.

A source yields candidate records to the matching engine. The duplicate
(already visited storage position) filter and the match predicate are
applied here, before a record ever reaches the engine, so skipped records
never count toward the engine's hits or limit.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, Iterator, Mapping, Optional, Set, Tuple

Record = Mapping[str, Any]
RecordPredicate = Callable[[Record], bool]


class CandidateSource(ABC):
    """Iterable of gated candidate records.

    Subclasses provide ``_positioned_records()`` yielding ``(position,
    record)`` pairs; the base class drops repeated positions and records
    rejected by ``predicate``. ``pulled`` counts records handed to the
    consumer, which lets callers verify early termination.
    """

    def __init__(self, predicate: Optional[RecordPredicate] = None):
        self.predicate = predicate
        self.pulled = 0
        self.skipped_duplicates = 0
        self.skipped_unmatched = 0

    @abstractmethod
    def _positioned_records(self) -> Iterator[Tuple[Hashable, Record]]:
        """Yield ``(storage position, record)`` pairs in source order."""

    @property
    def tracks_positions(self) -> bool:
        """Whether positions can repeat and must be remembered.

        Sources whose positions are unique by construction (index, line
        number, rowid) return False so a scan keeps no per-record state.
        """
        return True

    def __iter__(self) -> Iterator[Record]:
        seen: Optional[Set[Hashable]] = set() if self.tracks_positions else None
        for position, record in self._positioned_records():
            if seen is not None:
                if position in seen:
                    self.skipped_duplicates += 1
                    continue
                seen.add(position)
            if self.predicate is not None and not self.predicate(record):
                self.skipped_unmatched += 1
                continue
            self.pulled += 1
            yield record

    def stats(self) -> Dict[str, int]:
        return {
            "pulled": self.pulled,
            "skipped_duplicates": self.skipped_duplicates,
            "skipped_unmatched": self.skipped_unmatched,
        }


def field_equals(name: str, value: Any) -> RecordPredicate:
    """Predicate keeping records whose ``name`` field equals ``value``."""
    def _predicate(record: Record) -> bool:
        try:
            return record[name] == value
        except (KeyError, IndexError, TypeError):
            return False
    return _predicate


__all__ = ["Record", "RecordPredicate", "CandidateSource", "field_equals"]

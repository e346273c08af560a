"""Candidate source streaming a collection from the SQLite record store."""
from __future__ import annotations
from typing import Iterator, Optional, Tuple

from ..db import RecordStore
from ..errors import SourceError
from .base import CandidateSource, Record, RecordPredicate


class SQLiteSource(CandidateSource):
    """Stream the documents of one collection, keyed by rowid."""

    def __init__(
        self,
        store: RecordStore,
        collection: str,
        predicate: Optional[RecordPredicate] = None,
        batch_size: int = 500,
    ):
        super().__init__(predicate=predicate)
        self.store = store
        self.collection = collection
        self.batch_size = batch_size

    @property
    def tracks_positions(self) -> bool:
        # rowids are unique within a table
        return False

    def _positioned_records(self) -> Iterator[Tuple[int, Record]]:
        if not self.store.has_collection(self.collection):
            raise SourceError(f"Unknown collection '{self.collection}' in {self.store.path}")
        yield from self.store.iter_records(self.collection, batch_size=self.batch_size)


__all__ = ["SQLiteSource"]

"""In-memory candidate source over any iterable of records."""
from __future__ import annotations
from typing import Any, Callable, Hashable, Iterable, Iterator, Optional, Tuple

from .base import CandidateSource, Record, RecordPredicate


class IterableSource(CandidateSource):
    """Wrap an iterable (list, generator, cursor) of records.

    Records only need to support ``record[name]``, so ``sqlite3.Row`` rows
    work as well as dicts.

    Records are consumed lazily. Without ``key`` the storage position is the
    record's index in the iterable, so no record is ever a duplicate.

    Example usage:
        source = IterableSource(rows, key=lambda r: r["id"], predicate=field_equals("lang", "en"))
        result_set = MatchingEngine(config).run(source)
    """

    def __init__(
        self,
        records: Iterable[Record],
        key: Optional[Callable[[Record], Hashable]] = None,
        predicate: Optional[RecordPredicate] = None,
    ):
        super().__init__(predicate=predicate)
        self._records = records
        self._key = key

    @property
    def tracks_positions(self) -> bool:
        return self._key is not None

    def _positioned_records(self) -> Iterator[Tuple[Any, Record]]:
        for idx, record in enumerate(self._records):
            yield (self._key(record) if self._key else idx), record


__all__ = ["IterableSource"]

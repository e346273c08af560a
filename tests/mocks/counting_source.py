"""Candidate sources that record how far a scan went."""
from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List


class TrackedRecord(dict):
    """Record mapping that counts field reads."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads = 0

    def __getitem__(self, key):
        self.reads += 1
        return super().__getitem__(key)


class CountingSource:
    """Iterable over records that counts every pull.

    ``pulls`` is incremented each time the consumer asks for the next record
    and gets one, so a consumer that stops early leaves it below ``len(records)``.
    """

    def __init__(self, records: Iterable[Dict[str, Any]]):
        self.records: List[TrackedRecord] = [TrackedRecord(r) for r in records]
        self.pulls = 0

    def __iter__(self) -> Iterator[TrackedRecord]:
        for record in self.records:
            self.pulls += 1
            yield record

    @property
    def scored(self) -> List[int]:
        """Indices of records whose fields were read."""
        return [i for i, r in enumerate(self.records) if r.reads]

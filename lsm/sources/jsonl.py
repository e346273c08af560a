"""JSON-lines file candidate source."""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Callable, Hashable, Iterator, Optional, Tuple

from ..errors import SourceError
from .base import CandidateSource, Record, RecordPredicate

logger = logging.getLogger(__name__)


class JsonLinesSource(CandidateSource):
    """Read one JSON object per line, lazily.

    Blank lines are ignored. The storage position is the 1-based line number
    unless ``key`` is given.
    """

    def __init__(
        self,
        path: Path | str,
        key: Optional[Callable[[Record], Hashable]] = None,
        predicate: Optional[RecordPredicate] = None,
        encoding: str = "utf-8",
    ):
        super().__init__(predicate=predicate)
        self.path = Path(path)
        self._key = key
        self.encoding = encoding

    @property
    def tracks_positions(self) -> bool:
        return self._key is not None

    def _positioned_records(self) -> Iterator[Tuple[Any, Record]]:
        if not self.path.exists():
            raise SourceError(f"Input file not found: {self.path}")
        logger.debug(f"[source] Reading candidates from {self.path}")
        with self.path.open("r", encoding=self.encoding) as fh:
            for line_no, line in enumerate(fh, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    raise SourceError(f"{self.path}:{line_no}: invalid JSON ({e.msg})") from e
                if not isinstance(record, dict):
                    raise SourceError(f"{self.path}:{line_no}: expected a JSON object, got {type(record).__name__}")
                yield (self._key(record) if self._key else line_no), record


__all__ = ["JsonLinesSource"]

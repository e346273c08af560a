from __future__ import annotations
import json
import sqlite3
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from ..errors import SourceError, StoreError

logger = logging.getLogger(__name__)

SCHEMA = [
    "PRAGMA journal_mode=WAL;",
    # Records are stored as JSON documents grouped by collection name; rowid is the storage position
    "CREATE TABLE IF NOT EXISTS records (id INTEGER PRIMARY KEY AUTOINCREMENT, collection TEXT NOT NULL, doc TEXT NOT NULL);",
    "CREATE INDEX IF NOT EXISTS idx_records_collection ON records(collection, id);",
    # Metadata table
    "CREATE TABLE IF NOT EXISTS meta (key TEXT PRIMARY KEY, value TEXT);",
]


class RecordStore:
    """Collections of JSON documents in a single SQLite file.

    Only read and append paths are provided; the matcher never writes.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.path, timeout=30)
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Cannot open record store {self.path}: {e}") from e
        self.conn.row_factory = sqlite3.Row
        self._closed = False
        try:
            self._init_schema()
        except sqlite3.Error as e:
            self.conn.close()
            self._closed = True
            raise StoreError(f"Cannot open record store {self.path}: {e}") from e

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _init_schema(self) -> None:
        cur = self.conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        cur.execute("INSERT OR REPLACE INTO meta(key,value) VALUES('schema_version','1')")
        self.conn.commit()

    # --- Writes ---
    def insert_records(self, collection: str, records: Iterable[Dict[str, Any]]) -> int:
        """Append documents to ``collection`` and return how many were stored."""
        rows = [(collection, json.dumps(rec, default=str)) for rec in records]
        if rows:
            self.conn.executemany("INSERT INTO records(collection, doc) VALUES(?, ?)", rows)
            self.conn.commit()
        logger.debug(f"[db] Inserted {len(rows)} record(s) into '{collection}'")
        return len(rows)

    # --- Reads ---
    def count(self, collection: str) -> int:
        row = self.conn.execute("SELECT COUNT(*) AS c FROM records WHERE collection=?", (collection,)).fetchone()
        return int(row["c"])

    def list_collections(self) -> List[str]:
        rows = self.conn.execute("SELECT DISTINCT collection FROM records ORDER BY collection").fetchall()
        return [r["collection"] for r in rows]

    def has_collection(self, collection: str) -> bool:
        row = self.conn.execute("SELECT 1 FROM records WHERE collection=? LIMIT 1", (collection,)).fetchone()
        return row is not None

    def iter_records(self, collection: str, batch_size: int = 500) -> Iterator[Tuple[int, Dict[str, Any]]]:
        """Stream ``(rowid, document)`` pairs of a collection in insertion order.

        Rows are fetched in batches through a dedicated cursor, so a consumer
        that stops early never loads the rest of the collection.

        Raises:
            SourceError: If a stored document is not valid JSON
        """
        cur = self.conn.execute(
            "SELECT id, doc FROM records WHERE collection=? ORDER BY id", (collection,)
        )
        try:
            while True:
                batch = cur.fetchmany(batch_size)
                if not batch:
                    break
                for row in batch:
                    try:
                        doc = json.loads(row["doc"])
                    except json.JSONDecodeError as e:
                        raise SourceError(f"Record {row['id']} in '{collection}' is not valid JSON: {e}") from e
                    yield row["id"], doc
        finally:
            cur.close()

    def close(self) -> None:
        if not self._closed:
            self.conn.close()
            self._closed = True


__all__ = ["RecordStore"]

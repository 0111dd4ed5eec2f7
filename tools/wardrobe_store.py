"""Document store abstractions and SQLite implementation."""
from __future__ import annotations

import json
import sqlite3
import time
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from logic.errors import CommitTimeoutError
from tools.observability import instrument_tool

Document = Dict[str, Any]


class WardrobeStore:
    """Document store capability consumed by the ingestion pipeline.

    Implementations must make :meth:`batch_write` all-or-nothing and are
    solely responsible for identifier uniqueness. When a ``deadline`` (a
    :func:`time.monotonic` value) passes before the batch is committed, the
    write must be rolled back and :class:`CommitTimeoutError` raised.
    """

    def new_id(self) -> str:
        raise NotImplementedError

    def batch_write(
        self,
        collection: str,
        documents: Sequence[Tuple[str, Document]],
        deadline: Optional[float] = None,
    ) -> None:
        raise NotImplementedError

    def find(self, collection: str, field: str, value: Any) -> List[Document]:
        raise NotImplementedError


class SQLiteWardrobeStore(WardrobeStore):
    """Local SQLite-backed document store."""

    def __init__(self, database_path: str | Path = "data/wardrobe.db", timeout: float = 5.0) -> None:
        self.database_path = Path(database_path)
        self.timeout = timeout
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self, timeout: Optional[float] = None) -> sqlite3.Connection:
        conn = sqlite3.connect(self.database_path, timeout=self.timeout if timeout is None else timeout)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    doc_id TEXT NOT NULL,
                    owner_id TEXT,
                    body TEXT NOT NULL,
                    PRIMARY KEY (collection, doc_id)
                );
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_documents_owner ON documents (collection, owner_id);"
            )

    def new_id(self) -> str:
        return uuid.uuid4().hex

    @instrument_tool("batch_write")
    def batch_write(
        self,
        collection: str,
        documents: Sequence[Tuple[str, Document]],
        deadline: Optional[float] = None,
    ) -> None:
        """Insert every document in one transaction; on any error nothing is kept.

        With a ``deadline``, long-running statements are interrupted through a
        progress handler and the deadline is checked once more before
        committing, so a timeout always leaves the collection untouched.
        """

        rows = [
            (collection, doc_id, document.get("userId"), json.dumps(document))
            for doc_id, document in documents
        ]
        if not rows:
            return

        lock_timeout = None
        if deadline is not None:
            lock_timeout = deadline - time.monotonic()
            if lock_timeout <= 0:
                raise CommitTimeoutError("Batch commit deadline passed before the write started")

        conn = self._connect(timeout=lock_timeout)
        if deadline is not None:
            conn.set_progress_handler(lambda: int(time.monotonic() > deadline), 1000)
        try:
            with conn:
                conn.executemany(
                    "INSERT INTO documents (collection, doc_id, owner_id, body) VALUES (?, ?, ?, ?)",
                    rows,
                )
                if deadline is not None and time.monotonic() > deadline:
                    raise CommitTimeoutError("Batch commit deadline passed; transaction rolled back")
        except sqlite3.OperationalError as exc:
            if deadline is not None and time.monotonic() > deadline:
                raise CommitTimeoutError(
                    "Batch commit interrupted at deadline; transaction rolled back"
                ) from exc
            raise
        finally:
            conn.close()

    def find(self, collection: str, field: str, value: Any) -> List[Document]:
        """Return documents in ``collection`` whose ``field`` equals ``value``."""

        conn = self._connect()
        try:
            if field == "userId":
                cursor = conn.execute(
                    "SELECT body FROM documents WHERE collection = ? AND owner_id = ? ORDER BY rowid",
                    (collection, value),
                )
            else:
                cursor = conn.execute(
                    "SELECT body FROM documents WHERE collection = ? ORDER BY rowid",
                    (collection,),
                )
            documents = [json.loads(row["body"]) for row in cursor.fetchall()]
        finally:
            conn.close()
        return [document for document in documents if document.get(field) == value]

    def count(self, collection: str) -> int:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM documents WHERE collection = ?", (collection,)
            ).fetchone()
        finally:
            conn.close()
        return int(row["total"])


__all__ = ["Document", "WardrobeStore", "SQLiteWardrobeStore"]

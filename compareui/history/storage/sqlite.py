"""SQLite storage backend for prompt history."""

import json
import logging
import sqlite3
import threading
from datetime import datetime
from pathlib import Path

from ..models import PromptRecord, StorageStats

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS prompts (
    id TEXT PRIMARY KEY,
    intent TEXT NOT NULL,
    kind TEXT NOT NULL,
    response_config TEXT NOT NULL,  -- JSON
    current_config TEXT,  -- JSON
    attempts INTEGER DEFAULT 1,
    model TEXT,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_prompts_kind ON prompts(kind);
CREATE INDEX IF NOT EXISTS idx_prompts_created ON prompts(created_at);
"""


class SQLiteStorage:
    """SQLite-based prompt history storage.

    The connection is shared between the caller's thread and the audit
    recorder's worker, so every statement runs under a lock.

    Args:
        db_path: Path to SQLite database file. ":memory:" is accepted.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection."""
        if self._conn is None:
            raise RuntimeError("Storage not initialized. Call initialize() first.")
        return self._conn

    def initialize(self) -> None:
        """Create the database file, tables and indexes."""
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(SCHEMA_SQL)
        self._conn.commit()

        logger.info(f"Initialized SQLite history at {self.db_path}")

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn:
                self._conn.close()
                self._conn = None

    # =========================================================================
    # Record Operations
    # =========================================================================

    def store_record(self, record: PromptRecord) -> PromptRecord:
        """Store a new record."""
        with self._lock:
            conn = self._get_conn()
            conn.execute(
                """
                INSERT INTO prompts (id, intent, kind, response_config,
                                     current_config, attempts, model, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.intent,
                    record.kind,
                    json.dumps(record.response_config),
                    json.dumps(record.current_config),
                    record.attempts,
                    record.model,
                    record.created_at.isoformat(),
                ),
            )
            conn.commit()
        return record

    def get_record(self, record_id: str) -> PromptRecord | None:
        """Get a record by ID."""
        with self._lock:
            row = self._get_conn().execute(
                "SELECT * FROM prompts WHERE id = ?", (record_id,)
            ).fetchone()
        if row:
            return self._row_to_record(row)
        return None

    def list_records(
        self,
        kind: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[PromptRecord]:
        """List records, newest first, optionally filtered by kind."""
        query = "SELECT * FROM prompts"
        params: list[str | int] = []
        if kind:
            query += " WHERE kind = ?"
            params.append(kind)
        query += " ORDER BY created_at DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        with self._lock:
            rows = self._get_conn().execute(query, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def delete_record(self, record_id: str) -> bool:
        """Delete a record."""
        with self._lock:
            conn = self._get_conn()
            cursor = conn.execute("DELETE FROM prompts WHERE id = ?", (record_id,))
            conn.commit()
        return cursor.rowcount > 0

    # =========================================================================
    # Storage Management
    # =========================================================================

    def prune(self, max_records: int) -> int:
        """Delete the oldest records beyond `max_records`."""
        with self._lock:
            conn = self._get_conn()
            cursor = conn.execute(
                """
                DELETE FROM prompts WHERE id NOT IN (
                    SELECT id FROM prompts ORDER BY created_at DESC LIMIT ?
                )
                """,
                (max_records,),
            )
            conn.commit()
        if cursor.rowcount:
            logger.info(f"Pruned {cursor.rowcount} history records")
        return cursor.rowcount

    def get_stats(self) -> StorageStats:
        """Get storage statistics."""
        with self._lock:
            conn = self._get_conn()
            rows = conn.execute(
                "SELECT kind, COUNT(*) AS n FROM prompts GROUP BY kind ORDER BY kind"
            ).fetchall()
            oldest_row = conn.execute("SELECT MIN(created_at) FROM prompts").fetchone()

        by_kind = {row["kind"]: row["n"] for row in rows}
        oldest = None
        if oldest_row and oldest_row[0]:
            oldest = datetime.fromisoformat(oldest_row[0])
        return StorageStats(
            record_count=sum(by_kind.values()),
            by_kind=by_kind,
            oldest=oldest,
        )

    # =========================================================================
    # Row Conversion
    # =========================================================================

    def _row_to_record(self, row: sqlite3.Row) -> PromptRecord:
        return PromptRecord(
            id=row["id"],
            intent=row["intent"],
            kind=row["kind"],
            response_config=json.loads(row["response_config"]),
            current_config=json.loads(row["current_config"]) if row["current_config"] else None,
            attempts=row["attempts"],
            model=row["model"] or "",
            created_at=datetime.fromisoformat(row["created_at"]),
        )


__all__ = ["SQLiteStorage", "SCHEMA_SQL"]

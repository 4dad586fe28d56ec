"""SQLite-backed lookup cache shared by deployer processes on one host.

Design:
- One row per key; ``save`` upserts, so the last writer wins.
- Expired rows are ignored on read and removed by ``purge_expired()``.
- WAL journal mode so concurrent readers do not block the writer.
"""

from __future__ import annotations

import logging
import sqlite3
import time
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_CACHE = """
CREATE TABLE IF NOT EXISTS kv_cache (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    expires_at  REAL NOT NULL
);
"""

_CREATE_IDX_EXPIRES = """
CREATE INDEX IF NOT EXISTS idx_kv_cache_expires ON kv_cache(expires_at);
"""


class SqliteCache:
    """``KeyValueCache`` persisted in a SQLite database file.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file. Created if it does not exist.
    clock:
        Wall-clock source in epoch seconds; expiry must survive restarts.
    """

    def __init__(self, db_path: Path, clock: Callable[[], float] = time.time) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_CACHE)
            conn.execute(_CREATE_IDX_EXPIRES)
            conn.commit()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def get(self, key: str) -> str | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_cache WHERE key = ? AND expires_at > ?",
                (key, self._clock()),
            ).fetchone()
        return row[0] if row else None

    def save(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_cache (key, value, expires_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    expires_at = excluded.expires_at
                """,
                (key, value, self._clock() + ttl_seconds),
            )
            conn.commit()

    def purge_expired(self) -> int:
        """Delete expired rows and return how many were removed."""
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM kv_cache WHERE expires_at <= ?", (self._clock(),)
            )
            conn.commit()
            removed = cursor.rowcount
        if removed:
            logger.info("Purged %d expired cache entries from %s", removed, self._db_path)
        return removed

    def count(self) -> int:
        """Return the number of live (unexpired) entries."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM kv_cache WHERE expires_at > ?", (self._clock(),)
            ).fetchone()
        return int(row[0])

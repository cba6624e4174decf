# -*- coding: utf-8 -*-
"""
SQLite-backed file cache used by the MCP server and `cachebro status`.

Each session remembers the content hash of every file it has handed out;
re-reading an unchanged file returns a short marker instead of the content
and the skipped tokens are added to a global counter.
"""
import hashlib
import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

# rough chars-per-token ratio for the savings estimate
CHARS_PER_TOKEN = 4


class CacheError(Exception):
    pass


class ReadOnlyCacheError(CacheError):
    pass


@dataclass(frozen=True)
class CacheStats:
    files_tracked: int
    tokens_saved: int


@dataclass(frozen=True)
class ReadResult:
    path: str
    content: str
    unchanged: bool


def estimate_tokens(text: str) -> int:
    return len(text) // CHARS_PER_TOKEN


class Cache:
    def __init__(self, db_path: Union[str, Path], session_id: str, readonly: bool = False):
        self.db_path = Path(db_path)
        self.session_id = session_id
        self.readonly = readonly
        self._conn: Optional[sqlite3.Connection] = None

    def init(self) -> None:
        if self._conn is not None:
            return
        if self.readonly:
            uri = self.db_path.resolve().as_uri() + "?mode=ro"
            self._conn = sqlite3.connect(uri, uri=True)
            self._conn.execute("PRAGMA busy_timeout = 5000")
            self._conn.execute("PRAGMA query_only = ON")
            return
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.execute("PRAGMA busy_timeout = 5000")
        with self._conn:
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS files (
                    path TEXT PRIMARY KEY,
                    hash TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
            """)
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS session_reads (
                    session_id TEXT NOT NULL,
                    path TEXT NOT NULL,
                    hash TEXT NOT NULL,
                    PRIMARY KEY (session_id, path)
                )
            """)
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS stats (
                    key TEXT PRIMARY KEY,
                    value INTEGER NOT NULL DEFAULT 0
                )
            """)
        logger.debug("opened cache %s (session %s)", self.db_path, self.session_id)

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise CacheError("cache is not initialized; call init() first")
        return self._conn

    def get_stats(self) -> CacheStats:
        files = self.conn.execute("SELECT COUNT(*) FROM files").fetchone()[0]
        row = self.conn.execute("SELECT value FROM stats WHERE key = 'tokens_saved'").fetchone()
        return CacheStats(files_tracked=files, tokens_saved=row[0] if row else 0)

    def read_file(self, path: Union[str, Path]) -> ReadResult:
        """Read a file through the cache, recording it for this session."""
        if self.readonly:
            raise ReadOnlyCacheError("cannot record reads on a read-only cache")
        p = Path(path).resolve()
        content = p.read_text(encoding="utf-8", errors="replace")
        digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
        key = str(p)

        with self.conn:
            row = self.conn.execute(
                "SELECT hash FROM session_reads WHERE session_id = ? AND path = ?",
                (self.session_id, key),
            ).fetchone()
            if row and row[0] == digest:
                self.conn.execute("""
                    INSERT INTO stats (key, value) VALUES ('tokens_saved', ?)
                    ON CONFLICT(key) DO UPDATE SET value = value + excluded.value
                """, (estimate_tokens(content),))
                return ReadResult(path=key, content="", unchanged=True)

            self.conn.execute(
                "INSERT OR REPLACE INTO session_reads (session_id, path, hash) VALUES (?, ?, ?)",
                (self.session_id, key, digest),
            )
            self.conn.execute(
                "INSERT OR REPLACE INTO files (path, hash, updated_at) VALUES (?, ?, ?)",
                (key, digest, time.time()),
            )
        return ReadResult(path=key, content=content, unchanged=False)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


def create_cache(db_path: Union[str, Path], session_id: str, readonly: bool = False) -> Cache:
    return Cache(db_path, session_id=session_id, readonly=readonly)

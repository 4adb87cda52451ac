from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List

from blog_backend.schema import TABLES, get_schema_sql


def _debug(msg: str) -> None:
    print(f"[db] {msg}")


def _normalize_path(db_path: str) -> str:
    p = (db_path or "").strip()
    # Support sqlite:///path style
    if p.lower().startswith("sqlite:///"):
        p = p[len("sqlite:///") :]
    return p


@contextmanager
def connect(db_path: str) -> Iterator[sqlite3.Connection]:
    """Open a SQLite connection for the duration of one unit of work.

    Rows come back as `sqlite3.Row` so callers can do `dict(row)`.
    Commits on success, rolls back on any exception, always closes.
    """
    path = _normalize_path(db_path)
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path, timeout=30, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    # Writers are serialized by SQLite itself; just wait politely for the lock.
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA busy_timeout=5000;")  # 5s
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str, *, reset: bool = False) -> None:
    """Create all tables and run lightweight migrations.

    With reset=True every table is dropped first (test/dev databases only).
    """
    _debug(f"Initializing DB at {db_path}" + (" (reset)" if reset else ""))
    with connect(db_path) as conn:
        if reset:
            for table in TABLES:
                conn.execute(f"DROP TABLE IF EXISTS {table}")
        conn.executescript(get_schema_sql())
        _migrate(conn)


def _table_columns(conn: Any, table: str) -> List[str]:
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return [str(r["name"]) for r in rows]


def _has_column(conn: Any, table: str, col: str) -> bool:
    return col in _table_columns(conn, table)


def _migrate(conn: Any) -> None:
    """Lightweight forward-only migrations for existing DBs."""
    # Older blog databases predate tags/byline.
    for col in ("tags", "byline"):
        if not _has_column(conn, "blogPosts", col):
            _debug(f"Adding blogPosts.{col}")
            conn.execute(f"ALTER TABLE blogPosts ADD COLUMN {col} TEXT")

from __future__ import annotations

from typing import Any, Dict, Optional

from .security import hash_password


def normalize_username(username: str) -> str:
    # Applied when seeding only, so stray shell whitespace never ends up stored.
    return (username or "").strip()


def public_user(row: Any | Dict[str, Any]) -> Dict[str, Any]:
    d = dict(row)
    d.pop("passwordHash", None)
    return d


def get_user_by_username(conn: Any, username: str | None) -> Optional[Any]:
    """Exact match: login does not trim or case-fold what the caller typed."""
    if not username:
        return None
    return conn.execute(
        "SELECT * FROM users WHERE username=?",
        (username,),
    ).fetchone()


def create_user(conn: Any, *, username: str, password: str) -> Dict[str, Any]:
    """Insert a user with a hashed password (seed scripts and tests only)."""
    u = normalize_username(username)
    if not u:
        raise ValueError("username_blank")

    existing = conn.execute("SELECT 1 FROM users WHERE username=?", (u,)).fetchone()
    if existing is not None:
        raise ValueError("username_exists")

    conn.execute(
        "INSERT INTO users (username, passwordHash) VALUES (?,?)",
        (u, hash_password(password)),
    )
    row = get_user_by_username(conn, u)
    assert row is not None
    return public_user(row)

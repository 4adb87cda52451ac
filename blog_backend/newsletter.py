from __future__ import annotations

from typing import Any

from blog_backend.util.time import now_ms


def add_signup(conn: Any, email: str | None) -> None:
    # No format validation and no duplicate check: every signup is a new row.
    conn.execute(
        "INSERT INTO emails (email, dateRegistered) VALUES (?,?)",
        (email, now_ms()),
    )

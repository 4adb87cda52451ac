"""
Tests for connection handling, schema creation and migrations.
"""

import sqlite3

import pytest

from blog_backend.db import connect, init_db


def _columns(db_path, table):
    with connect(db_path) as conn:
        return [r["name"] for r in conn.execute(f"PRAGMA table_info({table})").fetchall()]


class TestInitDb:

    def test_creates_all_tables(self, tmp_path):
        path = str(tmp_path / "nested" / "blog.sqlite")
        init_db(path)

        assert _columns(path, "users") == ["id", "username", "passwordHash"]
        assert _columns(path, "emails") == ["id", "email", "dateRegistered"]
        assert _columns(path, "blogPosts") == [
            "id", "slug", "content", "title", "date",
            "headerImage", "thumbnailImage", "tags", "deleted", "byline",
        ]

    def test_idempotent(self, db_path):
        with connect(db_path) as conn:
            conn.execute("INSERT INTO emails (email, dateRegistered) VALUES ('a@b.c', 1)")
        init_db(db_path)
        with connect(db_path) as conn:
            assert conn.execute("SELECT COUNT(*) AS n FROM emails").fetchone()["n"] == 1

    def test_reset_drops_rows(self, db_path):
        with connect(db_path) as conn:
            conn.execute("INSERT INTO emails (email, dateRegistered) VALUES ('a@b.c', 1)")
        init_db(db_path, reset=True)
        with connect(db_path) as conn:
            assert conn.execute("SELECT COUNT(*) AS n FROM emails").fetchone()["n"] == 0

    def test_migrates_old_posts_table(self, tmp_path):
        """A blogPosts table created before tags/byline existed gains both columns."""
        path = str(tmp_path / "old.sqlite")
        raw = sqlite3.connect(path)
        raw.execute(
            "CREATE TABLE blogPosts (id INTEGER PRIMARY KEY, slug TEXT, content TEXT, title TEXT, "
            "date INTEGER, headerImage TEXT, thumbnailImage TEXT, deleted INTEGER)"
        )
        raw.commit()
        raw.close()

        init_db(path)

        cols = _columns(path, "blogPosts")
        assert "tags" in cols
        assert "byline" in cols


class TestConnect:

    def test_rows_are_dict_like(self, db_path):
        with connect(db_path) as conn:
            conn.execute("INSERT INTO emails (email, dateRegistered) VALUES ('x@y.z', 5)")
            row = conn.execute("SELECT * FROM emails").fetchone()
        assert dict(row)["email"] == "x@y.z"

    def test_rolls_back_on_error(self, db_path):
        with pytest.raises(RuntimeError):
            with connect(db_path) as conn:
                conn.execute("INSERT INTO emails (email, dateRegistered) VALUES ('x@y.z', 5)")
                raise RuntimeError("boom")

        with connect(db_path) as conn:
            assert conn.execute("SELECT COUNT(*) AS n FROM emails").fetchone()["n"] == 0

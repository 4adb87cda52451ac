"""Database schema for the blog backend.

Column names are camelCase because rows are serialized to clients as-is
(`dict(row)`), and the frontend reads `headerImage`, `thumbnailImage`, etc.

Timestamps (`blogPosts.date`, `emails.dateRegistered`) are INTEGER epoch
milliseconds so that visibility checks are a plain numeric comparison.
"""

from __future__ import annotations


SCHEMA_SQLITE = r"""
-- Users / Auth
-- Seeded out-of-band (scripts/create_user.py); the HTTP API only reads them.
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    passwordHash TEXT NOT NULL
);

-- Posts
-- NOTE: slug is NOT unique. It is recomputed from the title on every write.
CREATE TABLE IF NOT EXISTS blogPosts (
    id INTEGER PRIMARY KEY,
    slug TEXT,
    content TEXT,
    title TEXT,
    date INTEGER,
    headerImage TEXT,
    thumbnailImage TEXT,
    tags TEXT,
    deleted INTEGER NOT NULL DEFAULT 0,
    byline TEXT
);
CREATE INDEX IF NOT EXISTS idx_blogposts_slug ON blogPosts (slug);
CREATE INDEX IF NOT EXISTS idx_blogposts_date ON blogPosts (date);

-- Newsletter
CREATE TABLE IF NOT EXISTS emails (
    id INTEGER PRIMARY KEY,
    email TEXT,
    dateRegistered INTEGER
);
"""

# Dropped (in this order) by `init_db(..., reset=True)`.
TABLES = ("blogPosts", "users", "emails")


def get_schema_sql() -> str:
    return SCHEMA_SQLITE

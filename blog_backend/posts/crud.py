from __future__ import annotations

from typing import Any, Dict, List, Optional

from blog_backend.util.slug import slugify
from blog_backend.util.time import now_ms

from .visibility import visibility_predicate


def list_posts(conn: Any, *, authenticated: bool, now: Optional[int] = None) -> List[Dict[str, Any]]:
    where_sql, params = visibility_predicate(
        authenticated=authenticated,
        now_ms=now_ms() if now is None else now,
    )
    rows = conn.execute(
        f"SELECT * FROM blogPosts WHERE {where_sql} ORDER BY date",
        tuple(params),
    ).fetchall()
    return [dict(r) for r in rows]


def get_post_by_slug(conn: Any, slug: str) -> Optional[Dict[str, Any]]:
    """Public lookup; deleted posts are hidden from everyone here.

    Slugs are not unique. When titles collide, the newest row wins.
    """
    row = conn.execute(
        "SELECT * FROM blogPosts WHERE slug=? AND deleted=0 ORDER BY id DESC LIMIT 1",
        (slug,),
    ).fetchone()
    return dict(row) if row is not None else None


def create_post(
    conn: Any,
    *,
    title: str,
    content: str | None,
    header_image: str | None = None,
    thumbnail_image: str | None = None,
    date: int | None = None,
    tags: str | None = None,
    byline: str | None = None,
) -> str:
    """Insert a live post and return its slug.

    A missing (or zero) date means "publish now".
    """
    slug = slugify(title)

    conn.execute(
        """
        INSERT INTO blogPosts (slug, content, title, headerImage, thumbnailImage, date, deleted, tags, byline)
        VALUES (?,?,?,?,?,?,?,?,?)
        """,
        (
            slug,
            content,
            title,
            header_image,
            thumbnail_image,
            int(date) if date else now_ms(),
            0,
            tags,
            byline,
        ),
    )
    return slug


def update_post(
    conn: Any,
    current_slug: str,
    *,
    title: str,
    content: str | None,
    header_image: str | None = None,
    thumbnail_image: str | None = None,
    date: int | None = None,
    tags: str | None = None,
    byline: str | None = None,
    deleted: bool | int | None = None,
) -> str:
    """Overwrite every mutable field of the post(s) at `current_slug`.

    The slug follows the new title. Leaving `deleted` out restores a
    soft-deleted post.
    """
    new_slug = slugify(title)

    conn.execute(
        """
        UPDATE blogPosts
        SET content=?, title=?, headerImage=?, thumbnailImage=?, slug=?, date=?, tags=?, deleted=?, byline=?
        WHERE slug=?
        """,
        (
            content,
            title,
            header_image,
            thumbnail_image,
            new_slug,
            date,
            tags,
            1 if deleted else 0,
            byline,
            current_slug,
        ),
    )
    return new_slug


def soft_delete_post(conn: Any, slug: str) -> int:
    cur = conn.execute("UPDATE blogPosts SET deleted=1 WHERE slug=?", (slug,))
    return int(cur.rowcount or 0)

from __future__ import annotations

from typing import Any, List, Tuple


def visibility_predicate(*, authenticated: bool, now_ms: int) -> Tuple[str, List[Any]]:
    """WHERE clause (without the keyword) and params for listing posts.

    Anonymous readers only see live posts whose publish date has passed.
    A logged-in admin sees everything, including drafts scheduled for later
    and soft-deleted posts, so they can be edited or restored.
    """
    if authenticated:
        return "1=1", []
    return "date <= ? AND deleted = 0", [int(now_ms)]

"""Authentication helpers.

Auth is intentionally minimal:

- A `users` table with username + password hash (one admin in practice)
- Short-lived JWT access tokens (`Authorization: Bearer <token>`)

Two dependency flavours exist: `require_user` rejects anonymous callers,
`optional_user` lets them through so handlers can decide what to show.
"""

from .deps import optional_user, require_user
from .crud import create_user, get_user_by_username

__all__ = [
    "optional_user",
    "require_user",
    "create_user",
    "get_user_by_username",
]

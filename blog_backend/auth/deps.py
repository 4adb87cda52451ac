from __future__ import annotations

from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import APIKeyHeader

from blog_backend.context import AppContext, get_context

from .security import decode_access_token


# Raw header; the scheme word is not checked, only the token after it.
_authorization = APIKeyHeader(name="Authorization", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=403, detail=detail)


def _identity(payload: Dict[str, Any]) -> Dict[str, Any]:
    user_id = payload.get("userID")
    if user_id is None:
        raise ValueError("token_missing_user_id")
    return {"userID": int(user_id)}


def _token(header: Optional[str]) -> str | None:
    """Second word of `Authorization: <scheme> <token>`, or None."""
    parts = (header or "").split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def require_user(
    authorization: Optional[str] = Depends(_authorization),
    ctx: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """Authenticate a request or stop it.

    - No `Authorization: Bearer <jwt>` header, or no token after the scheme -> 401
    - Token with a bad signature, expired, or without a user id -> 403
    """

    token = _token(authorization)
    if not token:
        raise _unauthorized("missing_token")

    try:
        payload = decode_access_token(token=token, secret=ctx.cfg.SECRET_KEY)
        return _identity(payload)
    except jwt.ExpiredSignatureError:
        raise _forbidden("token_expired")
    except (jwt.InvalidTokenError, ValueError, TypeError):
        raise _forbidden("token_invalid")


def optional_user(
    authorization: Optional[str] = Depends(_authorization),
    ctx: AppContext = Depends(get_context),
) -> Optional[Dict[str, Any]]:
    """Like `require_user`, but anonymous (None) instead of an error."""

    token = _token(authorization)
    if not token:
        return None

    try:
        payload = decode_access_token(token=token, secret=ctx.cfg.SECRET_KEY)
        return _identity(payload)
    except (jwt.InvalidTokenError, ValueError, TypeError):
        return None

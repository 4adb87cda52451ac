from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from passlib.context import CryptContext


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"


def hash_password(password: str) -> str:
    """Slow salted hash for the `users.passwordHash` column."""
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a login attempt. Blank input or an unreadable hash is a plain mismatch."""
    if not (password and password_hash):
        return False
    try:
        return _pwd.verify(password, password_hash)
    except ValueError:
        # Unrecognized or malformed hash.
        return False


def create_access_token(*, secret: str, user_id: int, expires_minutes: int) -> str:
    """Sign a token whose only identity claim is `userID`."""
    if not secret:
        raise ValueError("jwt_secret_blank")

    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=max(1, int(expires_minutes)))

    payload: Dict[str, Any] = {
        "userID": int(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def decode_access_token(*, token: str, secret: str) -> Dict[str, Any]:
    """Return the claims of a token signed with `secret`.

    Raises jwt.ExpiredSignatureError past `exp`, another jwt.InvalidTokenError
    for a bad signature or garbage, and ValueError for blank arguments.
    """
    if not (token and secret):
        raise ValueError("token_or_secret_blank")
    return jwt.decode(token, secret, algorithms=[_JWT_ALG])

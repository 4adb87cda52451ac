"""
Tests for password hashing and JWT helpers.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from blog_backend.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestPasswords:

    def test_hash_then_verify(self):
        h = hash_password("password123")
        assert h != "password123"
        assert verify_password("password123", h) is True
        assert verify_password("wrong", h) is False

    def test_blank_password_rejected(self):
        with pytest.raises(ValueError):
            hash_password("")

    def test_verify_against_garbage_hash(self):
        assert verify_password("password123", "not-a-hash") is False
        assert verify_password("password123", "") is False


class TestTokens:

    def test_payload_carries_user_id_and_six_hour_expiry(self):
        token = create_access_token(secret="s3cret", user_id=7, expires_minutes=360)
        payload = decode_access_token(token=token, secret="s3cret")

        assert payload["userID"] == 7
        assert payload["exp"] - payload["iat"] == 6 * 60 * 60

    def test_wrong_secret_fails(self):
        token = create_access_token(secret="s3cret", user_id=1, expires_minutes=360)
        with pytest.raises(jwt.InvalidSignatureError):
            decode_access_token(token=token, secret="other")

    def test_expired_fails(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode({"userID": 1, "exp": int(past.timestamp())}, "s3cret", algorithm="HS256")
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_access_token(token=token, secret="s3cret")

    def test_blank_secret_refused(self):
        with pytest.raises(ValueError):
            create_access_token(secret="", user_id=1, expires_minutes=360)

    def test_decode_blank_arguments_refused(self):
        with pytest.raises(ValueError):
            decode_access_token(token="", secret="s3cret")
        with pytest.raises(ValueError):
            decode_access_token(token="a.b.c", secret="")

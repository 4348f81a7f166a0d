"""Tests for password hashing, session tokens and reset-token helpers."""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from app.config import get_settings
from app.core.security import (
    create_session_token,
    decode_session_token,
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_is_not_plaintext_and_verifies(self):
        hashed = hash_password("p")
        assert hashed != "p"
        assert hashed.startswith("$2b$")
        assert verify_password("p", hashed)

    def test_wrong_password_rejected(self):
        assert not verify_password("wrong", hash_password("p"))

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_uses_at_least_ten_rounds(self):
        rounds = int(hash_password("p").split("$")[2])
        assert rounds >= 10

    def test_garbage_hash_does_not_raise(self):
        assert verify_password("p", "not-a-hash") is False


class TestSessionToken:
    def test_round_trip_claims(self):
        """A token decodes to the same user id and username it was issued with."""
        token = create_session_token("user-1", "alice", "Alice")
        payload = decode_session_token(token)
        assert payload["sub"] == "user-1"
        assert payload["username"] == "alice"
        assert payload["displayName"] == "Alice"
        assert payload["type"] == "access"

    def test_default_lifetime_is_48_hours(self):
        payload = decode_session_token(create_session_token("u", "alice", "Alice"))
        assert payload["exp"] - payload["iat"] == 48 * 3600

    def test_expired_token_rejected(self):
        token = create_session_token("u", "alice", "Alice", expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_session_token(token)

    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "u", "type": "access"}, "another-secret", algorithm="HS256")
        with pytest.raises(JWTError):
            decode_session_token(token)

    def test_token_without_type_rejected(self):
        settings = get_settings()
        token = jwt.encode({"sub": "u"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        with pytest.raises(JWTError):
            decode_session_token(token)


class TestResetTokenHelpers:
    def test_tokens_are_unique_and_long(self):
        tokens = {generate_reset_token() for _ in range(50)}
        assert len(tokens) == 50
        # 32 random bytes, base64url without padding
        assert all(len(t) >= 43 for t in tokens)

    def test_hash_is_stable_sha256_hex(self):
        digest = hash_reset_token("abc")
        assert digest == hash_reset_token("abc")
        assert len(digest) == 64
        assert digest != "abc"

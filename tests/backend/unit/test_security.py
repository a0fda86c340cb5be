"""
Unit tests for core.security module.
Tests password hashing and session token issuance.
"""
from chatrelay.core.security import (
    hash_password,
    verify_password,
    new_session_token,
    token_fingerprint,
)


class TestPasswordHashing:
    """Tests for password hashing and verification."""

    def test_hash_password_returns_different_hash_each_time(self):
        """Password hashing should produce different hashes (salt included)."""
        password = "TestPassword123"
        assert hash_password(password) != hash_password(password)

    def test_hash_password_is_not_plain_text(self):
        hashed = hash_password("TestPassword123")
        assert isinstance(hashed, str)
        assert hashed != "TestPassword123"
        assert hashed.startswith("$argon2")

    def test_verify_password_correct_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("TestPassword123", hashed) is True

    def test_verify_password_incorrect_password(self):
        hashed = hash_password("TestPassword123")
        assert verify_password("WrongPassword456", hashed) is False

    def test_verify_password_empty_password(self):
        hashed = hash_password("")
        assert verify_password("", hashed) is True
        assert verify_password("not_empty", hashed) is False

    def test_verify_password_unknown_hash_format(self):
        """A value that is not a recognised hash never verifies."""
        assert verify_password("secret", "not-a-hash") is False


class TestSessionTokens:
    """Tests for opaque session token generation."""

    def test_tokens_are_unique(self):
        tokens = {new_session_token() for _ in range(200)}
        assert len(tokens) == 200

    def test_token_has_at_least_128_bits(self):
        # urlsafe base64: 16 bytes -> 22 chars
        assert len(new_session_token()) >= 22

    def test_token_is_urlsafe(self):
        token = new_session_token()
        assert all(c.isalnum() or c in "-_" for c in token)

    def test_fingerprint_hides_most_of_token(self):
        token = new_session_token()
        fp = token_fingerprint(token)
        assert fp.startswith(token[:6])
        assert token not in fp

    def test_fingerprint_of_missing_token(self):
        assert token_fingerprint(None) == "<none>"
        assert token_fingerprint("") == "<none>"

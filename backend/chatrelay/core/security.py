# chatrelay/core/security.py
"""
Security module for authentication.
Handles password hashing and opaque session token issuance.
"""
import secrets
from passlib.context import CryptContext

from chatrelay.config import settings

# Password hashing context
# Argon2 is a modern, secure password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns False for malformed or unknown hash formats instead of raising.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def new_session_token() -> str:
    """
    Generate a fresh, unguessable session token.

    The token is opaque to clients: it carries no claims and is only
    meaningful as an exact match against the stored value on the user row.
    """
    return secrets.token_urlsafe(max(settings.session_token_bytes, 16))


def token_fingerprint(token: str | None) -> str:
    """Short, log-safe prefix of a token."""
    if not token:
        return "<none>"
    return token[:6] + "…"

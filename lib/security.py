# =============================================================================
# lib/security.py - Password Hashing
# =============================================================================
# bcrypt helpers for commissioner passwords.
# =============================================================================

import bcrypt

from app.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain text password
        rounds: Cost factor (defaults to settings.BCRYPT_ROUNDS)

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Verify a password against a bcrypt hash with constant-time comparison.

    Returns False for a missing or malformed hash.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False

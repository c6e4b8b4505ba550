"""Password hashing helpers."""

from __future__ import annotations

import bcrypt

from .config import settings

# bcrypt only considers the first 72 bytes of a secret.
BCRYPT_MAX_SECRET_BYTES = 72


def _encode_secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_SECRET_BYTES]


def hash_password(password: str) -> str:
    """Return a salted bcrypt digest for the given plaintext password."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode_secret(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode_secret(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed or non-bcrypt digest.
        return False


__all__ = ["hash_password", "verify_password"]

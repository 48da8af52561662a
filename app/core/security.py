"""Security primitives for password workflows."""

from __future__ import annotations

import hashlib
import hmac
import secrets

_SALT_BYTES = 16


def hash_password(password: str, pepper: str = "", salt: str | None = None) -> str:
    """Return a `salt$digest` string for storage."""
    salt = salt if salt is not None else secrets.token_hex(_SALT_BYTES)
    value = f"{pepper}:{salt}:{password}".encode("utf-8")
    return f"{salt}${hashlib.sha256(value).hexdigest()}"


def verify_password(password: str, hashed_password: str, pepper: str = "") -> bool:
    """Constant-time comparison for hashed password values."""
    salt, sep, _digest = hashed_password.partition("$")
    if not sep:
        return False
    candidate = hash_password(password=password, pepper=pepper, salt=salt)
    return hmac.compare_digest(candidate, hashed_password)

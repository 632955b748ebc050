"""
Password policy, hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import re

import bcrypt

from auth.errors import PasswordHashError

_PASSWORD_RE = re.compile(r"(?=.*[A-Za-z])(?=.*[0-9])[A-Za-z0-9]{6,}")

# bcrypt only looks at the first 72 bytes of the secret.
_BCRYPT_MAX_BYTES = 72


def is_valid_password(password: object) -> bool:
    """At least 6 ASCII letters/digits, with at least one of each."""
    if not isinstance(password, str):
        return False
    return _PASSWORD_RE.fullmatch(password) is not None


def _encode(password: str) -> bytes:
    # Lone surrogates (e.g. a JSON "\ud800" escape) still encode to bytes.
    return password.encode("utf-8", errors="surrogatepass")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt (fresh salt on every call)."""
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Constant-time comparison against a bcrypt hash.

    A wrong password returns ``False``; a stored hash bcrypt cannot read
    raises ``PasswordHashError``.
    """
    candidate = _encode(password)
    try:
        stored = password_hash.encode("utf-8")
        return bcrypt.checkpw(candidate, stored)
    except (ValueError, TypeError, AttributeError) as exc:
        raise PasswordHashError("stored password hash is unreadable") from exc

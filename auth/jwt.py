"""
Access-token creation and verification.

Tokens are compact HS256 JWTs carrying the caller's claims plus ``iat`` and
``exp``.  The signing secret is passed in by the caller (see
``config.jwt_secret``); an empty secret is refused rather than used.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import jwt

from auth.errors import InvalidTokenError, TokenConfigError

DEFAULT_TTL_SECONDS = 86400
DEFAULT_ALGORITHM = "HS256"


def _require_secret(secret: Optional[str]) -> str:
    if not secret:
        raise TokenConfigError("token signing secret is not configured")
    return secret


def create_token(
    claims: Dict[str, Any],
    secret: Optional[str],
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
    *,
    algorithm: str = DEFAULT_ALGORITHM,
    now: Optional[float] = None,
) -> str:
    """Sign ``claims`` with ``iat`` = now and ``exp`` = now + ``ttl_seconds``."""
    key = _require_secret(secret)
    issued_at = int(now if now is not None else time.time())
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + ttl_seconds
    return jwt.encode(payload, key, algorithm=algorithm)


def verify_token(
    token: str,
    secret: Optional[str],
    *,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the decoded claims.

    Raises ``InvalidTokenError`` for tampered, malformed or expired tokens.
    """
    key = _require_secret(secret)
    try:
        return jwt.decode(
            token,
            key,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(f"Invalid or expired token: {exc}") from exc

"""
Registration and authentication flows.

Both flows receive their collaborators (store, secret, work factor) through
the constructor.  Expected outcomes are raised as ``AuthError`` subclasses;
anything else that goes wrong is logged and re-raised as
``InternalFailureError`` so callers never see driver or library detail.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from auth.errors import (
    AuthError,
    DuplicateUsernameError,
    InternalFailureError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingAccountFieldError,
    WeakPasswordError,
)
from auth.jwt import DEFAULT_ALGORITHM, DEFAULT_TTL_SECONDS, create_token, verify_token
from auth.models import AccessToken, Account, TokenClaims
from auth.password import hash_password, is_valid_password, verify_password
from auth.store import AccountStore

logger = logging.getLogger(__name__)


class RegistrationFlow:
    def __init__(self, store: AccountStore, *, bcrypt_rounds: int = 10) -> None:
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, username: str, email: str, password: str) -> Account:
        """
        Create an account.

        Order matters: a taken username is reported before a weak password.
        Nothing is written until the password has passed the policy and been
        hashed.
        """
        if not username or not email:
            raise MissingAccountFieldError()

        try:
            if await self.store.find_by_username(username) is not None:
                raise DuplicateUsernameError()

            if not is_valid_password(password):
                raise WeakPasswordError()

            password_hash = await asyncio.to_thread(
                hash_password, password, self.bcrypt_rounds
            )
            account = Account(username=username, email=email, password_hash=password_hash)

            if not await self.store.insert_if_absent(account):
                raise DuplicateUsernameError()
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Registration failed for %s", username)
            raise InternalFailureError("registration failed") from exc

        logger.info("Registered user %s", username)
        return account


class AuthenticationFlow:
    def __init__(
        self,
        store: AccountStore,
        secret: Optional[str],
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self.store = store
        self.secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm

    async def authenticate(self, username: str, password: str) -> AccessToken:
        """Check credentials and issue a signed access token."""
        try:
            account = await self.store.find_by_username(username)
            # Unknown user and wrong password are indistinguishable to the caller.
            if account is None:
                raise InvalidCredentialsError()

            matches = await asyncio.to_thread(
                verify_password, password, account.password_hash
            )
            if not matches:
                raise InvalidCredentialsError()

            token = create_token(
                {"username": account.username, "email": account.email},
                self.secret,
                self.ttl_seconds,
                algorithm=self.algorithm,
            )
            claims = self.verify(token)
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Login failed for %s", username)
            raise InternalFailureError("login failed") from exc

        logger.info("Login: %s", account.username)
        return AccessToken(token=token, claims=claims)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode a token issued by ``authenticate``.

        Raises ``InvalidTokenError`` for bad or expired tokens and
        ``TokenConfigError`` when no secret is configured.
        """
        payload = verify_token(token, self.secret, algorithm=self.algorithm)
        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise InvalidTokenError("token is missing account claims") from exc

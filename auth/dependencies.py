"""
FastAPI dependencies for authentication.

Builds the account store and the two flows from ``config`` and provides
``get_current_claims`` for routes that require a Bearer token.  Tests swap
the store through ``app.dependency_overrides[get_account_store]``.
"""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.errors import InvalidTokenError, TokenConfigError
from auth.models import TokenClaims
from auth.service import AuthenticationFlow, RegistrationFlow
from auth.store import AccountStore
from config.settings import config

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer()


def get_account_store() -> AccountStore:
    from database.accounts import SqlAccountStore
    from database.session import get_session_factory

    return SqlAccountStore(get_session_factory())


def get_registration_flow(
    store: AccountStore = Depends(get_account_store),
) -> RegistrationFlow:
    return RegistrationFlow(store, bcrypt_rounds=config.bcrypt_rounds)


def get_authentication_flow(
    store: AccountStore = Depends(get_account_store),
) -> AuthenticationFlow:
    return AuthenticationFlow(
        store,
        config.jwt_secret,
        ttl_seconds=config.jwt_expiry_seconds,
        algorithm=config.jwt_algorithm,
    )


async def get_current_claims(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    flow: AuthenticationFlow = Depends(get_authentication_flow),
) -> TokenClaims:
    """Verify the Bearer token and return its claims."""
    try:
        return flow.verify(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    except TokenConfigError:
        logger.error("JWT_SECRET is not set; cannot verify tokens")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="token verification unavailable",
        )

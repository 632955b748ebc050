"""Domain models shared by the account flows, stores and routes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    username: str
    email: str
    password_hash: str


class TokenClaims(BaseModel):
    username: str
    email: str
    iat: int
    exp: int


class AccessToken(BaseModel):
    token: str
    claims: TokenClaims

"""
Auth API routes — register, login.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from auth.dependencies import get_authentication_flow, get_registration_flow
from auth.errors import AuthError
from auth.service import AuthenticationFlow, RegistrationFlow

router = APIRouter(tags=["auth"])


# ── Request / response schemas ─────────────────────────────────────────


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    accessToken: str


def _error_response(exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={409: {"model": MessageResponse}, 400: {"model": MessageResponse}},
)
async def register(
    req: RegisterRequest,
    flow: RegistrationFlow = Depends(get_registration_flow),
) -> Any:
    """Register a new user."""
    try:
        await flow.register(req.username, req.email, req.password)
    except AuthError as exc:
        return _error_response(exc)
    return {"message": "user registered successfully"}


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": MessageResponse}},
)
async def login(
    req: LoginRequest,
    flow: AuthenticationFlow = Depends(get_authentication_flow),
) -> Any:
    """Login with username + password."""
    try:
        issued = await flow.authenticate(req.username, req.password)
    except AuthError as exc:
        return _error_response(exc)
    return {"accessToken": issued.token}

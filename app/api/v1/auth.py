"""Login, logout, sign-up and refresh-token endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_context, get_runtime
from app.runtime import Runtime
from app.schemas.auth import (
    AuthPayloadOut,
    ErrorResponse,
    LoginRequest,
    OkResponse,
    RefreshTokenRequest,
    SignUpRequest,
    UserTokens,
)
from app.services.gate import RequestContext

router = APIRouter(responses={401: {"model": ErrorResponse}})


@router.post("/login", response_model=AuthPayloadOut)
async def login(
    body: LoginRequest,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> AuthPayloadOut:
    """
    Authenticate with email and password; returns the user and a token pair.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    payload = await runtime.operations.execute(
        "login", context, email=body.email, password=body.password
    )
    return AuthPayloadOut.model_validate(payload)


@router.post("/logout", response_model=OkResponse)
async def logout(
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> OkResponse:
    """End the session behind the caller's access token."""
    ok = await runtime.operations.execute("logout", context)
    return OkResponse(ok=ok)


@router.post("/refresh", response_model=UserTokens)
async def refresh_access_token(
    body: RefreshTokenRequest,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> UserTokens:
    """Exchange a live refresh token for a new access token; the refresh token is returned unchanged."""
    tokens = await runtime.operations.execute(
        "refreshAccessToken", context, refresh_token=body.refresh_token
    )
    return UserTokens.model_validate(tokens)


@router.post("/revoke", response_model=OkResponse)
async def revoke_refresh_token(
    body: RefreshTokenRequest,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> OkResponse:
    ok = await runtime.operations.execute(
        "revokeRefreshToken", context, refresh_token=body.refresh_token
    )
    return OkResponse(ok=ok)


@router.post("/signup", response_model=AuthPayloadOut, status_code=201)
async def sign_up(
    body: SignUpRequest,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> AuthPayloadOut:
    """Register a USER account and issue its first token pair."""
    payload = await runtime.operations.execute(
        "signUp", context, name=body.name, email=body.email, password=body.password
    )
    return AuthPayloadOut.model_validate(payload)

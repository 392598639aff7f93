"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthPayloadOut,
    ChangeRoleRequest,
    ErrorResponse,
    LoginRequest,
    OkResponse,
    PreRegisteredUserInput,
    PreRegisteredUserOut,
    PreRegisteredUsersListResponse,
    RefreshTokenRequest,
    SignUpRequest,
    UserOut,
    UsersListResponse,
    UserTokens,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthPayloadOut",
    "ChangeRoleRequest",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "OkResponse",
    "PreRegisteredUserInput",
    "PreRegisteredUserOut",
    "PreRegisteredUsersListResponse",
    "RefreshTokenRequest",
    "SignUpRequest",
    "UserOut",
    "UsersListResponse",
    "UserTokens",
]

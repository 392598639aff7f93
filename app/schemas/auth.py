"""Request/response schemas for auth, user and invite-list endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from app.domain import Role


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SignUpRequest(BaseModel):
    """New account details. Password policy is enforced by the service."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., max_length=128)


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token from login or sign-up")


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., min_length=1, max_length=32, description="USER or ADMIN (any case)")


class PreRegisteredUserInput(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)


class UserTokens(BaseModel):
    """Access + refresh token pair. Send the access token as: Bearer <access_token>"""

    model_config = ConfigDict(from_attributes=True)

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserOut(BaseModel):
    """Public user fields (never the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    role: Role
    created_at: int
    updated_at: int


class AuthPayloadOut(BaseModel):
    """Response for login and sign-up."""

    model_config = ConfigDict(from_attributes=True)

    user: UserOut
    tokens: UserTokens


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]


class PreRegisteredUserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    created_at: int
    updated_at: int


class PreRegisteredUsersListResponse(BaseModel):
    pre_registered_users: list[PreRegisteredUserOut]


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    """Error body for every non-2xx response, request validation failures included."""

    detail: str
    code: str

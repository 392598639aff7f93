"""User profile and administration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_context, get_runtime
from app.runtime import Runtime
from app.schemas.auth import ChangeRoleRequest, ErrorResponse, UserOut, UsersListResponse
from app.services.gate import RequestContext

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    }
)


@router.get("/me", response_model=UserOut)
async def current_user(
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> UserOut:
    user = await runtime.operations.execute("currentUser", context)
    return UserOut.model_validate(user)


@router.get("", response_model=UsersListResponse)
async def list_users(
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> UsersListResponse:
    """List all users (admin only)."""
    users = await runtime.operations.execute("listUsers", context)
    return UsersListResponse(users=[UserOut.model_validate(u) for u in users])


@router.get("/{user_id}", response_model=UserOut, responses={404: {"model": ErrorResponse}})
async def get_user(
    user_id: int,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> UserOut:
    """Fetch a profile: your own, or anyone's if you are an admin."""
    user = await runtime.operations.execute("getUser", context, user_id=user_id)
    return UserOut.model_validate(user)


@router.put("/{user_id}/role", response_model=UserOut, responses={404: {"model": ErrorResponse}})
async def change_user_role(
    user_id: int,
    body: ChangeRoleRequest,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> UserOut:
    """Set a user's role (admin only). Input is case-insensitive."""
    user = await runtime.operations.execute(
        "changeUserRole", context, user_id=user_id, role=body.role
    )
    return UserOut.model_validate(user)

"""Invite-list endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_context, get_runtime
from app.runtime import Runtime
from app.schemas.auth import (
    ErrorResponse,
    PreRegisteredUserInput,
    PreRegisteredUserOut,
    PreRegisteredUsersListResponse,
)
from app.services.gate import RequestContext

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    }
)


@router.get("", response_model=PreRegisteredUsersListResponse)
async def list_pre_registered_users(
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> PreRegisteredUsersListResponse:
    records = await runtime.operations.execute("listPreRegisteredUsers", context)
    return PreRegisteredUsersListResponse(
        pre_registered_users=[PreRegisteredUserOut.model_validate(r) for r in records]
    )


@router.post("", response_model=PreRegisteredUserOut, status_code=201)
async def add_pre_registered_user(
    body: PreRegisteredUserInput,
    runtime: Annotated[Runtime, Depends(get_runtime)],
    context: Annotated[RequestContext, Depends(get_context)],
) -> PreRegisteredUserOut:
    record = await runtime.operations.execute(
        "addPreRegisteredUser", context, email=body.email, name=body.name
    )
    return PreRegisteredUserOut.model_validate(record)

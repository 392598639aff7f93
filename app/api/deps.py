"""Request-scoped dependencies: the runtime and the per-call request context."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.runtime import Runtime
from app.services.gate import RequestContext

security = HTTPBearer(auto_error=False)


def get_runtime(request: Request) -> Runtime:
    return request.app.state.runtime


def get_context(
    runtime: Annotated[Runtime, Depends(get_runtime)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> RequestContext:
    """Build the call context. A missing token is not an error here; the gate decides."""
    token = credentials.credentials if credentials is not None else None
    return runtime.context(token)

"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from app.api.deps import get_runtime
from app.core.database import check_db_connected
from app.runtime import Runtime
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
async def get_health(runtime: Annotated[Runtime, Depends(get_runtime)]) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    connected = await run_in_threadpool(check_db_connected, runtime.engine)
    return HealthResponse(
        status="ok",
        environment=runtime.settings.APP_ENV,
        database="connected" if connected else "disconnected",
    )

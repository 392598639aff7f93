"""Exception handlers: user errors verbatim, everything else logged and masked."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.errors import AccountsError, InvalidUserInput

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_SERVER_ERROR"
MASKED_MESSAGE = "An error occurred. Please try again later."


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message, "code": code})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"query" prefix; callers know fields by name.
        loc = [str(p) for p in error.get("loc", ())[1:]]
        parts.append(f"{'.'.join(loc)}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or InvalidUserInput.default_message


def internal_error_response(request: Request, exc: Exception, settings: Settings) -> JSONResponse:
    logger.error(
        "Unhandled %s on %s %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc_info=exc,
    )
    message = MASKED_MESSAGE if not settings.is_dev else (str(exc) or type(exc).__name__)
    return _error_response(500, message, INTERNAL_ERROR_CODE)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(AccountsError)
    async def handle_accounts_error(request: Request, exc: AccountsError) -> JSONResponse:
        if not exc.user_facing:
            return internal_error_response(request, exc, settings)
        logger.info(
            "Request rejected: %s %s -> %s %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
        )
        return _error_response(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Invalid request body: %s %s", request.method, request.url.path)
        return _error_response(
            InvalidUserInput.status_code, _describe_validation_errors(exc), InvalidUserInput.code
        )

    @app.exception_handler(Exception)
    async def handle_uncaught(request: Request, exc: Exception) -> JSONResponse:
        return internal_error_response(request, exc, settings)

"""
Server-side exception types and their FastAPI handlers.
Handlers render every error as {"detail": ...} with the matching status code.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BasicAuthError(Exception):
    """Base exception for the auth service."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class UserAlreadyExistsError(BasicAuthError):
    status_code = 409
    detail = "User already exists"


class InvalidCredentialsError(BasicAuthError):
    status_code = 401
    detail = "Invalid credentials"


class UserNotFoundError(BasicAuthError):
    status_code = 404
    detail = "User not found"


class InvalidSecurityAnswerError(BasicAuthError):
    status_code = 401
    detail = "Invalid security answer"


class UnauthorizedError(BasicAuthError):
    status_code = 401
    detail = "Unauthorized"


async def basicauth_error_handler(request: Request, exc: BasicAuthError) -> JSONResponse:
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.detail)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s -> 400 invalid body at %s",
                request.method, request.url.path, [e.get("loc") for e in exc.errors()])
    return JSONResponse(status_code=400, content={"detail": "Invalid request body"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the service's exception handlers to an application."""
    app.add_exception_handler(BasicAuthError, basicauth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

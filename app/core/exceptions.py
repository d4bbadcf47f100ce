import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(AppError):
    pass


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, (AuthenticationError, Unauthorized)):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema failures on request bodies are reported as 400, not 422."""
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ValidationError.default_message, "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from drive_attendance.config import settings
from drive_attendance.utils.response import error_response

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong while processing the request"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    REMOTE_STORE = "remote_store"


class AppException(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION
    default_error = "Request failed"
    default_status = 400

    def __init__(self, message: str, error: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.error = error or self.default_error
        self.status_code = status_code or self.default_status

    def relabel(self, error: str) -> "AppException":
        """Return a copy of this error carrying an endpoint-specific label."""
        return type(self)(self.message, error=error, status_code=self.status_code)


class ValidationError(AppException):
    """A required field is missing, empty or malformed."""

    kind = ErrorKind.VALIDATION
    default_error = "Validation failed"
    default_status = 400


class ConfigurationError(AppException):
    """The service account file is missing or unusable."""

    kind = ErrorKind.CONFIGURATION
    default_error = "Configuration error"
    default_status = 500


class RemoteStoreError(AppException):
    """A Drive or Sheets call failed."""

    kind = ErrorKind.REMOTE_STORE
    default_error = "Remote store error"
    default_status = 500


def public_message(exc: AppException) -> str:
    if exc.status_code >= 500 and settings.is_production:
        return GENERIC_FAILURE_MESSAGE
    return exc.message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s on %s %s: %s", exc.error, request.method, request.url.path, exc.message
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.error, public_message(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_response("Invalid request", f"Invalid or missing fields: {fields}"),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        message = GENERIC_FAILURE_MESSAGE if settings.is_production else str(exc)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error", message),
        )

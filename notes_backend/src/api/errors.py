"""
Error types raised by the API layer and the handlers that turn any failure
into a JSON response of the form {"error": "..."}.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from notes_database.exceptions import DuplicateRecordError

logger = logging.getLogger(__name__)


class NotesAPIError(Exception):
    """Base for errors that map directly onto an HTTP status."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(NotesAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ForbiddenError(NotesAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to access this note"


class NotFoundError(NotesAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(NotesAPIError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


def _error_response(status_code, message, headers=None, **extra):
    return JSONResponse(status_code=status_code, content={"error": message, **extra}, headers=headers)


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(NotesAPIError)
    async def notes_api_error_handler(request: Request, exc: NotesAPIError):
        logger.info(
            exc.message,
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return _error_response(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(DuplicateRecordError)
    async def duplicate_record_handler(request: Request, exc: DuplicateRecordError):
        logger.warning(
            f"Unique constraint violated on {request.url.path}",
            extra={"path": request.url.path, "status_code": 409},
        )
        return _error_response(status.HTTP_409_CONFLICT, exc.message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
                "message": e["msg"],
            }
            for e in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", details=details)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Internal server error",
        )

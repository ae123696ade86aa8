# backend/errors.py
"""Error taxonomy of the catalog API and the FastAPI handlers that render it.

Every failure leaves the service as ``{"error": "<message>"}`` with the
status code of its category. Unexpected exceptions are logged with their
traceback and collapsed into a generic ``Server error``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("errors")


# ============================================================
# 🔹 Exception hierarchy
# ============================================================
class CatalogError(Exception):
    """Base class for failures reported to the client with a specific status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class UnauthorizedError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized. Please login first."


class InvalidCredentialsError(UnauthorizedError):
    # Same message for unknown email and wrong password.
    default_message = "Invalid credentials"

    def __init__(self):
        super().__init__(self.default_message)


class ForbiddenError(CatalogError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden. You can only modify your own data."


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(CatalogError):
    pass


# ============================================================
# 🔹 Handlers
# ============================================================
def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on ``app``."""

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"⚠️ Malformed request on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": ValidationError.default_message},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": ServerError.default_message},
        )

"""Error taxonomy and HTTP error mapping for the TopUp Store API."""
from typing import Any, Dict, Optional, Tuple
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TopUpStoreError(Exception):
    """Base error. Every subclass carries the HTTP status it surfaces as."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(TopUpStoreError):
    status_code = 400
    default_message = "Invalid payload"


class AuthError(TopUpStoreError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(TopUpStoreError):
    status_code = 404
    default_message = "Not found"


class ConflictError(TopUpStoreError):
    status_code = 409
    default_message = "Email already registered"


class GatewayError(TopUpStoreError):
    status_code = 500
    default_message = "Gateway error"


class GatewayTimeoutError(GatewayError):
    status_code = 504
    default_message = "Gateway timeout"


class StoreError(TopUpStoreError):
    status_code = 500
    default_message = "Database error"


def error_body(message: str) -> Dict[str, Any]:
    return {"status": "error", "message": message}


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Tuple[int, Dict[str, Any]]:
        if isinstance(exc, TopUpStoreError):
            if exc.status_code >= 500:
                logger.error("Request failed (%s): %s context=%s", type(exc).__name__, exc.message, context or {})
            else:
                logger.warning("Request rejected (%s): %s", type(exc).__name__, exc.message)
            return exc.status_code, error_body(exc.message)

        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return 500, error_body(TopUpStoreError.default_message)


def register_exception_handlers(app, handler: Optional[ErrorHandler] = None) -> None:
    """Install JSON error responses ``{"status": "error", "message": ...}`` on a FastAPI app."""
    handler = handler or ErrorHandler()

    @app.exception_handler(TopUpStoreError)
    async def _topup_error(request: Request, exc: TopUpStoreError):
        status_code, body = handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Invalid payload on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=error_body(ValidationError.default_message))

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        status_code, body = handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=status_code, content=body)

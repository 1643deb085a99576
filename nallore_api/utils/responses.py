"""
Response normalization.
Maps every failure to the JSON envelope {"error": ..., "detail": ...} with
its HTTP status. Store failures keep the driver message for diagnostics;
stack traces and statement text never reach the client.
"""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException
import logging

from nallore_api.errors import ContentAPIError

logger = logging.getLogger(__name__)


def error_body(title: str, detail) -> dict:
    """Uniform error envelope."""
    return {"error": title, "detail": detail}


def add_cors_headers(response: JSONResponse, request: Request) -> JSONResponse:
    """
    Add CORS headers to error responses.
    Handlers registered on the app bypass the CORS middleware for unhandled
    exceptions, so the headers are set explicitly.

    Args:
        response: The JSONResponse to add headers to
        request: The incoming request

    Returns:
        JSONResponse with CORS headers added
    """
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"

    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ContentAPIError)
    async def content_error_handler(request: Request, exc: ContentAPIError):
        """Handle taxonomy errors raised by handlers and the access gate."""
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        response = JSONResponse(status_code=exc.status_code, content=exc.to_response())
        return add_cors_headers(response, request)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle framework HTTP exceptions (unknown routes, wrong methods)."""
        # Handle both string and dict detail formats
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = error_body(str(exc.detail), str(exc.detail))

        response = JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)
        return add_cors_headers(response, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors (malformed body, path or query)."""
        logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        response = JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("Validation error", jsonable_encoder(exc.errors())),
        )
        return add_cors_headers(response, request)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        logger.warning(f"Rate limit exceeded on {request.url.path}: {exc.detail}")
        response = JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body("Rate limit exceeded", str(exc.detail)),
        )
        return add_cors_headers(response, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle anything else without leaking internals."""
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {str(exc)}",
            exc_info=True
        )
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "An unexpected error occurred"),
        )
        return add_cors_headers(response, request)

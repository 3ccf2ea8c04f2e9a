"""
API error types and the JSON error envelope.
Every failure leaves the API as {"success": false, "error": {"code", "message", "details"?}}.
"""

from typing import Any, Dict, Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class APIError(Exception):
    """Error that maps directly onto an HTTP status and error code."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Error body for the response envelope."""
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return error


class NotFoundError(APIError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource", details: Any = None):
        super().__init__(f"{resource} not found", details=details)


class ValidationError(APIError):
    status_code = 400
    code = "VALIDATION_ERROR"


class AlreadyRatedError(APIError):
    status_code = 400
    code = "ALREADY_RATED"

    def __init__(self, message: str = "You have already rated this dog"):
        super().__init__(message)


class UnauthorizedError(APIError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class ForbiddenError(APIError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class RateLimitedError(APIError):
    status_code = 429
    code = "RATE_LIMITED"

    def __init__(self, message: str = "Too many requests, please slow down"):
        super().__init__(message)


def success(data: Any = None, status_code: int = 200) -> JSONResponse:
    """Wrap data in the success envelope."""
    return JSONResponse(
        content={"success": True, "data": jsonable_encoder(data)},
        status_code=status_code,
    )


def error_response(
    code: str,
    message: str,
    status_code: int,
    details: Any = None,
) -> JSONResponse:
    """Build an error envelope response."""
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return JSONResponse(content={"success": False, "error": error}, status_code=status_code)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.code, exc.message, exc.status_code, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        errors.append({
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        })
    message = errors[0]["message"] if errors else "Invalid request"
    # pydantic prefixes custom validator messages
    message = message.removeprefix("Value error, ")
    return error_response("VALIDATION_ERROR", message, 400, errors)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(
            "NOT_FOUND",
            f"Route {request.method} {request.url.path} not found",
            404,
        )
    if exc.status_code == 405:
        return error_response(
            "NOT_FOUND",
            f"Route {request.method} {request.url.path} not found",
            405,
        )
    return error_response("BAD_REQUEST", str(exc.detail), exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("INTERNAL_ERROR", "Internal server error", 500)


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope error handlers on an app."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from tasklist.errors import (
    AuthenticationError,
    ConflictError,
    FieldValidationError,
    InvalidJsonError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred."


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, fields: dict[str, str] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content: dict[str, object] = {"message": message}
    if error_type:
        content["type"] = error_type
    if fields:
        content["fields"] = fields
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    fields = None
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ConflictError):
        status_code = 409
        error_type = "conflict"
    elif isinstance(exc, FieldValidationError):
        status_code = 422
        error_type = "field_validation_error"
        fields = exc.fields
    elif isinstance(exc, InvalidJsonError):
        status_code = 400
        error_type = "invalid_json"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type, fields=fields)


async def request_validation_error_handler(request: Request, exc: Exception) -> Response:
    """Map FastAPI request validation to invalid JSON (400) or per-field errors (422)."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []

    if any(error.get("type") == "json_invalid" for error in errors):
        return await user_error_handler(request, InvalidJsonError())

    fields: dict[str, str] = {}
    for error in errors:
        # Drop the leading "body"/"path"/"query" segment
        loc = [str(part) for part in error.get("loc", ())]
        name = ".".join(loc[1:]) or ".".join(loc)
        fields.setdefault(name, str(error.get("msg", "Invalid value")))
    return await user_error_handler(request, FieldValidationError(fields))


async def store_error_handler(_: Request, exc: Exception) -> Response:
    """Handle document store failures (500); details stay in the server log."""
    logger.exception("Store error: %s", exc)
    return create_json_error_response(status_code=500, message=GENERIC_ERROR_MESSAGE, error_type="internal_server_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(status_code=500, message=GENERIC_ERROR_MESSAGE, error_type="internal_server_error")

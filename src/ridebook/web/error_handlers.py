import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from ridebook.errors import ConflictExhaustedError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses as client-input errors."""
    if isinstance(exc, ValidationError):
        error_type = "validation_error"
    else:
        error_type = "bad_request"
    return create_json_error_response(status_code=400, message=str(exc), error_type=error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Report malformed request bodies with the same envelope as ValidationError."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    parts = []
    for error in errors:
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    message = "; ".join(parts) or "Invalid request"
    return create_json_error_response(status_code=400, message=message, error_type="validation_error")


async def allocation_error_handler(_: Request, exc: Exception) -> Response:
    """Handle transient allocation failures (503) so callers can retry automatically."""
    if isinstance(exc, ConflictExhaustedError):
        logger.warning("Allocation gave up under contention: %s", exc)
        return create_json_error_response(
            status_code=503, message=str(exc), error_type="conflict_exhausted", headers={"Retry-After": "1"}
        )
    if isinstance(exc, StoreUnavailableError):
        logger.error("Counter store unavailable: %s", exc)
        return create_json_error_response(
            status_code=503, message="Counter store is unavailable", error_type="store_unavailable"
        )
    logger.error("Allocation failed: %s", exc)
    return create_json_error_response(status_code=503, message="Allocation failed", error_type="allocation_error")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("Unexpected error: %s", exc)
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )


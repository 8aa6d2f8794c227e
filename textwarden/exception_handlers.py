"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert internal exceptions to HTTP responses
  - Structured error responses (RFC 7807 style)
  - Centralized logging of errors with correlation IDs

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: TextWardenError hierarchy
  - error_responses.py: Problem Details rendering

Constraints:
  - InvalidInputError -> 400, DetectionError -> 502
  - ConfigurationError -> 500 with its own code, others -> 500
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .error_responses import (
    AppHTTPException,
    app_exception_handler,
    configuration_error,
    detection_error,
    generic_exception_handler,
    internal_error,
    invalid_input,
    request_validation_handler,
)
from .exceptions import (
    ConfigurationError,
    DetectionError,
    InvalidInputError,
    TextWardenError,
)
from .logger import logger


async def invalid_input_handler(
    request: Request, exc: InvalidInputError
) -> JSONResponse:
    """Handle rejected analysis input."""
    logger.info(
        "Invalid input", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    app_exc = invalid_input(exc.message, errors=[{"error_id": exc.error_id}])
    return await app_exception_handler(request, app_exc)


async def detection_error_handler(request: Request, exc: DetectionError) -> JSONResponse:
    """Handle remote generation failures that escaped the detector fallback."""
    logger.error(
        "Detection error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    app_exc = detection_error(exc.message, errors=[{"error_id": exc.error_id}])
    return await app_exception_handler(request, app_exc)


async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error(
        "Configuration error",
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    app_exc = configuration_error(exc.message, errors=[{"error_id": exc.error_id}])
    return await app_exception_handler(request, app_exc)


async def textwarden_error_handler(
    request: Request, exc: TextWardenError
) -> JSONResponse:
    """Handle any other internal error."""
    logger.error(
        "TextWarden error",
        extra={
            "error_id": exc.error_id,
            "error_code": exc.error_code,
            "error_message": exc.message,
        },
    )
    app_exc = internal_error(exc.message, errors=[{"error_id": exc.error_id}])
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(DetectionError, detection_error_handler)
    app.add_exception_handler(ConfigurationError, configuration_error_handler)
    app.add_exception_handler(TextWardenError, textwarden_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

"""Error Handlers — every failure leaves the API in the PortfolioError envelope.

Invariants:
    - PortfolioError → its own to_response() at its own http_status
    - RequestValidationError → VALIDATION_ERROR (400) with one detail per field
    - Anything else → INTERNAL_ERROR (500), message never includes the exception text
    - 5xx logged at error level; 4xx at warning with the error code and path
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from portfolio.core.errors import ErrorCategory, ErrorSeverity, PortfolioError

logger = logging.getLogger(__name__)


def _envelope(
    code: str, message: str, category: ErrorCategory,
    severity: ErrorSeverity, **extra,
) -> dict:
    return {"error": {
        "code": code, "message": message,
        "category": category.value, "severity": severity.value, **extra,
    }}


def _field_details(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


async def _on_portfolio_error(request: Request, exc: PortfolioError):
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level, f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _on_invalid_request(request: Request, exc: RequestValidationError):
    details = _field_details(exc)
    logger.warning(
        f"Rejected payload on {request.url.path}: "
        f"{', '.join(d['field'] or 'body' for d in details)}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details=details,
        ),
    )


async def _on_unhandled(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc, extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain, validation and catch-all handlers on the app."""
    app.add_exception_handler(PortfolioError, _on_portfolio_error)
    app.add_exception_handler(RequestValidationError, _on_invalid_request)
    app.add_exception_handler(Exception, _on_unhandled)

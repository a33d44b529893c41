"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from loan_gateway.domain.exceptions import (
    DomainException,
    BorrowerNotFoundException,
    DuplicateBorrowerException,
    LoanNotFoundException,
    BrokerConnectionError,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Broker errors
    never reach end users verbatim.
    """

    @app.exception_handler(BorrowerNotFoundException)
    async def borrower_not_found_handler(
        request: Request,
        exc: BorrowerNotFoundException,
    ) -> JSONResponse:
        """Handle borrower not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(LoanNotFoundException)
    async def loan_not_found_handler(
        request: Request,
        exc: LoanNotFoundException,
    ) -> JSONResponse:
        """Handle loan not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(DuplicateBorrowerException)
    async def duplicate_borrower_handler(
        request: Request,
        exc: DuplicateBorrowerException,
    ) -> JSONResponse:
        """Handle duplicate borrower email errors."""
        return _error_response(409, exc.code, exc.message)

    @app.exception_handler(BrokerConnectionError)
    async def broker_error_handler(
        request: Request,
        exc: BrokerConnectionError,
    ) -> JSONResponse:
        """Handle message broker errors."""
        logger.error(
            "broker_error",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle invalid requests and other domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")

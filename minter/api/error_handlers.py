"""Error Handlers: global exception handlers for the minter API.

Invariants:
    - MinterError -> structured JSON with code, message, category, severity
    - ContractTransportError is an upstream (node / contract) failure: logged at
      error with the collection and operation, answered 502
    - Caller errors (4xx) are logged at warning with the same context
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from minter.core.errors import ContractTransportError, ErrorSeverity, MinterError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    _register_minter_error_handler(app)
    _register_upstream_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_minter_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MinterError)
    async def minter_error_handler(request: Request, exc: MinterError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(f"MinterError: {exc.message}", extra=_log_context(request, exc))
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_upstream_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ContractTransportError)
    async def upstream_error_handler(request: Request, exc: ContractTransportError):
        logger.error(
            f"Upstream contract call {exc.operation} failed: {exc.message}",
            extra=_log_context(request, exc),
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content=exc.to_response(),
        )


def _log_context(request: Request, exc: MinterError) -> dict:
    return {
        "error_code": exc.code,
        "path": request.url.path,
        "collection_id": exc.context.collection_id,
        "operation": exc.context.operation,
    }


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }

"""
API Error Envelope

Every failure becomes ``500 {"error": <message>}``; nothing is retried and no
partial result is returned. Store failures carry the driver's message, any
other exception its own.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import structlog

from bi_dashboard.exceptions import StoreError

logger = structlog.get_logger(__name__)


def _store_message(exc: Exception) -> str:
    # DBAPI errors carry the driver's message on .orig
    original = getattr(exc, "orig", None)
    return str(original) if original is not None else str(exc)


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report a store failure with the underlying message."""
    message = _store_message(exc)
    logger.error(
        "Store error",
        path=request.url.path,
        error=message,
        error_type=type(exc).__name__,
    )
    return _error_response(message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so unexpected failures keep the same envelope."""
    logger.exception(
        "Unhandled error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _error_response(str(exc) or type(exc).__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on ``app``."""
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    # Starlette runs this from ServerErrorMiddleware and re-raises afterwards
    # for the server to log; the client still gets the JSON body.
    app.add_exception_handler(Exception, unhandled_error_handler)

"""Translate message store errors into HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from infrastructure.logging import get_correlation_id, get_module_logger
from modules.messages.errors import (
    InvalidQueryError,
    PagingStateError,
    PersistenceError,
)

logger = get_module_logger()


async def invalid_query_handler(_request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def paging_state_handler(_request: Request, exc: Exception):
    return JSONResponse(status_code=400, content={"message": str(exc)})


async def persistence_error_handler(request: Request, exc: Exception):
    result = getattr(exc, "result", None)
    logger.error(
        "message_store_unavailable",
        path=request.url.path,
        error=str(exc),
        error_code=getattr(result, "error_code", None),
    )
    return JSONResponse(
        status_code=503,
        content={
            "message": "message store unavailable",
            "correlation_id": get_correlation_id(),
        },
    )


def setup_error_handlers(app: FastAPI):
    """Register the message store exception handlers on ``app``."""
    app.add_exception_handler(InvalidQueryError, invalid_query_handler)
    app.add_exception_handler(PagingStateError, paging_state_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)

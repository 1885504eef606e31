"""Map marketplace errors onto HTTP responses.

Every error body has the shape ``{"error": {"kind": ..., "messages": {...}}}``.
Protean's own handlers are registered first; the handlers below replace them
for the exceptions the marketplace renders itself.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from marketplace.errors import MarketplaceError

logger = structlog.get_logger(__name__)

STATUS_BY_KIND = {
    "validation": 400,
    "authorization": 403,
    "not_found": 404,
    "state": 409,
    "conflict": 409,
    "internal": 500,
}


def error_response(kind: str, messages: dict) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"error": {"kind": kind, "messages": messages}},
    )


async def _marketplace_error(request: Request, exc: MarketplaceError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, kind=exc.kind, messages=exc.messages)
    if exc.kind == "internal":
        return error_response("internal", {"error": ["Internal error"]})
    return error_response(exc.kind, exc.messages)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Request rejected", path=request.url.path, kind="validation", messages=exc.messages)
    return error_response("validation", exc.messages)


async def _stale_write(request: Request, exc: ExpectedVersionError) -> JSONResponse:
    logger.warning("Concurrent modification", path=request.url.path, detail=str(exc))
    return error_response("state", {"version": ["The record was modified concurrently, retry the operation"]})


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, exc_info=exc)
    return error_response("internal", {"error": ["Internal error"]})


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's handlers plus the marketplace error mapping on ``app``."""
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(ExpectedVersionError, _stale_write)
    app.add_exception_handler(MarketplaceError, _marketplace_error)
    app.add_exception_handler(Exception, _unexpected_error)

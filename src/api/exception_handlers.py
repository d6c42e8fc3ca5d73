# src/api/exception_handlers.py

"""Map catalog errors onto ``{"success": false, "error": ...}`` responses.

Expected failures carry their own status code and public message.
Anything else becomes a generic 500; the traceback is logged here and
never sent to the client.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.errors import CatalogError

logger = logging.getLogger("jewelry_catalog.api")


def error_response(status_code: int, message: str) -> JSONResponse:
    """Create the standard failure body."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def catalog_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Translate a :class:`CatalogError` into its HTTP response."""
    if not isinstance(exc, CatalogError):
        return await unhandled_error_handler(request, exc)
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.detail,
    )
    return error_response(exc.status_code, exc.public_message)


async def unhandled_error_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unexpected exceptions."""
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the catalog exception handlers on *app*."""
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

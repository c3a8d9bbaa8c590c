"""Translation of domain and provider errors into HTTP responses.

Only the failures a client can cause are mapped.  Contract violations
(AssertionError) and anything unexpected fall through to the runtime's
default 500 handling.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm.exc import StaleDataError

from crudkit.domain.exceptions import CrudError, EntityNotFoundError, NamedQueryError

logger = logging.getLogger(__name__)


class InvalidRequestError(CrudError):
    """Raised when a request body or selector cannot be understood."""


def _error_body(exc: Exception) -> dict:
    if isinstance(exc, CrudError):
        return {"error": type(exc).__name__, "message": exc.message, "details": exc.details}
    return {"error": type(exc).__name__, "message": str(exc), "details": {}}


def _handler(status_code: int):
    async def handle(request: Request, exc: Exception) -> JSONResponse:
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, status_code, exc
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc))

    return handle


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EntityNotFoundError, _handler(status.HTTP_404_NOT_FOUND))
    app.add_exception_handler(NamedQueryError, _handler(status.HTTP_400_BAD_REQUEST))
    app.add_exception_handler(InvalidRequestError, _handler(status.HTTP_400_BAD_REQUEST))
    app.add_exception_handler(StaleDataError, _handler(status.HTTP_409_CONFLICT))

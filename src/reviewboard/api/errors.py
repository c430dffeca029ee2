"""HTTP mapping for registry errors.

Protean's own handlers answer 400/404/409/422 by exception family; these
handlers give the registry errors their specific status codes while keeping
Protean's ``{"error": ...}`` body shape.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reviewboard.registry.errors import (
    InsufficientPayment,
    ReviewNotFound,
    TransferFailed,
    Unauthorized,
)

_STATUS_CODES = {
    Unauthorized: 403,
    InsufficientPayment: 402,
    ReviewNotFound: 404,
    TransferFailed: 502,
}


def register_registry_exception_handlers(app: FastAPI) -> None:
    """Attach the registry error handlers to ``app``."""

    async def _handle(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        return JSONResponse(
            status_code=_STATUS_CODES[type(exc)],
            content={"error": exc.messages},
        )

    for exc_class in _STATUS_CODES:
        app.add_exception_handler(exc_class, _handle)

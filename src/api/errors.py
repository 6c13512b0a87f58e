"""Error rendering.

Every error leaves the API as a JSON object with a human-readable ``msg``
(or ``error``) field. Stack traces only go to the logs.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.model.errors import ValidationError

logger = logging.getLogger(__name__)


def validation_error_detail(error: ValidationError) -> dict | str:
    """HTTPException detail for a domain ValidationError.

    Schema failures carry per-field details and are rendered as
    ``{"error": ..., "details": {...}}``; plain failures as ``{"msg": ...}``.
    """
    if error.details:
        return {"error": error.message, "details": error.details}
    return error.message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = exc.detail if isinstance(exc.detail, dict) else {"msg": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are a 400 here, not FastAPI's default 422."""
    errors = jsonable_encoder(exc.errors())
    logger.info("Request validation failed", extra={"path": request.url.path, "errors": errors})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": "Invalid request data", "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"msg": "Server Error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""Exception handlers and request logging for the FastAPI app."""

import time
import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from recipe_catalog.errors.errors import RecipeCatalogError
from recipe_catalog.utils.logger import logger


async def catalog_error_handler(request: Request, exc: RecipeCatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            exc_info=exc,
            extra={"request_id": getattr(request.state, "request_id", None)},
        )
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400 bad_request instead of FastAPI's 422."""
    content = {
        "error": {
            "type": "bad_request",
            "message": "Request validation failed",
            "details": {"errors": jsonable_encoder(exc.errors())},
        }
    }
    return JSONResponse(status_code=400, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} raised unexpected error: {exc}",
        exc_info=exc,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    content = {"error": {"type": "internal_error", "message": "Internal server error", "details": {}}}
    return JSONResponse(status_code=500, content=content)


async def log_requests(request: Request, call_next):
    """Tag each request with an id and log it on completion."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms}ms)",
        extra={"request_id": request_id},
    )
    return response


def register_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecipeCatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.middleware("http")(log_requests)

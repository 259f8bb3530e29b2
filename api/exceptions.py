"""
API exception types and handlers.

Core code raises ImageOpsError subclasses; this module maps them to HTTP
responses:

- EngineError -> 422 with the failing step as detail
- ScriptSyntaxError, ImageDecodeError -> 400
- ImageTooLargeException -> 413
- anything unexpected inside a @safe_endpoint -> 500
"""

import functools
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import EngineError, ImageDecodeError, ImageOpsError, ScriptSyntaxError

logger = logging.getLogger(__name__)


class ImageOpsAPIException(Exception):
    """Base exception carrying an HTTP status"""

    status_code = 500

    def __init__(self, detail: Any, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ImageTooLargeException(ImageOpsAPIException):
    """Upload or decoded image exceeds the configured limits"""

    status_code = 413


def safe_endpoint(func):
    """
    Decorator for async endpoints.

    Lets HTTP and domain exceptions through to the registered handlers and
    turns anything else into a logged 500 response.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, ImageOpsAPIException, ImageOpsError):
            raise
        except Exception as e:
            logger.exception(f"Unhandled error in {func.__name__}: {e}")
            raise HTTPException(status_code=500, detail=f"Internal server error: {e}") from e

    return wrapper


async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    logger.warning(f"{request.url.path}: {exc.message}")
    return JSONResponse(status_code=422, content={"detail": exc.to_dict()})


async def bad_request_handler(request: Request, exc: ImageOpsError) -> JSONResponse:
    logger.warning(f"{request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"detail": exc.message})


async def api_exception_handler(request: Request, exc: ImageOpsAPIException) -> JSONResponse:
    logger.warning(f"{request.url.path}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain exceptions on the app"""
    app.add_exception_handler(EngineError, engine_error_handler)
    app.add_exception_handler(ScriptSyntaxError, bad_request_handler)
    app.add_exception_handler(ImageDecodeError, bad_request_handler)
    app.add_exception_handler(ImageOpsAPIException, api_exception_handler)

"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from auth.cookies import clear_session_cookie
from auth.exceptions import AuthError, StoreError

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors onto stable HTTP responses."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        response = JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
        # set by routes that must drop the session even when they fail
        cookie_name = getattr(request.state, "clear_session_cookie", None)
        if cookie_name:
            clear_session_cookie(response, cookie_name)
        return response

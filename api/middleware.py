"""
Global middleware.

Every response is marked non-cacheable: ``/login`` bodies carry bearer
tokens and ``/register`` requests carry plaintext passwords, so neither
browsers nor intermediaries may keep a copy.
"""

from __future__ import annotations

import logging
import time
from typing import Dict

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

NO_STORE_HEADERS: Dict[str, str] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Pragma": "no-cache",
    "Expires": "0",
    "X-Content-Type-Options": "nosniff",
}


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware (no-store headers, timing, access log)."""

    @app.middleware("http")
    async def credential_response_headers(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        response.headers.update(NO_STORE_HEADERS)
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        # Never log bodies; they hold passwords and tokens.
        logger.debug(
            "%s %s -> %d (%.3fs)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

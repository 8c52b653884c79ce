# app/core/logging_middleware.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.error(f"{request.method} {request.url.path} failed after {duration_ms}ms: {e!r}")
            raise

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"{request.method} {request.url.path} status={response.status_code} duration_ms={duration_ms}")
        return response

import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config.settings import settings

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Adds X-Latency-Ms to every response; requests over SLOW_REQUEST_MS are logged as warnings."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Latency-Ms"] = str(latency_ms)

        level = logging.WARNING if latency_ms >= settings.SLOW_REQUEST_MS else logging.DEBUG
        logger.log(level, "%s %s -> %s (%d ms)", request.method, request.url.path, response.status_code, latency_ms)
        return response

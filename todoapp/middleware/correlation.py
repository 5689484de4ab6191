# todoapp/middleware/correlation.py
import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-Id"

# Read by the logging filter so every record carries the request's id
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")


def _path_with_query(request: Request) -> str:
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request/response pair and echoes or generates X-Correlation-Id"""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER, "").strip() or str(uuid.uuid4())
        token = correlation_id_var.set(correlation_id)
        request.state.correlation_id = correlation_id

        path = _path_with_query(request)
        client = request.client.host if request.client else "unknown"
        started = time.perf_counter()

        logger.info("Incoming request %s %s from %s", request.method, path, client)
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                "Unhandled exception for %s %s after %.0f ms", request.method, path, elapsed_ms
            )
            raise
        else:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "Completed request %s %s with %s in %.0f ms",
                request.method, path, response.status_code, elapsed_ms,
            )
            response.headers[CORRELATION_HEADER] = correlation_id
            return response
        finally:
            correlation_id_var.reset(token)

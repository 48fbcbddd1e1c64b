"""Request middleware for FEST-SEARCH.

Provides request logging and metrics middleware.
"""

import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from fest_search.logging.setup import (
    REQUEST_ID_HEADER,
    bind_request_id,
    get_logger,
    release_request_id,
)
from fest_search.metrics.collectors import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)

logger = get_logger(__name__)

# Metrics label for requests that matched no route (404s, scanners)
UNMATCHED_ENDPOINT = "unmatched"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics.

    Binds a request_id for every request and logs request start/completion.
    Also records Prometheus metrics for request latency and count.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id, token = bind_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        path = request.url.path
        method = request.method

        ACTIVE_REQUESTS.inc()

        start_time = time.time()
        logger.info(
            "Request started",
            extra={
                "event": "request_started",
                "method": method,
                "path": path,
                "client_ip": self._get_client_ip(request),
            },
        )

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={
                    "event": "request_error",
                    "error": str(e),
                },
            )
            raise
        finally:
            duration = time.time() - start_time

            ACTIVE_REQUESTS.dec()

            # Routing has run by now, so the matched route is in the scope
            endpoint = self._get_endpoint(request)
            status_str = str(status_code)
            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status_str,
            ).observe(duration)
            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status_str,
            ).inc()

            logger.info(
                "Request completed",
                extra={
                    "event": "request_completed",
                    "method": method,
                    "path": path,
                    "endpoint": endpoint,
                    "status_code": status_code,
                    "duration_ms": round(duration * 1000, 2),
                },
            )
            release_request_id(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _get_endpoint(self, request: Request) -> str:
        """Get the route template for metrics labels.

        Raw paths are never used as labels: each distinct value would create
        a new series for the lifetime of the process.
        """
        route = request.scope.get("route")
        path_template = getattr(route, "path", None)
        return path_template or UNMATCHED_ENDPOINT

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

# gymdesk/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

One line per request and one per response. Health probes are logged at
DEBUG so they do not flood the log.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from gymdesk.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

QUIET_PATHS = {"/api/v1/health"}


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.
    """

    async def dispatch(self, request: Request, call_next):
        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        client = request.client.host if request.client else "N/A"

        # Query strings can hold search terms with personal data; keep them out of production logs
        if settings.ENVIRONMENT == "production":
            logger.log(level, f"Request: {request.method} {request.url.path}")
        else:
            query_params = dict(request.query_params)
            logger.log(
                level,
                f"Request: {request.method} {request.url.path} | "
                f"Query: {query_params if query_params else 'N/A'} | Client: {client}"
            )

        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            level,
            f"Response: {response.status_code} for {request.method} {request.url.path} | "
            f"Time: {elapsed_ms:.1f}ms"
        )
        return response

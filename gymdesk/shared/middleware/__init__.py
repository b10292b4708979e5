# gymdesk/shared/middleware/__init__.py (async version)

from gymdesk.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from gymdesk.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from gymdesk.shared.middleware.rate_limiting_middleware import AsyncRateLimitingMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncRateLimitingMiddleware",
]

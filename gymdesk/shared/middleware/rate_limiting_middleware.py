# gymdesk/shared/middleware/rate_limiting_middleware.py (async version)

"""
Middleware for request rate limiting.

Three quotas protect the API, each counted per caller IP in its own
namespace: login attempts, backup exports, and every other write
(POST/PUT/DELETE) under ``/api/``. A rejected request is answered with 429
before it reaches any endpoint, so nothing is mutated.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from gymdesk.adapters.configuration.config import Settings, settings as default_settings
from gymdesk.domain.models.tenant_domain_model import UNKNOWN_CALLER
from gymdesk.shared.utils.rate_limiter import SlidingWindowRateLimiter

# Configure logger
logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/v1/auth/login"
BACKUP_PATH = "/api/v1/backup"
WRITE_METHODS = {"POST", "PUT", "DELETE"}


@dataclass(frozen=True)
class RateLimitRule:
    namespace: str
    max_requests: int
    window_seconds: int
    matches: Callable[[str, str], bool]

    def key_for(self, client_ip: str) -> str:
        return f"{self.namespace}:{client_ip}"


def build_rules(config: Settings) -> List[RateLimitRule]:
    """Quotas in match order; the first matching rule applies."""
    return [
        RateLimitRule(
            namespace="login",
            max_requests=config.RATE_LIMIT_LOGIN_MAX_ATTEMPTS,
            window_seconds=config.RATE_LIMIT_LOGIN_WINDOW_SECONDS,
            matches=lambda method, path: method == "POST" and path.rstrip("/") == LOGIN_PATH,
        ),
        RateLimitRule(
            namespace="backup",
            max_requests=config.RATE_LIMIT_BACKUP_MAX_REQUESTS,
            window_seconds=config.RATE_LIMIT_BACKUP_WINDOW_SECONDS,
            matches=lambda method, path: method == "POST" and path.rstrip("/") == BACKUP_PATH,
        ),
        RateLimitRule(
            namespace="write",
            max_requests=config.RATE_LIMIT_WRITE_MAX_REQUESTS,
            window_seconds=config.RATE_LIMIT_WRITE_WINDOW_SECONDS,
            matches=lambda method, path: method in WRITE_METHODS and path.startswith("/api/"),
        ),
    ]


# Global rate limiter instance
rate_limiter = SlidingWindowRateLimiter(max_keys=default_settings.RATE_LIMIT_MAX_KEYS)


class AsyncRateLimitingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that applies the login, backup and write quotas by caller IP.

    Args:
        app: ASGI application
        limiter: Limiter holding the windows, the process-wide one by default
        settings: Source of the quotas, the loaded settings by default
    """

    def __init__(
            self,
            app,
            limiter: Optional[SlidingWindowRateLimiter] = None,
            settings: Optional[Settings] = None,
    ):
        super().__init__(app)
        self.limiter = limiter or rate_limiter
        self.rules = build_rules(settings or default_settings)

    def match(self, method: str, path: str) -> Optional[RateLimitRule]:
        for rule in self.rules:
            if rule.matches(method, path):
                return rule
        return None

    async def dispatch(self, request: Request, call_next):
        rule = self.match(request.method.upper(), request.url.path)
        if rule is None:
            return await call_next(request)

        client_ip = request.client.host if request.client and request.client.host else UNKNOWN_CALLER
        if not self.limiter.try_acquire(rule.key_for(client_ip), rule.max_requests, rule.window_seconds):
            logger.warning(
                f"Rate limit exceeded for IP: {client_ip} on {rule.namespace} "
                f"({request.method} {request.url.path})"
            )
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "detail": "Too many requests. Try again later.",
                    "code": "RATE_LIMIT_EXCEEDED"
                },
                headers={"Retry-After": str(rule.window_seconds)}
            )

        return await call_next(request)

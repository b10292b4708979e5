# gymdesk/main.py (async version)

import logging
import asyncio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.openapi.utils import get_openapi
from contextlib import asynccontextmanager

from gymdesk.adapters.configuration.config import settings
from gymdesk.adapters.outbound.persistence.database import engine, get_db_context
from gymdesk.adapters.outbound.persistence.models import Base
from gymdesk.shared.middleware.rate_limiting_middleware import rate_limiter

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    # Startup
    logger.info("Application starting up...")

    # Create database tables if they don't exist
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await seed_admin_user()

    # Start background tasks
    app.state.sweep_task = asyncio.create_task(periodic_rate_limit_sweep())

    yield

    # Shutdown
    logger.info("Application shutting down...")
    app.state.sweep_task.cancel()
    try:
        await app.state.sweep_task
    except asyncio.CancelledError:
        pass


# Create FastAPI instance
app = FastAPI(
    title="GYMDESK",
    description="Multi-gym membership and payments API",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Middlewares
from gymdesk.shared.middleware import (  # noqa: E402
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
    AsyncRateLimitingMiddleware,
)

app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncRateLimitingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)

# Routers
from gymdesk.adapters.inbound.api.v1.router import api_router as api_v1_router  # noqa: E402

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_docs():
    return RedirectResponse(url="/docs")


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    spec = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # Remove unwanted schemas and 422 responses
    for schema in ("HTTPValidationError", "ValidationError"):
        spec.get("components", {}).get("schemas", {}).pop(schema, None)

    for path in spec.get("paths", {}).values():
        for op in path.values():
            op.get("responses", {}).pop("422", None)

    app.openapi_schema = spec
    return spec


app.openapi = custom_openapi


# ── ADMIN SEED ────────────────────────────────────────────────────────────────
async def seed_admin_user():
    """Create the configured admin user of the default gym, once."""
    from gymdesk.application.use_cases.auth_use_cases import AsyncAuthService

    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.info("No admin credentials configured; skipping admin seed")
        return

    async with get_db_context() as db:
        await AsyncAuthService(db).ensure_admin(
            settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD, settings.DEFAULT_GYM_ID
        )


# ── RATE LIMIT SWEEP TASK ─────────────────────────────────────────────────────
def rate_limit_max_age() -> int:
    """Idle windows older than the longest quota window can no longer reject anything."""
    return max(
        settings.RATE_LIMIT_LOGIN_WINDOW_SECONDS,
        settings.RATE_LIMIT_BACKUP_WINDOW_SECONDS,
        settings.RATE_LIMIT_WRITE_WINDOW_SECONDS,
    )


async def periodic_rate_limit_sweep():
    """Background task that drops idle rate limit windows."""
    while True:
        try:
            await asyncio.sleep(settings.RATE_LIMIT_SWEEP_INTERVAL_SECONDS)
            removed = rate_limiter.evict_stale(rate_limit_max_age())
            if removed:
                logger.debug(f"{len(rate_limiter)} rate limit window(s) still tracked")
        except asyncio.CancelledError:
            logger.info("Rate limit sweep task cancelled")
            break
        except Exception as e:
            logger.exception(f"Error in rate limit sweep: {e}")

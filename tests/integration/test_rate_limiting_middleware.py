import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from gymdesk.adapters.configuration.config import settings
from gymdesk.shared.middleware.rate_limiting_middleware import AsyncRateLimitingMiddleware
from gymdesk.shared.utils.rate_limiter import SlidingWindowRateLimiter


@pytest.fixture
def limiter():
    return SlidingWindowRateLimiter()


@pytest.fixture
async def small_api(limiter):
    config = settings.model_copy(update={
        "RATE_LIMIT_LOGIN_MAX_ATTEMPTS": 2,
        "RATE_LIMIT_LOGIN_WINDOW_SECONDS": 30,
        "RATE_LIMIT_BACKUP_MAX_REQUESTS": 1,
        "RATE_LIMIT_BACKUP_WINDOW_SECONDS": 3600,
        "RATE_LIMIT_WRITE_MAX_REQUESTS": 3,
        "RATE_LIMIT_WRITE_WINDOW_SECONDS": 60,
    })
    app = FastAPI()
    app.add_middleware(AsyncRateLimitingMiddleware, limiter=limiter, settings=config)

    @app.post("/api/v1/auth/login")
    async def login():
        return {"ok": True}

    @app.post("/api/v1/backup")
    async def backup():
        return {"ok": True}

    @app.api_route("/api/v1/items", methods=["GET", "POST", "PUT", "DELETE"])
    async def items():
        return {"ok": True}

    @app.post("/public/ping")
    async def ping():
        return {"ok": True}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def test_login_quota(small_api):
    assert (await small_api.post("/api/v1/auth/login")).status_code == 200
    assert (await small_api.post("/api/v1/auth/login/")).status_code != 429

    response = await small_api.post("/api/v1/auth/login")

    assert response.status_code == 429
    assert response.headers["Retry-After"] == "30"
    assert response.json() == {"detail": "Too many requests. Try again later.", "code": "RATE_LIMIT_EXCEEDED"}


async def test_backup_quota_is_separate(small_api):
    assert (await small_api.post("/api/v1/backup")).status_code == 200
    response = await small_api.post("/api/v1/backup")
    assert response.status_code == 429
    assert response.headers["Retry-After"] == "3600"

    assert (await small_api.post("/api/v1/items")).status_code == 200


async def test_write_quota_counts_all_write_methods(small_api):
    assert (await small_api.post("/api/v1/items")).status_code == 200
    assert (await small_api.put("/api/v1/items")).status_code == 200
    assert (await small_api.delete("/api/v1/items")).status_code == 200

    assert (await small_api.post("/api/v1/items")).status_code == 429


async def test_reads_and_paths_outside_api_are_not_limited(small_api):
    for _ in range(10):
        assert (await small_api.get("/api/v1/items")).status_code == 200
        assert (await small_api.post("/public/ping")).status_code == 200


async def test_windows_are_keyed_by_namespace_and_ip(small_api, limiter):
    await small_api.post("/api/v1/auth/login")
    await small_api.post("/api/v1/items")

    assert len(limiter) == 2
    assert not limiter.try_acquire("login:127.0.0.1", 1, 30)
    assert limiter.try_acquire("login:10.9.9.9", 1, 30)

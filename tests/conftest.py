import os

# Settings are read at import time; point them at SQLite before anything imports gymdesk
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-0123456789"
os.environ.pop("ADMIN_USERNAME", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from gymdesk.adapters.outbound.persistence.models import Base
from gymdesk.adapters.outbound.persistence.repositories.user_repository import user_repository
from gymdesk.domain.models.tenant_domain_model import TenantContext

GYM_A = 1
GYM_B = 2
PASSWORD = "s3cret-pass"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def tenant_a():
    return TenantContext(gym_id=GYM_A, username="staff-a", client_ip="10.0.0.1")


@pytest.fixture
def tenant_b():
    return TenantContext(gym_id=GYM_B, username="staff-b", client_ip="10.0.0.2")


@pytest.fixture
async def users(session_factory):
    """One active staff user per gym."""
    async with session_factory() as session:
        await user_repository.create_with_password(session, username="staff-a", password=PASSWORD, gym_id=GYM_A)
        await user_repository.create_with_password(session, username="staff-b", password=PASSWORD, gym_id=GYM_B)
        await session.commit()


@pytest.fixture
async def api(session_factory):
    from gymdesk.main import app
    from gymdesk.adapters.outbound.persistence.database import get_db
    from gymdesk.shared.middleware.rate_limiting_middleware import rate_limiter

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    rate_limiter.reset()


async def login(api, username="staff-a", password=PASSWORD):
    response = await api.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

# gymdesk/adapters/outbound/persistence/database.py (async version)

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from gymdesk.adapters.configuration.config import settings
from gymdesk.adapters.outbound.persistence.models.base_model import Base  # noqa: F401

# Configure logger
logger = logging.getLogger(__name__)

# Build async database URL swapping psycopg2 for asyncpg
database_url = str(settings.DATABASE_URL).replace("postgresql+psycopg2", "postgresql+asyncpg")
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")


def build_engine_options(url: str) -> dict:
    """Pool options only apply to server databases; SQLite uses its own pool."""
    if url.startswith("sqlite"):
        return {"echo": False}
    return {
        "echo": False,
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


try:
    # Create async engine
    engine = create_async_engine(database_url, **build_engine_options(database_url))

    # Create async session factory
    AsyncSessionLocal = async_sessionmaker(
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Yields:
        AsyncSession: SQLAlchemy async session

    Example:
        ```python
        async with get_db_context() as db:
            clients = await db.execute(select(Client))
            result = clients.scalars().all()
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for use with FastAPI.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with get_db_context() as session:
        yield session

"""
Database engine, session factory and declarative base.
The application uses async SQLAlchemy; migrations use a sync engine (see alembic/env.py).
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from invoice_desk.core.config import settings


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""
    pass


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session for one request.

    The whole request runs in a single transaction: committed when the
    endpoint returns, rolled back if it raises.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables and provision the company settings row (development only)."""
    # Models must be imported so their tables are registered on the metadata
    from invoice_desk import models  # noqa: F401
    from invoice_desk.services.company_settings import CompanySettingsService

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        async with session.begin():
            await CompanySettingsService(session).ensure_exists()
    logger.info("Database tables initialized")


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()

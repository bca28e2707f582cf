"""Async engine and session factory.

The access core only reads tenant snapshots and writes RBAC and hierarchy
changes, so one pool per process is enough.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from hrms_api.config import Settings, get_settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine for the configured database."""
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
        # Tag connections so the access API is visible in pg_stat_activity
        connect_args={"server_settings": {"application_name": settings.app_name}},
        echo=False,
    )


engine = create_engine(get_settings())

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a request session; services commit their own writes."""
    async with async_session_maker() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from typing import AsyncGenerator

from .config import settings
from .models.base import Base

# check_same_thread hanya berlaku untuk SQLite
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

async_engine = create_async_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    echo=settings.SQL_ECHO,
)

AsyncSessionLocal = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

__all__ = ['Base', 'async_engine', 'AsyncSessionLocal', 'get_db_session', 'create_tables']


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency untuk menyediakan database session per request.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def create_tables(engine=None):
    """Create semua tabel dari metadata models."""
    from . import models  # noqa: F401  (register semua model ke metadata)

    engine = engine or async_engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

"""Database configuration and session management."""

from pathlib import Path
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, AsyncEngine
from sqlalchemy.orm import sessionmaker

from .config import db_config
from .catalog.models import metadata


def get_database_url(db_path: str = None) -> str:
    """Get database URL from path or environment."""
    if db_path is None:
        if db_config.url:
            return db_config.url
        db_path = db_config.path

    # Ensure directory exists
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return f"sqlite+aiosqlite:///{db_path}"


def get_engine(db_path: str = None) -> AsyncEngine:
    """Create async database engine."""
    url = get_database_url(db_path)
    return create_async_engine(url, echo=db_config.echo)


async def init_db(engine: AsyncEngine) -> None:
    """Create the catalog and recommendation tables if missing."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


@asynccontextmanager
async def get_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async_session = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

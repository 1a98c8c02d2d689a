"""
Database connection and session management.
Uses SQLAlchemy 2.0 async pattern.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from moviemate.config import Settings


def create_engine_for(settings: Settings) -> AsyncEngine:
    """Build an engine with options suited to the configured database."""
    if settings.database_url.startswith("sqlite"):
        # NullPool: every session gets its own connection
        engine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable foreign keys on every new SQLite connection."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA busy_timeout=5000")
            cursor.close()

        return engine

    # PostgreSQL settings with connection pooling
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=1800,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class Database:
    """Engine plus session factory, owned by the application."""

    def __init__(self, settings: Settings):
        self.engine = create_engine_for(settings)
        self.session_maker = create_session_maker(self.engine)

    async def init(self) -> None:
        """Create tables (minimal migrations)."""
        from moviemate.kernel.models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Close database connections."""
        await self.engine.dispose()

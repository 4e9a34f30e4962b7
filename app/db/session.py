"""
db/session.py
-------------
Async SQLAlchemy engine and session factory, wrapped in an explicit handle.

Design decisions:
  - A Database object is constructed once per process (see main.py) and
    stored on app.state; nothing here is a module-level global.
  - connect() probes the database at startup, dispose() drains the pool at
    shutdown.
  - PostgreSQL (asyncpg) gets a sized pool:
      pool_size=10, max_overflow=20 → max 30 concurrent DB connections.
    SQLite (aiosqlite) gets a StaticPool so an in-memory database is shared
    by every session, and foreign keys are switched on for every connection
    so ON DELETE CASCADE holds there too.
  - Write routes commit explicitly before building their response. The
    commit in get_db runs after the response is sent, so it only closes out
    read transactions.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context (attributes are already loaded, no implicit SELECT needed).
"""

from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.logging import get_logger
from app.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _engine_options(url: str, echo: bool) -> Dict[str, Any]:
    if url.startswith("sqlite"):
        return {
            "echo": echo,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {
        "echo": echo,                  # Log SQL in development
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,          # Recycle connections every hour
    }


class Database:

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **_engine_options(url, echo))
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    def session(self) -> AsyncSession:
        return self._sessionmaker()

    async def connect(self) -> None:
        """Fail fast at startup if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connected", dialect=self.engine.dialect.name)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session from the app's handle.
    Routes that write call `await db.commit()` themselves so a failed commit
    becomes their error response. Anything still pending is committed at
    teardown, and the session is rolled back on exceptions.

    Usage:
        @router.get("/example")
        async def handler(db: AsyncSession = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

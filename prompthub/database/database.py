from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from prompthub.database.base import Base


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _use_unicode_lower(engine: AsyncEngine) -> AsyncEngine:
    # SQLite's built-in lower() only folds ASCII; search must match str.lower().
    @event.listens_for(engine.sync_engine, "connect")
    def _register(dbapi_connection, _connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)

    return engine


def create_engine_for(database_url: str) -> AsyncEngine:
    if not database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=False, poolclass=NullPool)

    # In-memory SQLite only lives as long as its single connection.
    if ":memory:" in database_url:
        return _use_unicode_lower(
            create_async_engine(
                database_url,
                echo=False,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        )
    return _use_unicode_lower(create_async_engine(database_url, echo=False, poolclass=NullPool))


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def create_schema(engine: AsyncEngine) -> None:
    # Registers the tables on Base.metadata.
    import prompthub.models.category  # noqa: F401
    import prompthub.models.prompt  # noqa: F401
    import prompthub.models.saved_prompt  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

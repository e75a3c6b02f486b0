from fastapi import Request
from sqlalchemy import text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config import Settings


def _get_engine_kwargs(settings: Settings):
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": settings.debug}
    if settings.is_sqlite:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif settings.is_postgresql:
        # Small fixed pool; connections are opened lazily on first use.
        kwargs["pool_size"] = 2
        kwargs["max_overflow"] = 3
        kwargs["pool_pre_ping"] = True
    return kwargs


def build_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(settings.database_url, **_get_engine_kwargs(settings))


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


class Base(DeclarativeBase):
    pass


def dialect_insert(session: AsyncSession, model):
    """INSERT for the bound dialect, exposing on_conflict_do_update / on_conflict_do_nothing."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise NotImplementedError(f"Upserts are not supported on {dialect}")


async def get_db(request: Request):
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine):
    # Import for side effect: registers every table on Base.metadata.
    import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_db(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        return False
    return True

"""
AirOps Storage Engine

One async engine per process. SQLite is the local default; any SQLAlchemy
async URL (e.g. postgresql+asyncpg) can be configured instead. Foreign keys
are enforced on both backends so passenger bookings and luggage cascade
away with their flight.
"""
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from typing import Any, AsyncGenerator, Dict, Optional
from contextlib import asynccontextmanager
from pathlib import Path

from airops.config import settings


class Base(DeclarativeBase):
    """Declarative base for the AirOps tables."""
    pass


is_sqlite = settings.database_url.startswith("sqlite")


def _sqlite_file(database_url: str) -> Optional[Path]:
    """Path of a file-backed SQLite database, None for in-memory URLs."""
    database = make_url(database_url).database
    if not database or database == ":memory:":
        return None
    return Path(database)


def _engine_options(database_url: str) -> Dict[str, Any]:
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    # Server databases get a pre-pinged pool sized for a handful of workers
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


def enable_sqlite_foreign_keys(target: AsyncEngine) -> None:
    """Turn on FK enforcement (and ON DELETE CASCADE) for every new SQLite connection."""

    @event.listens_for(target.sync_engine, "connect")
    def _set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_options(settings.database_url),
)
if is_sqlite:
    enable_sqlite_foreign_keys(engine)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db():
    """Create any missing tables."""
    if is_sqlite:
        db_file = _sqlite_file(settings.database_url)
        if db_file is not None:
            db_file.parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        # Registers every table on Base.metadata
        from airops.models import human, airport, airline, aircraft, flight, passenger, luggage  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the route returns, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Same transaction handling as get_db, for the seed script."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

# school_admin/core/database.py
"""Database connection and session management using SQLAlchemy."""
import asyncio
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import event, text
import logging
from fastapi import Depends

from .config import settings
from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def _configure_sqlite(sqlite_engine: AsyncEngine) -> None:
    # pysqlite's implicit transactions break SAVEPOINT; let SQLAlchemy emit BEGIN itself.
    @event.listens_for(sqlite_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(database_url: str, **engine_kwargs) -> AsyncEngine:
    """Create an async engine; pool tuning only applies to server databases."""
    if database_url.startswith("sqlite"):
        sqlite_engine = create_async_engine(database_url, echo=False, **engine_kwargs)
        _configure_sqlite(sqlite_engine)
        return sqlite_engine

    return create_async_engine(
        database_url,
        pool_size=15,
        max_overflow=25,
        pool_timeout=60,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=False,
        connect_args={
            "command_timeout": 300,
            "server_settings": {
                "application_name": "school_admin_api",
                "statement_timeout": "300s",
                "idle_in_transaction_session_timeout": "60s",
                "lock_timeout": "30s",
            }
        },
        **engine_kwargs
    )


engine = build_engine(settings.database_url)

AsyncSessionLocal = async_sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for API requests with proper error handling"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Database session error: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()


async def health_check_db(target: AsyncEngine = None) -> bool:
    """Run a trivial query against the database."""
    try:
        async with (target or engine).connect() as conn:
            await conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


async def wait_for_database(retries: int, delay: float, target: AsyncEngine = None) -> None:
    """Block until the database answers, giving up after `retries` attempts."""
    for attempt in range(1, retries + 1):
        logger.info(f"Attempting to connect to database (attempt {attempt}/{retries})...")
        if await health_check_db(target):
            logger.info("Database connection has been established successfully.")
            return
        if attempt < retries:
            logger.info(f"Retrying in {delay} seconds... ({retries - attempt} attempts remaining)")
            await asyncio.sleep(delay)

    raise RuntimeError("Unable to start application - database connection failed after all retries")


async def create_tables(target: AsyncEngine = None) -> None:
    """Create every table registered on the declarative Base."""
    from ..models import Base

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All models were synchronized successfully.")


async def close_db_connections():
    """Properly close all database connections"""
    await engine.dispose()
    logger.info("Database connections closed")


async def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    """FastAPI dependency wrapping the request's session in a UnitOfWork."""
    return UnitOfWork(db)

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shared.constants import MAX_OVERFLOW, POOL_RECYCLE, POOL_SIZE, POOL_TIMEOUT
from shared.core.logging_config import get_logger
from shared.db.models import PlatformBase

logger = get_logger(__name__)

# --------------------- Engine & Session Helpers ---------------------


def create_async_db_engine(db_url: str) -> AsyncEngine:
    """Create and return an asynchronous SQLAlchemy engine from the given URL."""
    engine_kwargs: dict[str, Any] = {"echo": False, "future": True}
    if db_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_timeout=POOL_TIMEOUT,
            pool_pre_ping=True,
            pool_recycle=POOL_RECYCLE,
            isolation_level="READ COMMITTED",
        )
    logger.info("Creating DB engine for %s", db_url.split("@")[-1])
    return create_async_engine(db_url, **engine_kwargs)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create and return a sessionmaker bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# --------------------- Global Dependency Support ---------------------

global_session_factory: Optional[async_sessionmaker[AsyncSession]] = None
global_engine: Optional[AsyncEngine] = None


def configure_session_factory(db_url: str) -> async_sessionmaker[AsyncSession]:
    """Create the process-wide engine and session factory (app startup)."""
    global global_session_factory, global_engine
    global_engine = create_async_db_engine(db_url)
    global_session_factory = create_session_factory(global_engine)
    return global_session_factory


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if global_session_factory is None:
        raise RuntimeError(
            "Session factory not configured. Call `configure_session_factory()` first."
        )
    return global_session_factory


# --------------------- Lifecycle Hooks ---------------------


async def init_db(engine: Optional[AsyncEngine] = None) -> None:
    """Create all tables defined on PlatformBase.metadata if missing."""
    engine = engine or global_engine
    if engine is None:
        raise RuntimeError("Engine not configured.")

    try:
        async with engine.begin() as conn:
            logger.info("Creating database tables if they do not exist...")
            await conn.run_sync(PlatformBase.metadata.create_all, checkfirst=True)
    except OperationalError as e:
        logger.error("Operational error while connecting to DB: %s", str(e))
        raise


async def shutdown_db() -> None:
    """Dispose of the global engine; pooled connections are closed."""
    global global_session_factory, global_engine
    if global_engine is None:
        return
    logger.info("Shutting down DB engine")
    await global_engine.dispose()
    global_engine = None
    global_session_factory = None


# --------------------- Request Sessions ---------------------


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
    after=lambda state: logger.warning(
        "Retrying DB connection (attempt %s)", state.attempt_number
    ),
)
async def _open_session() -> AsyncSession:
    session = get_session_factory()()
    try:
        # Fail fast here (and retry) instead of inside the handler
        await session.connection()
    except OperationalError:
        await session.close()
        raise
    return session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI-compatible dependency to provide a DB session."""
    session = await _open_session()
    try:
        yield session
    except Exception as e:
        logger.error("Database session error: %s", str(e))
        await session.rollback()
        raise
    finally:
        await session.close()


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Commit everything done inside the block as one transaction, or
    roll all of it back if anything raises (including HTTPException).
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise

import structlog
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from shared.config import settings

logger = structlog.get_logger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args={"timeout": settings.DB_CONNECT_TIMEOUT},
)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def connect_db() -> bool:
    """
    Creates the tables and reports whether the database is usable.

    Development falls back to the in-memory store when the database is
    unreachable; any other environment refuses to start without it.
    """
    if not settings.DB_ENABLED:
        logger.warning("database_disabled", store="memory")
        return False
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (OSError, SQLAlchemyError) as exc:
        if settings.ENVIRONMENT == "development":
            logger.warning("database_unreachable", error=str(exc), store="memory")
            return False
        logger.critical("database_connection_failed", error=str(exc))
        raise
    logger.info("database_connected", url=engine.url.render_as_string(hide_password=True))
    return True


async def disconnect_db():
    await engine.dispose()


async def get_db(request: Request):
    """Yields a session, or None when the app runs on the in-memory store."""
    if not getattr(request.app.state, "db_connected", False):
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session

import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from wardrobe.config import config

logger = logging.getLogger(__name__)

# Convert postgresql:// to postgresql+asyncpg://
if config.DATABASE_URL.startswith("postgresql://"):
    DATABASE_URL = config.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
else:
    DATABASE_URL = config.DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    # aiosqlite connections are bound to the event loop that opened them
    database_path = make_url(DATABASE_URL).database
    if database_path and database_path != ":memory:":
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    engine = create_async_engine(
        DATABASE_URL,
        echo=config.DATABASE_ECHO,
        poolclass=NullPool,
    )
else:
    engine = create_async_engine(
        DATABASE_URL,
        echo=config.DATABASE_ECHO,
        pool_pre_ping=True,
        pool_recycle=300,
    )

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncSession:
    """
    Dependency to get database session.
    Use this in your route handlers.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """
    Initialize database tables.
    Run this on app startup.
    """
    async with engine.begin() as conn:
        # Import models to ensure they are registered
        from wardrobe.database import models  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialised at %s", make_url(DATABASE_URL).render_as_string(hide_password=True))


async def close_db():
    """
    Close database connection.
    Run this on app shutdown.
    """
    await engine.dispose()

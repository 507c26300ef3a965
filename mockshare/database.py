import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from mockshare.config import settings
from mockshare.errors import StorageFailure

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()

# Dependency
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transactional(db: AsyncSession):
    """Commit the unit of work on exit, roll all of it back on any failure.

    Domain errors raised inside the block propagate unchanged after the
    rollback; database errors are re-raised as StorageFailure.
    """
    try:
        yield
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Storage failure, transaction rolled back")
        raise StorageFailure("The change could not be saved, please retry") from e
    except Exception:
        await db.rollback()
        raise

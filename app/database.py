"""Async database engine, session factory and transaction helper."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import settings
from app.services.errors import RemoteStoreError, ValidationError

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.database_url, echo=settings.debug)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """
    Run a block of reads and writes as one all-or-nothing commit.

    Any exception rolls the session back. Constraint violations (duplicate
    names, a second cart line for the same dish) become ``ValidationError``,
    other database errors ``RemoteStoreError``; service errors propagate
    unchanged.
    """
    try:
        yield session
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.warning("Constraint violation, transaction rolled back: %s", e)
        raise ValidationError("This conflicts with an existing record.") from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Database error, transaction rolled back: %s", e)
        raise RemoteStoreError("The data store is unavailable. Please try again.") from e
    except Exception:
        await session.rollback()
        raise

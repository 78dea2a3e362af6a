"""FastAPI dependency injection for database session management.

One session per request: committed when the handler returns, rolled back
when it raises. The DatabaseSession alias injects it into dependencies
without repeating ``Depends()``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Provide a database session for FastAPI dependency injection.

    Yields:
        AsyncGenerator[AsyncSession]: An async SQLAlchemy session that will be
                                     committed on success or rolled back on error.
    """
    async with get_async_session() as session:
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]

"""Base repository pattern implementation for database operations.

This module provides a generic repository base class that implements
the record operations the domain layer relies on, using async patterns.
"""

import uuid
from collections.abc import Mapping

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.constants import DEFAULT_ORDER_BY
from src.infrastructure.database.base import BaseModel


class BaseRepository[T: BaseModel]:
    """Base repository class providing common record operations.

    Initialize the repository with a session and model class.

    Args:
        session: The async SQLAlchemy session to use for operations.
        model_class: The SQLAlchemy model class this repository manages.

    Example:
        class ItemRepository(BaseRepository[Item]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, Item)
    """

    def __init__(self, session: AsyncSession, model_class: type[T]) -> None:
        self.session = session
        self.model_class = model_class
        logger.debug("Initialized repository for {}", model_class.__name__)

    async def insert(self, fields: Mapping[str, object]) -> T:
        """Insert a new record built from ``fields``.

        Args:
            fields: Column values for the new record.

        Returns:
            T: The persisted instance with ID and timestamps populated.
        """
        logger.debug(
            "Inserting {} with fields: {}",
            self.model_class.__name__,
            list(fields.keys()),
        )

        obj = self.model_class(**fields)
        self.session.add(obj)
        await self.session.flush()

        # Server-generated timestamps
        await self.session.refresh(obj)

        logger.debug("Inserted {} with ID: {}", self.model_class.__name__, obj.id)
        return obj

    async def find_all(self, order_by: str = DEFAULT_ORDER_BY) -> list[T]:
        """Retrieve every record, ascending by ``order_by``.

        Args:
            order_by: Name of the column to sort on.

        Returns:
            list[T]: All instances in ascending order.

        Raises:
            ValueError: If the model has no such column.
        """
        column = getattr(self.model_class, order_by, None)
        if column is None:
            msg = f"{self.model_class.__name__} has no column '{order_by}'"
            raise ValueError(msg)

        # Tie-break on id so listings are stable for equal timestamps
        stmt = select(self.model_class).order_by(column.asc(), self.model_class.id)
        result = await self.session.execute(stmt)
        instances = list(result.scalars().all())

        logger.debug(
            "Retrieved {} {} instances", len(instances), self.model_class.__name__
        )
        return instances

    async def find_by_id(self, entity_id: uuid.UUID) -> T | None:
        """Retrieve a record by its ID.

        Args:
            entity_id: The primary key of the record.

        Returns:
            T | None: The instance if found, None otherwise.
        """
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        instance = result.scalar_one_or_none()

        if instance is None:
            logger.debug(
                "{} instance not found with ID: {}",
                self.model_class.__name__,
                entity_id,
            )
        return instance

    async def save(self, obj: T) -> T:
        """Persist pending changes on ``obj`` and refresh ``updated_at``.

        The timestamp is refreshed even when no other column changed.

        Args:
            obj: A persistent instance with attributes already applied.

        Returns:
            T: The refreshed instance.
        """
        obj.updated_at = func.now()  # type: ignore[assignment]
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)

        logger.debug("Saved {} with ID: {}", self.model_class.__name__, obj.id)
        return obj

    async def delete(self, obj: T) -> None:
        """Delete a persistent record.

        Args:
            obj: The instance to remove.
        """
        await self.session.delete(obj)
        await self.session.flush()

        logger.debug("Deleted {} with ID: {}", self.model_class.__name__, obj.id)

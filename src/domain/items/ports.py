"""Store collaborator required by the item service.

The service never issues queries itself; it talks to an ``ItemStore``. The
SQLAlchemy ``ItemRepository`` satisfies this protocol, and tests provide
in-memory fakes.
"""

import uuid
from collections.abc import Mapping
from datetime import date, datetime
from typing import Protocol


class ItemRecord(Protocol):
    """Attributes of a persisted item as seen by the domain layer."""

    id: uuid.UUID
    name: str
    description: str
    date_of_birth: date | None
    sex: str
    phone_number: str
    address: str
    created_at: datetime
    updated_at: datetime


class ItemStore[R: ItemRecord](Protocol):
    """Persistence operations for item records."""

    async def insert(self, fields: Mapping[str, object]) -> R:
        """Persist a new record and return it with ID and timestamps."""
        ...

    async def find_all(self, order_by: str = "created_at") -> list[R]:
        """Return every record, ascending by ``order_by``."""
        ...

    async def find_by_id(self, entity_id: uuid.UUID) -> R | None:
        """Return the record with ``entity_id`` or None."""
        ...

    async def save(self, obj: R) -> R:
        """Persist changes applied to ``obj`` and refresh ``updated_at``."""
        ...

    async def delete(self, obj: R) -> None:
        """Remove ``obj`` permanently."""
        ...

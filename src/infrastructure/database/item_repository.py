"""SQLAlchemy implementation of the item store."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import Item
from src.infrastructure.database.repository import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Item store backed by the ``items`` table."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Item)

"""Database infrastructure with async PostgreSQL and repository pattern.

Core components:
- **base**: Declarative base and common model fields
- **models**: The items table
- **session**: Async engine, session management and schema creation
- **repository**: Generic repository and the item store built on it
- **dependencies**: FastAPI dependency injection helpers
"""

from src.infrastructure.database.base import Base, BaseModel
from src.infrastructure.database.dependencies import DatabaseSession, get_db
from src.infrastructure.database.item_repository import ItemRepository
from src.infrastructure.database.models import Item
from src.infrastructure.database.repository import BaseRepository
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_database_engine,
    create_schema,
    get_async_session,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "BaseModel",
    "BaseRepository",
    "DatabaseSession",
    "Item",
    "ItemRepository",
    "check_database_connection",
    "close_database",
    "create_database_engine",
    "create_schema",
    "get_async_session",
    "get_db",
    "get_engine",
    "get_session_factory",
]

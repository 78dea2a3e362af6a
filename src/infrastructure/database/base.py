"""SQLAlchemy declarative base and common model fields.

Key components:
- **Naming conventions**: Standardized constraint names
- **Base class**: Configured declarative base with metadata
- **BaseModel**: Abstract model with common fields (id, timestamps)

The BaseModel provides:
- **UUID ID**: Server-assigned random identifiers, never reused
- **Timezone-aware timestamps**: Set by the database at insert
- **Consistent repr**: Standard string representation for debugging
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.infrastructure.constants import NAMING_CONVENTION


class Base(DeclarativeBase):
    """SQLAlchemy declarative base with naming conventions."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """Abstract base model with common fields for all database models.

    This model provides:
    - Random UUID primary key assigned on insert
    - created_at timestamp set once by the database
    - updated_at timestamp, refreshed by the repository on every save
    """

    __abstract__ = True

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        doc="Primary key with a random UUID",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the record was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        doc="Timestamp when the record was last saved (UTC)",
    )

    def __repr__(self) -> str:
        """Return a string representation of the model instance.

        Returns:
            str: A string showing the model class name and ID
        """
        return f"<{self.__class__.__name__}(id={self.id})>"

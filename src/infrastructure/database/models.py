"""Database models for the items table."""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.base import BaseModel

NAME_MAX_LENGTH = 255


class Item(BaseModel):
    """A persisted item.

    Free-text columns default to an empty string; ``date_of_birth`` is the
    only nullable column.
    """

    __tablename__ = "items"

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    sex: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, default=""
    )
    phone_number: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, default=""
    )
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")

"""Item request and response schemas.

Wire names are camelCase (``dateOfBirth``, ``phoneNumber``, ``createdAt``);
attribute names are snake_case.
"""

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ItemResponse(BaseModel):
    """A persisted item as returned to clients."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: uuid.UUID = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Display name", examples=["Test"])
    description: str = Field(default="", description="Free-form description")
    date_of_birth: date | None = Field(
        default=None, description="Calendar date (YYYY-MM-DD)", examples=["1990-01-15"]
    )
    sex: str = Field(default="")
    phone_number: str = Field(default="")
    address: str = Field(default="")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Timestamp of the last save")


class ItemPayload(BaseModel):
    """Fields accepted in create and update bodies.

    Values are kept exactly as decoded from JSON; the domain validators
    decide what is acceptable. Unknown keys are ignored and
    ``model_dump(exclude_unset=True)`` yields only the fields the client
    actually sent, keyed by attribute name.
    """

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    name: Any = None
    description: Any = None
    date_of_birth: Any = None
    sex: Any = None
    phone_number: Any = None
    address: Any = None

    def supplied(self) -> dict[str, Any]:
        """Return the supplied fields keyed by attribute name."""
        return self.model_dump(exclude_unset=True)

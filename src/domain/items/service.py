"""Item service: domain validation in front of the item store.

Every operation validates its inputs before touching the store, so a
malformed identifier never reaches a query and an invalid payload never
leaves a record half-updated.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from src.core.exceptions import NotFoundError
from src.core.observability import trace_operation
from src.domain.items.ports import ItemRecord, ItemStore
from src.domain.items.validators import (
    FIELD_LABELS,
    check_date_of_birth,
    check_item_id,
    check_name,
    check_text,
)

TEXT_FIELDS = ("description", "sex", "phone_number", "address")


class ItemService[R: ItemRecord]:
    """Create, read, update and delete items through an ``ItemStore``.

    Payloads are mappings keyed by attribute name (``date_of_birth``, not
    ``dateOfBirth``) holding the raw decoded JSON values. Keys that are not
    item fields are ignored.

    Args:
        store: The persistence collaborator.
    """

    def __init__(self, store: ItemStore[R]) -> None:
        self._store = store

    async def create(self, payload: Mapping[str, Any]) -> R:
        """Validate a new item and insert it.

        Args:
            payload: Fields of the new item; ``name`` is required.

        Returns:
            R: The persisted item with ID and timestamps.

        Raises:
            ValidationError: If a field fails validation.
        """
        with trace_operation("items.create"):
            fields: dict[str, object] = {
                "name": check_name(payload.get("name")).unwrap(),
                "date_of_birth": check_date_of_birth(
                    payload.get("date_of_birth")
                ).unwrap(),
            }
            for field in TEXT_FIELDS:
                fields[field] = check_text(field, payload.get(field)).unwrap()

            item = await self._store.insert(fields)
            logger.info("Item created", item_id=str(item.id))
            return item

    async def find_all(self) -> list[R]:
        """Return every item, oldest first."""
        with trace_operation("items.find_all"):
            return await self._store.find_all(order_by="created_at")

    async def find_one(self, item_id: str) -> R:
        """Return the item with ``item_id``.

        Args:
            item_id: Identifier as received from the client.

        Returns:
            R: The stored item.

        Raises:
            ValidationError: If ``item_id`` is not a canonical UUID.
            NotFoundError: If no item has this identifier.
        """
        with trace_operation("items.find_one", item_id=item_id):
            parsed_id = check_item_id(item_id).unwrap()
            item = await self._store.find_by_id(parsed_id)
            if item is None:
                raise NotFoundError(
                    f'Item with id "{item_id}" not found',
                    context={"item_id": item_id},
                )
            return item

    async def update(self, item_id: str, payload: Mapping[str, Any]) -> R:
        """Apply a partial update to an existing item.

        Only fields present in ``payload`` change. All supplied fields are
        validated before any of them is applied. The store refreshes
        ``updated_at`` even when the payload is empty.

        Args:
            item_id: Identifier as received from the client.
            payload: Fields to change.

        Returns:
            R: The saved item.

        Raises:
            ValidationError: If ``item_id`` or a supplied field is invalid.
            NotFoundError: If no item has this identifier.
        """
        with trace_operation("items.update", item_id=item_id):
            item = await self.find_one(item_id)
            changes = self._validate_changes(payload)

            for field, value in changes.items():
                setattr(item, field, value)

            saved = await self._store.save(item)
            logger.info(
                "Item updated",
                item_id=str(saved.id),
                fields=[FIELD_LABELS[field] for field in changes],
            )
            return saved

    async def remove(self, item_id: str) -> R:
        """Delete an item and return its last known state.

        Args:
            item_id: Identifier as received from the client.

        Returns:
            R: The removed item.

        Raises:
            ValidationError: If ``item_id`` is not a canonical UUID.
            NotFoundError: If no item has this identifier.
        """
        with trace_operation("items.remove", item_id=item_id):
            item = await self.find_one(item_id)
            await self._store.delete(item)
            logger.info("Item removed", item_id=item_id)
            return item

    @staticmethod
    def _validate_changes(payload: Mapping[str, Any]) -> dict[str, object]:
        changes: dict[str, object] = {}
        for field in FIELD_LABELS:
            if field not in payload:
                continue
            value = payload[field]
            if field == "name":
                changes[field] = check_name(value).unwrap()
            elif field == "date_of_birth":
                changes[field] = check_date_of_birth(value).unwrap()
            else:
                changes[field] = check_text(field, value).unwrap()
        return changes

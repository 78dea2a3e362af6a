"""Item domain: validators, the store port, and the service using them."""

from src.domain.items.ports import ItemRecord, ItemStore
from src.domain.items.service import ItemService

__all__ = ["ItemRecord", "ItemService", "ItemStore"]

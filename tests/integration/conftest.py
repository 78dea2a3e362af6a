"""Shared fixtures for integration tests.

The application runs with its real middleware, guards, handlers and domain
service; only the item store is replaced by an in-memory implementation so
the HTTP contract can be exercised without a database.
"""

import uuid
from collections.abc import AsyncGenerator, Generator, Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from loguru import logger

from src.api.dependencies import get_item_store
from src.api.main import create_app
from src.core.config import ObservabilityConfig, Settings, get_settings
from src.core.context import RequestContext
from src.core.logging import _state

EPOCH = datetime(2026, 1, 1, tzinfo=UTC)


@dataclass
class StoredItem:
    """Record kept by the in-memory store."""

    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime
    description: str = ""
    date_of_birth: date | None = None
    sex: str = ""
    phone_number: str = ""
    address: str = ""


@dataclass
class InMemoryItemStore:
    """Item store keeping records in a dict, with a strictly increasing clock."""

    records: dict[uuid.UUID, StoredItem] = field(default_factory=dict)
    ticks: int = 0

    def _now(self) -> datetime:
        self.ticks += 1
        return EPOCH + timedelta(milliseconds=self.ticks)

    async def insert(self, fields: Mapping[str, object]) -> StoredItem:
        now = self._now()
        values: dict[str, Any] = dict(fields)
        item = StoredItem(id=uuid.uuid4(), created_at=now, updated_at=now, **values)
        self.records[item.id] = item
        return item

    async def find_all(self, order_by: str = "created_at") -> list[StoredItem]:
        return sorted(
            self.records.values(),
            key=lambda item: (getattr(item, order_by), item.id),
        )

    async def find_by_id(self, entity_id: uuid.UUID) -> StoredItem | None:
        return self.records.get(entity_id)

    async def save(self, obj: StoredItem) -> StoredItem:
        obj.updated_at = self._now()
        return obj

    async def delete(self, obj: StoredItem) -> None:
        del self.records[obj.id]


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop log sinks and keep create_app from reinstalling them."""
    logger.remove()
    monkeypatch.setattr(_state, "configured", True)
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def clean_request_context() -> Generator[None]:
    """Clear the request context and cached settings around each test."""
    RequestContext.clear()
    get_settings.cache_clear()
    yield
    RequestContext.clear()
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with tracing disabled."""
    return Settings(observability_config=ObservabilityConfig(enable_tracing=False))


@pytest.fixture
def store() -> InMemoryItemStore:
    """Empty in-memory item store."""
    return InMemoryItemStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryItemStore) -> FastAPI:
    """The application wired to the in-memory store."""
    application = create_app(settings)
    application.dependency_overrides[get_item_store] = lambda: store
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client calling the application in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as async_client:
        yield async_client

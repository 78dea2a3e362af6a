"""Unit tests for request context management."""

import asyncio
import uuid

import pytest

from src.core.context import (
    RequestContext,
    generate_correlation_id,
    generate_request_id,
)


@pytest.mark.unit
class TestRequestContext:
    """Test cases for RequestContext."""

    def test_set_and_get(self) -> None:
        """Test storing and reading the correlation ID."""
        RequestContext.set_correlation_id("abc-123")
        assert RequestContext.get_correlation_id() == "abc-123"

    def test_clear(self) -> None:
        """Test clearing the context."""
        RequestContext.set_correlation_id("abc-123")
        RequestContext.clear()
        assert RequestContext.get_correlation_id() is None

    async def test_isolated_between_tasks(self) -> None:
        """Test that concurrent tasks see their own correlation ID."""

        async def worker(value: str) -> str | None:
            RequestContext.set_correlation_id(value)
            await asyncio.sleep(0)
            return RequestContext.get_correlation_id()

        results = await asyncio.gather(worker("first"), worker("second"))

        assert results == ["first", "second"]


@pytest.mark.unit
class TestIdGenerators:
    """Test cases for ID generation."""

    def test_correlation_id_is_uuid4(self) -> None:
        """Test that correlation IDs are UUID4 strings."""
        assert uuid.UUID(generate_correlation_id()).version == 4

    def test_request_id_format(self) -> None:
        """Test that request IDs are prefixed UUID4 strings."""
        request_id = generate_request_id()

        assert request_id.startswith("req-")
        assert uuid.UUID(request_id.removeprefix("req-")).version == 4

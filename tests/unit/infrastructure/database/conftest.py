"""Fixtures for database infrastructure unit tests."""

from collections.abc import Generator
from typing import cast

import pytest
from pytest_mock import MockerFixture, MockType
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.infrastructure.database.session import _db_manager


@pytest.fixture
def mock_session(mocker: MockerFixture) -> MockType:
    """Mock AsyncSession: coroutine methods are AsyncMocks, the rest are Mocks."""
    return cast("MockType", mocker.AsyncMock(spec=AsyncSession))


@pytest.fixture
def mock_async_engine(mocker: MockerFixture) -> MockType:
    """Mock AsyncEngine with async dispose.

    Args:
        mocker: Pytest mocker fixture.

    Returns:
        MockType: Mock engine.
    """
    engine = mocker.MagicMock(spec=AsyncEngine)
    engine.dispose = mocker.AsyncMock()
    return cast("MockType", engine)


@pytest.fixture(autouse=True)
def reset_db_manager() -> Generator[None]:
    """Reset the global database manager around each test."""
    _db_manager.reset()
    yield
    _db_manager.reset()

"""Conftest for API unit tests."""

import pytest
from pytest_mock import MockerFixture, MockType

from src.core.config import ObservabilityConfig, Settings


@pytest.fixture
def app_settings() -> Settings:
    """Settings for building an application in unit tests."""
    return Settings(observability_config=ObservabilityConfig(enable_tracing=False))


@pytest.fixture
def mock_api_main_dependencies(mocker: MockerFixture) -> dict[str, MockType]:
    """Mock the startup collaborators of src.api.main.

    Returns:
        dict[str, MockType]: The mocks keyed by the name they replace.
    """
    mocks = {
        name: mocker.patch(f"src.api.main.{name}", new_callable=mocker.AsyncMock)
        for name in ("check_database_connection", "close_database", "create_schema")
    }
    mocks["check_database_connection"].return_value = (True, None)

    for name in ("setup_logging", "setup_tracing", "instrument_app", "get_engine"):
        mocks[name] = mocker.patch(f"src.api.main.{name}")

    pool = mocks["get_engine"].return_value.pool
    pool.checkedout.return_value = 0
    pool.size.return_value = 5
    pool.overflow.return_value = 0
    return mocks

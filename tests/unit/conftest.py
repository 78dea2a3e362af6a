"""Shared fixtures for unit tests."""

import os
import uuid
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Any

import pytest
from pytest_mock import MockerFixture, MockType

from src.core.config import LogConfig, Settings, get_settings
from src.core.context import RequestContext
from src.core.error_context import _get_sensitive_fields


@dataclass
class FakeItem:
    """Plain record with the attributes of a persisted item."""

    name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    description: str = ""
    date_of_birth: date | None = None
    sex: str = ""
    phone_number: str = ""
    address: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@pytest.fixture
def make_item() -> Callable[..., FakeItem]:
    """Factory for stored items; keyword arguments override defaults."""

    def _make(**overrides: Any) -> FakeItem:
        overrides.setdefault("name", "Widget")
        return FakeItem(**overrides)

    return _make


@pytest.fixture
def fake_item(make_item: Callable[..., FakeItem]) -> FakeItem:
    """Provide a stored item with a fixed identifier."""
    return make_item(
        id=uuid.UUID("6f1c2c1e-9a4b-4c39-8d0e-2f6a1b3c4d5e"),
        description="A small widget",
    )


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Provide Settings built from test environment variables.

    Returns:
        Settings: Settings object with test defaults.
    """
    monkeypatch.setenv("APP_NAME", "TestApp")
    monkeypatch.setenv("APP_VERSION", "1.0.0")
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("API_HOST", "127.0.0.1")
    monkeypatch.setenv("API_PORT", "3000")
    return Settings()


@pytest.fixture
def mock_get_settings(mocker: MockerFixture) -> MockType:
    """Mock get_settings in error_context with custom sensitive fields.

    Args:
        mocker: Pytest mocker fixture.

    Returns:
        MockType: Mock get_settings function.
    """
    mock_settings = mocker.Mock(spec=Settings)
    mock_log_config = mocker.Mock(spec=LogConfig)
    mock_log_config.sensitive_fields = ["custom_secret", "national_id"]
    mock_settings.log_config = mock_log_config

    mock_get_settings_fn = mocker.patch("src.core.error_context.get_settings")
    mock_get_settings_fn.return_value = mock_settings

    _get_sensitive_fields.cache_clear()
    return mock_get_settings_fn


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()
    yield
    get_settings.cache_clear()
    _get_sensitive_fields.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[pytest.MonkeyPatch]:
    """Remove application environment variables for the duration of a test.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Yields:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    original_env = os.environ.copy()

    env_prefixes = [
        "APP_",
        "API_",
        "ENVIRONMENT",
        "DEBUG",
        "PORT",
        "LOG_CONFIG__",
        "OBSERVABILITY_CONFIG__",
        "DATABASE_CONFIG__",
    ]
    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield monkeypatch

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clean_context() -> Generator[None]:
    """Clear the request context before and after each test."""
    RequestContext.clear()
    yield
    RequestContext.clear()

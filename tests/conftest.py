"""Shared test fixtures for the Clientele test suite."""

import os
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from itertools import count
from pathlib import Path
from typing import Any

import pytest
import structlog

from clientele.adjustments import ProductPriceAdjustmentStore
from clientele.customers import CustomerStore
from clientele.datastore.stores.inmemory import InMemoryDocumentStore
from clientele.entities import EntityStore
from clientele.identity import InMemoryIdentityProvider
from clientele.memberships import MembershipStore

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


class TickingClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self._start = start
        self._ticks = count()

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"CLIENTELE_DEBUG": "true"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from clientele.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults so no test logs to another test's captured stream."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def entities(documents: InMemoryDocumentStore, clock: TickingClock) -> EntityStore:
    return EntityStore(documents, clock=clock)


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    """Fresh in-memory identity provider."""
    return InMemoryIdentityProvider()


@pytest.fixture
def customers(
    entities: EntityStore, identity: InMemoryIdentityProvider
) -> CustomerStore:
    return CustomerStore(entities, identity)


@pytest.fixture
def memberships(entities: EntityStore) -> MembershipStore:
    return MembershipStore(entities)


@pytest.fixture
def adjustments(entities: EntityStore) -> ProductPriceAdjustmentStore:
    return ProductPriceAdjustmentStore(entities)

# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Callable

import pendulum
import pytest

from piecework import configuration
from piecework.model.entry import Entry
from piecework.repository.entry import EntryRepository
from piecework.repository.kv_store import MemoryKeyValueStore
from piecework.repository.settings import SettingsRepository

FIXED_NOW = pendulum.datetime(2024, 3, 15, 12, 0, 0, tz="UTC")


def make_entry(date: str, unit_count: int = 100, earnings: float | None = None) -> Entry:
    """Entry with earnings at the default rate unless given."""
    if earnings is None:
        earnings = round(unit_count * 0.20, 2)
    return {"date": date, "unit_count": unit_count, "earnings": earnings}


@pytest.fixture
def clock() -> Callable[[], pendulum.DateTime]:
    return lambda: FIXED_NOW


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def settings_repository(memory_store: MemoryKeyValueStore) -> SettingsRepository:
    return SettingsRepository(memory_store)


@pytest.fixture
def entry_repository(
    memory_store: MemoryKeyValueStore,
    settings_repository: SettingsRepository,
    clock: Callable[[], pendulum.DateTime],
) -> EntryRepository:
    return EntryRepository(memory_store, settings_repository, clock)


@pytest.fixture
def app_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at a temporary location."""
    config_path = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_path)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.delenv("PIECEWORK_DATA_PATH", raising=False)
    return tmp_path

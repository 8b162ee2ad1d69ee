# SPDX-License-Identifier: MIT

import json
from typing import Any, cast

import pytest

from piecework.configuration import SETTINGS_KEY
from piecework.model.settings import SettingsUpdate
from piecework.repository.kv_store import MemoryKeyValueStore
from piecework.repository.settings import (
    SettingsRepository,
    validate_settings_update,
)
from piecework.template.settings import get_settings_template


def test_defaults_written_on_first_read(
    settings_repository: SettingsRepository, memory_store: MemoryKeyValueStore
) -> None:
    assert SETTINGS_KEY not in memory_store.data

    settings = settings_repository.get_settings()

    assert settings == get_settings_template()
    assert json.loads(memory_store.data[SETTINGS_KEY]) == {
        "ratePerUnit": 0.20,
        "currency": "PHP",
        "theme": "light",
        "dateFormat": "YYYY-MM-DD",
        "userName": None,
    }


def test_save_merges_partial_update(settings_repository: SettingsRepository) -> None:
    assert settings_repository.save_settings({"rate_per_unit": 0.25})
    assert settings_repository.save_settings({"user_name": "Ana"})

    settings = settings_repository.get_settings()
    assert settings["rate_per_unit"] == 0.25
    assert settings["user_name"] == "Ana"
    assert settings["currency"] == "PHP"


@pytest.mark.parametrize(
    "update",
    [
        {"rate_per_unit": 0},
        {"rate_per_unit": -0.5},
        {"rate_per_unit": "0.2"},
        {"rate_per_unit": True},
        {"currency": "php"},
        {"currency": "PESO"},
        {"theme": 3},
        {"user_name": 7},
        {"font": "mono"},
    ],
)
def test_save_rejects_invalid_updates(
    settings_repository: SettingsRepository, update: dict[str, Any]
) -> None:
    assert not settings_repository.save_settings(cast(SettingsUpdate, update))
    assert settings_repository.get_settings() == get_settings_template()


def test_validate_settings_update_accepts_known_fields() -> None:
    assert validate_settings_update({"rate_per_unit": 1, "currency": "USD"}) is None
    assert validate_settings_update({"user_name": None}) is None
    assert validate_settings_update({"colour": "red"}) is not None


@pytest.mark.parametrize("payload", ["{not json", "[1, 2]", "null"])
def test_malformed_settings_fall_back_to_defaults(
    settings_repository: SettingsRepository,
    memory_store: MemoryKeyValueStore,
    payload: str,
) -> None:
    memory_store.data[SETTINGS_KEY] = payload
    assert settings_repository.get_settings() == get_settings_template()


def test_invalid_stored_fields_are_ignored(
    settings_repository: SettingsRepository, memory_store: MemoryKeyValueStore
) -> None:
    memory_store.data[SETTINGS_KEY] = json.dumps(
        {"ratePerUnit": -1, "currency": "USD", "legacy": True}
    )

    settings = settings_repository.get_settings()
    assert settings["rate_per_unit"] == 0.20
    assert settings["currency"] == "USD"
    assert "legacy" not in settings


def test_reset_restores_defaults(settings_repository: SettingsRepository) -> None:
    settings_repository.save_settings({"rate_per_unit": 1.5, "currency": "USD"})
    assert settings_repository.reset_settings()
    assert settings_repository.get_settings() == get_settings_template()


def test_unsupported_storage_returns_defaults() -> None:
    store = MemoryKeyValueStore(fail_writes=True)
    repository = SettingsRepository(store)

    assert repository.get_settings() == get_settings_template()
    assert not repository.save_settings({"rate_per_unit": 1.0})
    assert not repository.reset_settings()
    assert repository.get_raw_size() == 0


def test_failed_write_reports_failure(
    settings_repository: SettingsRepository, memory_store: MemoryKeyValueStore
) -> None:
    settings_repository.get_settings()
    memory_store.fail_writes = True

    assert not settings_repository.save_settings({"rate_per_unit": 1.0})
    assert settings_repository.get_settings()["rate_per_unit"] == 0.20

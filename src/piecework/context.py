# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Callable, Optional

import pendulum

from piecework import configuration, time
from piecework.repository.configuration import ConfigurationRepository
from piecework.repository.entry import EntryRepository
from piecework.repository.kv_store import FileKeyValueStore, KeyValueStore, probe_store
from piecework.repository.settings import SettingsRepository
from piecework.service.rate import RateModel


class AppContext:
    """Everything a command needs, built once per invocation."""

    def __init__(
        self,
        store: KeyValueStore,
        configuration_repository: Optional[ConfigurationRepository] = None,
        clock: Callable[[], pendulum.DateTime] = time.now_utc,
        today: Callable[[], pendulum.Date] = time.today_local,
        data_path: Optional[Path] = None,
    ) -> None:
        is_supported = probe_store(store)
        self.configuration_repository = configuration_repository
        self.settings_repository = SettingsRepository(store, is_supported)
        self.entry_repository = EntryRepository(
            store, self.settings_repository, clock, is_supported
        )
        self.clock = clock
        self.today = today
        self.data_path = data_path

    @property
    def is_supported(self) -> bool:
        return self.entry_repository.is_supported

    def rate_model(self) -> RateModel:
        """Rate model for the settings as currently stored."""
        return RateModel.from_settings(self.settings_repository.get_settings())

    def flush(self) -> None:
        if self.configuration_repository is not None:
            self.configuration_repository.flush()


def build_app_context(
    data_path: Optional[Path] = None,
    configuration_repository: Optional[ConfigurationRepository] = None,
) -> AppContext:
    data_path = data_path or configuration.DATA_PATH
    return AppContext(
        FileKeyValueStore(data_path),
        configuration_repository or ConfigurationRepository(),
        data_path=data_path,
    )

# SPDX-License-Identifier: MIT

import json
import logging
import re
from typing import Any, Optional, cast

from piecework.configuration import SETTINGS_KEY
from piecework.model.settings import (
    SETTINGS_FIELDS,
    SETTINGS_WIRE_NAMES,
    Settings,
    SettingsUpdate,
)
from piecework.repository.kv_store import (
    KeyValueStore,
    KeyValueStoreError,
    probe_store,
)
from piecework.template.settings import get_settings_template

logger = logging.getLogger(__name__)

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")

_FROM_WIRE = {wire: name for name, wire in SETTINGS_WIRE_NAMES.items()}


def settings_to_wire(settings: Settings) -> dict[str, Any]:
    return {SETTINGS_WIRE_NAMES[name]: value for name, value in settings.items()}


def settings_from_wire(raw: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase keys to field names, dropping anything we don't know."""
    return {_FROM_WIRE[key]: value for key, value in raw.items() if key in _FROM_WIRE}


def validate_settings_update(update: dict[str, Any]) -> Optional[str]:
    """Return a reason the update is unacceptable, or None if it is fine."""
    unknown = set(update) - SETTINGS_FIELDS
    if unknown:
        return f"unknown settings: {', '.join(sorted(unknown))}"

    if "rate_per_unit" in update:
        rate = update["rate_per_unit"]
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            return f"rate_per_unit must be a positive number, got {rate!r}"
    if "currency" in update:
        currency = update["currency"]
        if not isinstance(currency, str) or not CURRENCY_PATTERN.match(currency):
            return f"currency must be a 3 letter code, got {currency!r}"
    for field in ("theme", "date_format"):
        if field in update and not isinstance(update[field], str):
            return f"{field} must be a string"
    if "user_name" in update:
        user_name = update["user_name"]
        if user_name is not None and not isinstance(user_name, str):
            return "user_name must be a string"
    return None


class SettingsRepository:
    def __init__(
        self, store: KeyValueStore, is_supported: Optional[bool] = None
    ) -> None:
        self.store = store
        self.is_supported = probe_store(store) if is_supported is None else is_supported

    def __load_raw(self) -> Optional[dict[str, Any]]:
        raw = self.store.get(SETTINGS_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("malformed settings data, using defaults: %s", e)
            return {}
        if not isinstance(data, dict):
            logger.error("settings data is not an object, using defaults")
            return {}

        stored = {}
        for field, value in settings_from_wire(data).items():
            reason = validate_settings_update({field: value})
            if reason is not None:
                logger.error("ignoring stored setting: %s", reason)
                continue
            stored[field] = value
        return stored

    def __save(self, settings: Settings) -> None:
        self.store.set(SETTINGS_KEY, json.dumps(settings_to_wire(settings)))

    def get_settings(self) -> Settings:
        """Stored settings over the defaults. Created with defaults on first read."""
        settings = get_settings_template()
        if not self.is_supported:
            return settings

        try:
            stored = self.__load_raw()
            if stored is None:
                self.__save(settings)
                return settings
        except KeyValueStoreError as e:
            logger.error("cannot read settings: %s", e)
            return settings

        merged = cast(Settings, {**settings, **stored})
        return merged

    def save_settings(self, update: SettingsUpdate) -> bool:
        """Merge a partial update into the stored settings."""
        if not self.is_supported:
            logger.warning("cannot save settings: storage not supported")
            return False

        reason = validate_settings_update(cast(dict[str, Any], update))
        if reason is not None:
            logger.warning("rejected settings update: %s", reason)
            return False

        settings = cast(Settings, {**self.get_settings(), **update})
        try:
            self.__save(settings)
        except KeyValueStoreError:
            logger.exception("error saving settings")
            return False
        return True

    def reset_settings(self) -> bool:
        if not self.is_supported:
            return False
        try:
            self.__save(get_settings_template())
        except KeyValueStoreError:
            logger.exception("error resetting settings")
            return False
        return True

    def get_raw_size(self) -> int:
        if not self.is_supported:
            return 0
        try:
            raw = self.store.get(SETTINGS_KEY) or ""
        except KeyValueStoreError:
            return 0
        return len(raw.encode("utf-8"))

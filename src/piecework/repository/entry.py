# SPDX-License-Identifier: MIT

import json
import logging
import math
from copy import deepcopy
from typing import Any, Callable, Optional, cast

import pendulum

from piecework import time
from piecework.configuration import ENTRIES_KEY
from piecework.model.entry import (
    ENTRY_FIELDS,
    ENTRY_UPDATE_FIELDS,
    ENTRY_WIRE_NAMES,
    Entry,
    EntryUpdate,
)
from piecework.model.snapshot import SNAPSHOT_VERSION, Snapshot, StorageStats
from piecework.repository.kv_store import (
    KeyValueStore,
    KeyValueStoreError,
    probe_store,
)
from piecework.repository.settings import (
    SettingsRepository,
    settings_from_wire,
    settings_to_wire,
)
from piecework.service.rate import MAX_UNIT_COUNT

logger = logging.getLogger(__name__)

_FROM_WIRE = {wire: name for name, wire in ENTRY_WIRE_NAMES.items()}


def entry_to_wire(entry: Entry) -> dict[str, Any]:
    return {ENTRY_WIRE_NAMES[name]: value for name, value in entry.items()}


def entry_from_wire(raw: dict[str, Any]) -> dict[str, Any]:
    return {_FROM_WIRE[key]: value for key, value in raw.items() if key in _FROM_WIRE}


def _is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def is_valid_entry(entry: Any) -> bool:
    """
    Structural check shared by save and import.

    A valid entry has a real calendar date in 'YYYY-MM-DD' form, a unit count
    between 0 and MAX_UNIT_COUNT and a non-negative earnings amount.
    """
    if not isinstance(entry, dict):
        return False
    if "date" not in entry or "unit_count" not in entry or "earnings" not in entry:
        return False

    if not time.is_calendar_date_str(entry["date"]):
        return False

    if not _is_non_negative_number(entry["unit_count"]):
        return False
    if entry["unit_count"] > MAX_UNIT_COUNT:
        return False
    if not _is_non_negative_number(entry["earnings"]):
        return False

    last_modified = entry.get("last_modified")
    if last_modified is not None and (
        isinstance(last_modified, bool) or not isinstance(last_modified, int)
    ):
        return False

    return True


class EntryRepository:
    """
    Durable collection of dated entries, at most one per calendar date.

    Every operation reads the whole collection from the store, works on it in
    memory and writes the whole collection back. Nothing is cached between
    calls.
    """

    def __init__(
        self,
        store: KeyValueStore,
        settings_repository: SettingsRepository,
        clock: Callable[[], pendulum.DateTime] = time.now_utc,
        is_supported: Optional[bool] = None,
    ) -> None:
        self.store = store
        self.settings_repository = settings_repository
        self.clock = clock
        self.is_supported = probe_store(store) if is_supported is None else is_supported

    def __load_data(self) -> list[Entry]:
        if not self.is_supported:
            return []

        try:
            raw = self.store.get(ENTRIES_KEY)
        except KeyValueStoreError as e:
            logger.error("cannot read entries: %s", e)
            return []
        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("malformed entries data, treating as empty: %s", e)
            return []
        if not isinstance(data, list):
            logger.error("entries data is not a list, treating as empty")
            return []

        entries: list[Entry] = []
        for item in data:
            if not isinstance(item, dict):
                logger.error("skipping malformed stored entry: %r", item)
                continue
            entry = entry_from_wire(item)
            if not is_valid_entry(entry):
                logger.error("skipping invalid stored entry: %r", item)
                continue
            entries.append(cast(Entry, entry))
        return entries

    def __save_data(self, entries: list[Entry]) -> None:
        self.store.set(
            ENTRIES_KEY, json.dumps([entry_to_wire(entry) for entry in entries])
        )

    def __next_last_modified(self, previous: Optional[int]) -> int:
        last_modified = time.datetime_to_millis(self.clock())
        if previous is not None and last_modified <= previous:
            last_modified = previous + 1
        return last_modified

    def __find_index(self, entries: list[Entry], date: str) -> Optional[int]:
        for index, entry in enumerate(entries):
            if entry.get("date") == date:
                return index
        return None

    def get_all(self) -> list[Entry]:
        return self.__load_data()

    def get_by_date(self, date: str) -> Optional[Entry]:
        entries = self.__load_data()
        index = self.__find_index(entries, date)
        if index is None:
            return None
        return entries[index]

    def get_sorted(self, ascending: bool = False) -> list[Entry]:
        """All entries by date, newest first unless ascending."""
        return sorted(
            self.__load_data(),
            key=lambda entry: entry.get("date", ""),
            reverse=not ascending,
        )

    def get_in_range(self, start: str, end: str) -> list[Entry]:
        """Entries dated between start and end ('YYYY-MM-DD'), both inclusive."""
        return [
            entry
            for entry in self.__load_data()
            if start <= entry.get("date", "") <= end
        ]

    def save(self, entry: Entry) -> bool:
        """Insert the entry, or merge it into the one already stored for its date."""
        if not self.is_supported:
            logger.warning("cannot save entry: storage not supported")
            return False

        unknown = set(entry) - ENTRY_FIELDS
        if unknown:
            logger.warning("rejected entry with unknown fields: %s", sorted(unknown))
            return False
        if not is_valid_entry(entry):
            logger.warning("rejected invalid entry: %r", entry)
            return False

        entries = self.__load_data()
        index = self.__find_index(entries, entry["date"])

        if index is not None:
            existing = entries[index]
            merged = cast(Entry, {**existing, **deepcopy(entry)})
            merged["last_modified"] = self.__next_last_modified(
                existing.get("last_modified")
            )
            entries[index] = merged
        else:
            new_entry = deepcopy(entry)
            new_entry["last_modified"] = self.__next_last_modified(None)
            entries.append(new_entry)

        try:
            self.__save_data(entries)
        except KeyValueStoreError:
            logger.exception("error saving entry for %s", entry["date"])
            return False
        return True

    def update(self, date: str, update: EntryUpdate) -> bool:
        """Merge the given fields into the entry for `date`."""
        if not self.is_supported:
            logger.warning("cannot update entry: storage not supported")
            return False

        unknown = set(update) - ENTRY_UPDATE_FIELDS
        if unknown:
            logger.warning("rejected update with unknown fields: %s", sorted(unknown))
            return False

        entries = self.__load_data()
        index = self.__find_index(entries, date)
        if index is None:
            logger.warning("entry not found for date: %s", date)
            return False

        existing = entries[index]
        merged = cast(Entry, {**existing, **deepcopy(update)})
        if not is_valid_entry(merged):
            logger.warning("rejected invalid update for %s: %r", date, update)
            return False
        merged["last_modified"] = self.__next_last_modified(
            existing.get("last_modified")
        )
        entries[index] = merged

        try:
            self.__save_data(entries)
        except KeyValueStoreError:
            logger.exception("error updating entry for %s", date)
            return False
        return True

    def delete(self, date: str) -> bool:
        if not self.is_supported:
            logger.warning("cannot delete entry: storage not supported")
            return False

        entries = self.__load_data()
        remaining = [entry for entry in entries if entry.get("date") != date]
        if len(remaining) == len(entries):
            logger.warning("entry not found for date: %s", date)
            return False

        try:
            self.__save_data(remaining)
        except KeyValueStoreError:
            logger.exception("error deleting entry for %s", date)
            return False
        return True

    def clear_all(self) -> bool:
        if not self.is_supported:
            return False
        try:
            self.store.remove(ENTRIES_KEY)
        except KeyValueStoreError:
            logger.exception("error clearing entries")
            return False
        return True

    def export_snapshot(self, now: Optional[pendulum.DateTime] = None) -> str:
        """Entries and settings as a JSON blob that import_snapshot accepts."""
        export_date = now if now is not None else self.clock()
        snapshot: Snapshot = {
            "entries": [entry_to_wire(entry) for entry in self.__load_data()],
            "settings": settings_to_wire(self.settings_repository.get_settings()),
            "exportDate": time.datetime_to_iso_str(export_date),
            "version": SNAPSHOT_VERSION,
        }
        return json.dumps(snapshot, indent=2, ensure_ascii=False)

    def import_snapshot(self, blob: str) -> bool:
        """
        Replace the stored entries with the valid entries of an exported blob.

        Invalid entries are dropped. Stored entries are only replaced when at
        least one entry survives. Settings in the blob are merged into the
        stored settings.
        """
        if not self.is_supported:
            logger.warning("cannot import: storage not supported")
            return False

        try:
            data = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.error("cannot import, blob is not valid JSON: %s", e)
            return False
        if not isinstance(data, dict):
            logger.error("cannot import, blob is not a JSON object")
            return False

        raw_entries = data.get("entries")
        if isinstance(raw_entries, list):
            by_date: dict[str, Entry] = {}
            dropped = 0
            for raw_entry in raw_entries:
                if not isinstance(raw_entry, dict):
                    dropped += 1
                    continue
                candidate = entry_from_wire(raw_entry)
                if not is_valid_entry(candidate):
                    dropped += 1
                    continue
                entry = cast(Entry, candidate)
                # Later records for the same date merge over earlier ones
                by_date[entry["date"]] = cast(
                    Entry, {**by_date.get(entry["date"], {}), **entry}
                )
            if dropped:
                logger.warning("dropped %d invalid entries from import", dropped)

            valid_entries = list(by_date.values())
            for entry in valid_entries:
                if "last_modified" not in entry:
                    entry["last_modified"] = self.__next_last_modified(None)

            if valid_entries:
                try:
                    self.__save_data(valid_entries)
                except KeyValueStoreError:
                    logger.exception("error writing imported entries")
                    return False

        raw_settings = data.get("settings")
        if isinstance(raw_settings, dict):
            if not self.settings_repository.save_settings(
                settings_from_wire(raw_settings)  # type: ignore[arg-type]
            ):
                logger.warning("imported settings were not applied")

        return True

    def get_storage_stats(self) -> StorageStats:
        entries = self.__load_data()
        dates = sorted(entry["date"] for entry in entries if "date" in entry)

        storage_used = self.settings_repository.get_raw_size()
        if self.is_supported:
            try:
                storage_used += len((self.store.get(ENTRIES_KEY) or "").encode("utf-8"))
            except KeyValueStoreError as e:
                logger.error("cannot read entries size: %s", e)

        return {
            "total_entries": len(entries),
            "is_supported": self.is_supported,
            "oldest_entry": dates[0] if dates else None,
            "newest_entry": dates[-1] if dates else None,
            "storage_used": storage_used,
        }

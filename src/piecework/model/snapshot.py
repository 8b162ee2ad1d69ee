# SPDX-License-Identifier: MIT

from typing import Any, TypedDict

SNAPSHOT_VERSION = "1.0"


class Snapshot(TypedDict):
    """Export blob, wire (camelCase) form."""

    entries: list[dict[str, Any]]
    settings: dict[str, Any]
    exportDate: str
    version: str


class StorageStats(TypedDict):
    total_entries: int
    is_supported: bool
    oldest_entry: str | None
    newest_entry: str | None
    storage_used: int  # bytes

# SPDX-License-Identifier: MIT

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

PROBE_KEY = "piecework-probe"


class KeyValueStoreError(Exception):
    """Raised when the durable medium rejects a read or write."""

    pass


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class FileKeyValueStore:
    """One file per key inside a data directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def __path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.__path_for(key)
        try:
            if not path.is_file():
                return None
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise KeyValueStoreError(f"cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self.__path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write next to the target then swap, so readers never see half a file
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                    tmp_file.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise KeyValueStoreError(f"cannot write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self.__path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise KeyValueStoreError(f"cannot remove {path}: {e}") from e


class MemoryKeyValueStore:
    """
    Dict backed store.

    `fail_writes` makes every set/remove fail, `quota_bytes` makes a set fail
    once the total size of all values would exceed the quota.
    """

    def __init__(
        self, fail_writes: bool = False, quota_bytes: Optional[int] = None
    ) -> None:
        self.data: dict[str, str] = {}
        self.fail_writes = fail_writes
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise KeyValueStoreError("store is read-only")
        if self.quota_bytes is not None:
            used = sum(
                len(v.encode("utf-8")) for k, v in self.data.items() if k != key
            )
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise KeyValueStoreError("quota exceeded")
        self.data[key] = value

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise KeyValueStoreError("store is read-only")
        self.data.pop(key, None)


def probe_store(store: KeyValueStore) -> bool:
    """Capability probe: can we write to and remove from the medium at all?"""
    try:
        store.set(PROBE_KEY, PROBE_KEY)
        store.remove(PROBE_KEY)
        return True
    except KeyValueStoreError as e:
        logger.warning("durable storage unavailable: %s", e)
        return False

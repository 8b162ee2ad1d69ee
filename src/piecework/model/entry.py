# SPDX-License-Identifier: MIT

from typing import NotRequired, TypedDict, Union


class Entry(TypedDict):
    date: str  # YYYY-MM-DD, unique within the store
    unit_count: Union[int, float]
    earnings: float
    last_modified: NotRequired[int]  # epoch milliseconds, bookkeeping only


class EntryUpdate(TypedDict, total=False):
    unit_count: Union[int, float]
    earnings: float


ENTRY_FIELDS = frozenset(Entry.__annotations__)
ENTRY_UPDATE_FIELDS = frozenset(EntryUpdate.__annotations__)

# snake_case in memory, camelCase on disk and in export blobs
ENTRY_WIRE_NAMES = {
    "date": "date",
    "unit_count": "unitCount",
    "earnings": "earnings",
    "last_modified": "lastModified",
}

"""In-memory memoization of computed dashboards."""
import hashlib
from collections import OrderedDict
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar('T')


class ResultCache(Generic[T]):
    """Bounded least-recently-used cache keyed by input fingerprints."""

    def __init__(self, max_entries: int = 32):
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, T] = OrderedDict()

    def get(self, key: str) -> T | None:
        """Get cached item, returning None if not found."""
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def save(self, key: str, value: T) -> None:
        """Save item, evicting the least recently used entry when full."""
        if self.max_entries == 0:
            return
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def exists(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def fingerprint(records: list[BaseModel], *parts) -> str:
    """Stable key for a record collection plus any extra inputs.

    Records hash by value, so an equal collection rebuilt by the caller maps
    to the same key.
    """
    digest = hashlib.sha256()
    digest.update(str(len(records)).encode())
    for record in records:
        digest.update(record.model_dump_json().encode())
        digest.update(b"\x1e")
    for part in parts:
        if isinstance(part, BaseModel):
            part = part.model_dump_json()
        digest.update(str(part).encode())
        digest.update(b"\x1f")
    return digest.hexdigest()

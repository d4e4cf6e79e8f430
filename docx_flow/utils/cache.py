"""In-memory cache scoped to one conversion pass."""

from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable, Optional

_MISSING = object()


class MetadataCache:
    """
    Bounded insertion-ordered cache.

    One instance is created per conversion and passed through the
    conversion context, so unrelated conversions never share entries.
    """

    def __init__(self, max_size: int = 1024) -> None:
        self.max_size = max(1, int(max_size))
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str, default: Optional[Any] = None) -> Optional[Any]:
        if key in self._entries:
            self.hits += 1
            self._entries.move_to_end(key)
            return self._entries[key]
        self.misses += 1
        return default

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def get_or_set(self, key: str, factory: Callable[[], Any]) -> Any:
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = factory()
            self.set(key, value)
        return value

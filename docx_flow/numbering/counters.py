"""List counter state for one conversion pass."""

from __future__ import annotations

from typing import Any, Dict, Protocol, Tuple, runtime_checkable

from ..exceptions import NumberingError

MAX_LIST_LEVEL = 8


@runtime_checkable
class ListCounterContext(Protocol):
    """Counter store keyed by (list id, level)."""

    def get(self, list_id: Any, level: int) -> int: ...

    def increment(self, list_id: Any, level: int) -> int: ...

    def reset(self, list_id: Any, level: int) -> None: ...


class ListCounterStore:
    """Dict-backed :class:`ListCounterContext`; unknown keys read as 0."""

    def __init__(self) -> None:
        self._counters: Dict[Tuple[str, int], int] = {}

    @staticmethod
    def _key(list_id: Any, level: int) -> Tuple[str, int]:
        return (str(list_id), int(level))

    def get(self, list_id: Any, level: int) -> int:
        return self._counters.get(self._key(list_id, level), 0)

    def increment(self, list_id: Any, level: int) -> int:
        key = self._key(list_id, level)
        value = self._counters.get(key, 0) + 1
        self._counters[key] = value
        return value

    def set(self, list_id: Any, level: int, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise NumberingError("Counter value must be a non-negative integer", {"list_id": list_id, "value": value})
        self._counters[self._key(list_id, level)] = value

    def reset(self, list_id: Any, level: int) -> None:
        self._counters.pop(self._key(list_id, level), None)

    def clear(self) -> None:
        self._counters.clear()

    def snapshot(self) -> Dict[str, int]:
        return {f"{list_id}:{level}": value for (list_id, level), value in self._counters.items()}


def advance_list_counter(context: ListCounterContext, list_id: Any, level: int) -> int:
    """Increment ``level`` and reset every deeper level up to the maximum depth."""
    value = context.increment(list_id, level)
    for deeper in range(level + 1, MAX_LIST_LEVEL + 1):
        context.reset(list_id, deeper)
    return value

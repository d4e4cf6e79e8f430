"""Multi-level numbering paths."""

from __future__ import annotations

import math
from typing import Any, List, Optional

from .counters import ListCounterContext


def build_numbering_path(
    num_id: Any,
    level: float,
    counter_value: int,
    counter_context: Optional[ListCounterContext] = None,
) -> List[int]:
    """
    Build the counter path for a list item.

    Parent levels read their current counter from ``counter_context``; a
    parent that has not been incremented yet (value <= 0), or any parent when
    no context is supplied, displays as 1.

    Args:
        num_id: List id; parents are only queried when it is not ``None``
        level: Target level, floored and clamped at 0
        counter_value: Counter of the target level
        counter_context: Optional counter store

    Returns:
        List of ``level + 1`` counters ending with ``counter_value``
    """
    try:
        target_level = max(int(math.floor(level)), 0)
    except (TypeError, ValueError, OverflowError):
        target_level = 0

    path: List[int] = []
    for parent_level in range(target_level):
        value = 1
        if counter_context is not None and num_id is not None:
            current = counter_context.get(num_id, parent_level)
            if isinstance(current, (int, float)) and current > 0:
                value = int(current)
        path.append(value)
    path.append(counter_value)
    return path

"""Block id generation."""

from __future__ import annotations

from itertools import count
from typing import Callable, Optional

BlockIdGenerator = Callable[[str], str]


def normalize_prefix(prefix: Optional[str]) -> str:
    if not prefix:
        return ""
    return str(prefix).strip()


def create_block_id_generator(prefix: Optional[str] = "") -> BlockIdGenerator:
    """Return a generator producing ``"{prefix}{n}-{kind}"`` with ``n`` counting from 0."""
    normalized = normalize_prefix(prefix)
    counter = count()

    def next_id(kind: str) -> str:
        return f"{normalized}{next(counter)}-{kind}"

    return next_id

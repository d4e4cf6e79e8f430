"""Wire serialization shared by the flow models."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_wire(value: Any) -> Any:
    """Recursively convert dataclasses to camelCase dicts, dropping ``None`` fields."""
    if is_dataclass(value) and not isinstance(value, type):
        result: Dict[str, Any] = {}
        for item in fields(value):
            field_value = getattr(value, item.name)
            if field_value is None:
                continue
            result[snake_to_camel(item.name)] = to_wire(field_value)
        return result
    if isinstance(value, dict):
        return {key: to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    return value


class WireModel:
    """Mixin adding :meth:`to_dict` to dataclass models."""

    __slots__ = ()

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)

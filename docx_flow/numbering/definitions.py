"""Numbering definition lookup and marker formatting."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..utils.coerce import pick_number

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_TEXT = "%1."
DEFAULT_FORMAT = "decimal"

_PLACEHOLDER_RE = re.compile(r"%([1-9])")

_BULLET_GLYPHS = {
    "\uf0b7": "\u2022",
    "\uf0d8": "\u25d8",
    "\uf0a7": "\u25ba",
    "\uf0fc": "\u25aa",
    "\uf0a8": "\u25aa",
    "o": "\u25e6",
}


@dataclass(frozen=True, slots=True)
class LevelDefinition:
    """Resolved numbering level (lengths in twips)."""

    level: int
    format: str = DEFAULT_FORMAT
    lvl_text: str = DEFAULT_LEVEL_TEXT
    start: int = 1
    lvl_jc: str = "left"
    suffix: str = "tab"
    indent: Dict[str, float] = field(default_factory=dict)
    marker_run: Dict[str, Any] = field(default_factory=dict)
    paragraph_props: Dict[str, Any] = field(default_factory=dict)


def is_valid_numbering_id(value: Any) -> bool:
    """
    Return whether a numbering id enables list numbering.

    ``None``, numeric zero (including ``-0.0``) and ids whose string form is
    ``"0"`` disable numbering; any other number or string is valid.
    """
    if value is None:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return False
    return str(value) != "0"


def _parse_int(value: Any, fallback: int = 0) -> int:
    number = pick_number(value)
    if number is None:
        return fallback
    return int(number)


def _number_to_letters(num: int, lower: bool = True) -> str:
    if num <= 0:
        return ""
    letter = chr(ord("a" if lower else "A") + (num - 1) % 26)
    return letter * ((num - 1) // 26 + 1)


def _number_to_roman(num: int, upper: bool = True) -> str:
    if num <= 0 or num > 3999:
        return str(num)
    values = (
        (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
        (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
        (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
    )
    result = ""
    for value, symbol in values:
        while num >= value:
            result += symbol
            num -= value
    return result if upper else result.lower()


def _number_to_ordinal(num: int) -> str:
    if 10 <= num % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(num % 10, "th")
    return f"{num}{suffix}"


def format_counter(counter: int, fmt: Optional[str]) -> str:
    """Format a 1-based counter for a numbering format name."""
    fmt_lower = (fmt or DEFAULT_FORMAT).lower()
    if fmt_lower == "decimal":
        return str(counter)
    if fmt_lower == "decimalzero":
        return f"{counter:02d}" if 0 <= counter < 10 else str(counter)
    if fmt_lower == "lowerletter":
        return _number_to_letters(counter, lower=True)
    if fmt_lower == "upperletter":
        return _number_to_letters(counter, lower=False)
    if fmt_lower == "lowerroman":
        return _number_to_roman(counter, upper=False)
    if fmt_lower == "upperroman":
        return _number_to_roman(counter, upper=True)
    if fmt_lower == "ordinal":
        return _number_to_ordinal(counter)
    if fmt_lower in ("none", "nothing", "bullet"):
        return ""
    logger.debug(f"Unknown numbering format: {fmt}, using decimal")
    return str(counter)


def format_marker_text(
    template: Optional[str],
    path: Sequence[int],
    formats: Sequence[Optional[str]],
) -> str:
    """
    Substitute ``%N`` placeholders with the formatted path entries.

    ``%N`` refers to level ``N - 1``; placeholders beyond the path are
    removed. ``formats`` holds the numbering format per level; the last
    entry is the format of the item itself.
    """
    own_format = formats[-1] if formats else DEFAULT_FORMAT
    if own_format == "bullet":
        text = template or "\u2022"
        return _BULLET_GLYPHS.get(text, text)
    if own_format in ("none", "nothing"):
        return ""

    text = template if template is not None else DEFAULT_LEVEL_TEXT

    def replace(match: "re.Match[str]") -> str:
        index = int(match.group(1)) - 1
        if index >= len(path):
            return ""
        fmt = formats[index] if index < len(formats) and formats[index] else DEFAULT_FORMAT
        return format_counter(path[index], fmt)

    return _PLACEHOLDER_RE.sub(replace, text)


class NumberingDefinitions:
    """
    Looks up numbering levels from numbering definitions.

    Expected shape::

        {"abstract_numberings": {id: {"levels": {"0": {...}}}},
         "numbering_instances": {numId: {"abstractNumId": id, "levels": {"0": overrides}}}}

    Level dicts use ``format``, ``text``, ``start``, ``alignment``, ``suffix``,
    ``indent`` (twips), ``run`` and ``paragraph`` keys.
    """

    def __init__(self, numbering_data: Optional[Dict[str, Any]] = None) -> None:
        data = numbering_data or {}
        self.abstract_numberings: Dict[str, Dict[str, Any]] = {
            str(k): v for k, v in (data.get("abstract_numberings") or data.get("abstracts") or {}).items()
        }
        self.numbering_instances: Dict[str, Dict[str, Any]] = {
            str(k): v for k, v in (data.get("numbering_instances") or data.get("definitions") or {}).items()
        }

    def __bool__(self) -> bool:
        return bool(self.numbering_instances)

    def _raw_level(self, num_id: str, level: str) -> Optional[Dict[str, Any]]:
        num_instance = self.numbering_instances.get(num_id)
        if not isinstance(num_instance, dict):
            return None

        abstract_id = str(num_instance.get("abstractNumId", ""))
        abstract = self.abstract_numberings.get(abstract_id)
        if not isinstance(abstract, dict):
            return None

        levels = abstract.get("levels") or {}
        level_def = dict(levels.get(level) or {})

        overrides = num_instance.get("levels") or {}
        override = overrides.get(level)
        if isinstance(override, dict):
            for key, value in override.items():
                if value is None:
                    continue
                if key == "start" and override.get("startOverride") is False:
                    continue
                level_def[key] = value

        return level_def or None

    def resolve_level(self, num_id: Any, level: Any) -> Optional[LevelDefinition]:
        """Return the level definition for ``num_id``/``level`` or ``None``."""
        if num_id is None:
            return None
        level_index = max(_parse_int(level, 0), 0)
        raw = self._raw_level(str(num_id), str(level_index))
        if raw is None:
            logger.debug(f"No numbering definition for numId={num_id} ilvl={level_index}")
            return None

        indent = raw.get("indent")
        if not isinstance(indent, dict):
            indent = {}
            for source_key, target_key in (
                ("indent_left", "left"),
                ("indent_right", "right"),
                ("indent_hanging", "hanging"),
                ("indent_first_line", "firstLine"),
            ):
                number = pick_number(raw.get(source_key))
                if number is not None:
                    indent[target_key] = number

        fmt = raw.get("format") or DEFAULT_FORMAT
        return LevelDefinition(
            level=level_index,
            format=fmt,
            lvl_text=raw.get("text") if raw.get("text") is not None else ("\u2022" if fmt == "bullet" else DEFAULT_LEVEL_TEXT),
            start=_parse_int(raw.get("start"), 1),
            lvl_jc=raw.get("alignment") or raw.get("lvlJc") or "left",
            suffix=raw.get("suffix") or "tab",
            indent=dict(indent),
            marker_run=dict(raw.get("run") or {}),
            paragraph_props=dict(raw.get("paragraph") or {}),
        )

    def level_formats(self, num_id: Any, level: int) -> List[Optional[str]]:
        """Formats of levels 0..level, ``None`` where a level is undefined."""
        formats: List[Optional[str]] = []
        for index in range(level + 1):
            definition = self.resolve_level(num_id, index)
            formats.append(definition.format if definition else None)
        return formats

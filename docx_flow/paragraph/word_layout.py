"""List item layout: indents and marker placement in pixels."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..models.paragraph import ListMarker, MarkerRun, NumberingProperties, ParagraphIndent, WordLayout
from ..utils.coerce import pick_number
from ..utils.units import half_points_to_px, twips_to_px


def _level_indent_px(level_indent: Optional[Dict[str, Any]]) -> Dict[str, float]:
    result: Dict[str, float] = {}
    for key, value in (level_indent or {}).items():
        number = pick_number(value)
        if number is not None:
            result[key] = twips_to_px(number)
    return result


def build_marker_run(
    marker_rpr: Optional[Dict[str, Any]],
    default_font: str,
    default_size: float,
) -> MarkerRun:
    rpr = marker_rpr or {}
    size = pick_number(rpr.get("fontSize"))
    return MarkerRun(
        font_family=rpr.get("fontFamily") or default_font,
        font_size=half_points_to_px(size) if size is not None and size > 0 else default_size,
        bold=rpr.get("bold"),
        italic=rpr.get("italic"),
        color=rpr.get("color"),
    )


def compute_word_layout(
    indent: Optional[ParagraphIndent],
    numbering: NumberingProperties,
    default_font: str = "Arial",
    default_size: float = 16,
    default_tab_interval_twips: Optional[int] = None,
) -> WordLayout:
    """
    Compute list layout for a numbered paragraph.

    The level indent is the base; any field the paragraph sets explicitly
    wins. First-line mode applies when the first-line indent is positive and
    no hanging indent is present; the text then starts at ``left + firstLine``,
    otherwise at ``left``.
    """
    merged = _level_indent_px(numbering.resolved_level_indent)
    if indent is not None:
        if indent.left is not None:
            merged["left"] = indent.left
        if indent.right is not None:
            merged["right"] = indent.right
        if indent.first_line is not None:
            merged["firstLine"] = indent.first_line
            if indent.hanging is None:
                merged.pop("hanging", None)
        if indent.hanging is not None:
            merged["hanging"] = indent.hanging
            if indent.first_line is None:
                merged.pop("firstLine", None)

    left = merged.get("left") or 0
    first_line = merged.get("firstLine")
    hanging = merged.get("hanging")
    first_line_mode = bool(first_line and first_line > 0 and not hanging)
    text_start = left + first_line if first_line_mode else left

    marker = None
    if numbering.marker_text is not None:
        marker = ListMarker(
            marker_text=numbering.marker_text,
            justification=numbering.lvl_jc or "left",
            suffix=numbering.suffix or "tab",
            text_start_x=text_start,
            run=build_marker_run(numbering.resolved_marker_rpr, default_font, default_size),
        )

    return WordLayout(
        indent_left_px=left,
        first_line_px=first_line,
        hanging_px=hanging,
        first_line_indent_mode=first_line_mode,
        text_start_px=text_start,
        default_tab_interval_px=(
            twips_to_px(default_tab_interval_twips) if default_tab_interval_twips else None
        ),
        marker=marker,
    )

"""Table column width resolution."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..utils.coerce import pick_number
from ..utils.units import twips_to_px

logger = logging.getLogger(__name__)


def grid_to_px(grid: Any) -> Optional[List[float]]:
    """Convert ``[{col: twips}, ...]`` to pixels, skipping invalid or non-positive entries."""
    if not isinstance(grid, list):
        return None
    widths = []
    for entry in grid:
        if not isinstance(entry, dict):
            continue
        value = pick_number(entry.get("col"))
        if value is None or value <= 0:
            continue
        widths.append(twips_to_px(value))
    return widths or None


def _colspan(cell: Dict[str, Any]) -> int:
    value = pick_number((cell.get("attrs") or {}).get("colspan"))
    return int(value) if value is not None and value > 0 else 1


def colwidths_from_first_row(table: Dict[str, Any]) -> Optional[List[float]]:
    """
    Collect per-column width hints from the first row's cells.

    A list ``colwidth`` supplies one entry per covered column; a scalar on a
    cell spanning N columns is split evenly. Any cell without a usable hint
    voids the result.
    """
    rows = [row for row in table.get("content") or [] if isinstance(row, dict)]
    if not rows:
        return None
    cells = [cell for cell in rows[0].get("content") or [] if isinstance(cell, dict)]
    if not cells:
        return None

    widths: List[float] = []
    for cell in cells:
        colspan = _colspan(cell)
        raw = (cell.get("attrs") or {}).get("colwidth")
        if isinstance(raw, list):
            values = [pick_number(item) for item in raw]
            values = [value for value in values if value is not None and value > 0]
            if not values:
                return None
            widths.extend(values[:colspan] if len(values) >= colspan else values)
        else:
            value = pick_number(raw)
            if value is None or value <= 0:
                return None
            widths.extend([value / colspan] * colspan)
    return widths or None


def resolve_column_widths(table: Dict[str, Any]) -> Optional[List[float]]:
    """
    Resolve table column widths in pixels.

    Priority: a user-edited grid (only when ``userEdited`` is true), cell
    ``colwidth`` hints, the document grid, else ``None`` to auto-size.
    """
    attrs = table.get("attrs") or {}
    grid = attrs.get("grid")

    if attrs.get("userEdited") is True:
        widths = grid_to_px(grid)
        if widths:
            return widths

    widths = colwidths_from_first_row(table)
    if widths:
        return widths

    widths = grid_to_px(grid)
    if widths:
        return widths

    logger.debug("No column width source; table will auto-size")
    return None

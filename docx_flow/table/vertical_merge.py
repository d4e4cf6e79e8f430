"""Vertical merge placeholders for export."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from ..exceptions import TableStructureError
from ..utils.coerce import pick_number

GRID_BEFORE_PLACEHOLDER = "gridBefore"


def _int_value(value: Any) -> Optional[int]:
    number = pick_number(value)
    return int(number) if number is not None else None


def get_colspan(cell: Optional[Dict[str, Any]]) -> int:
    value = _int_value(((cell or {}).get("attrs") or {}).get("colspan"))
    return value if value is not None and value > 0 else 1


def _row_cells(row: Dict[str, Any]) -> List[Dict[str, Any]]:
    cells = row.get("content")
    return cells if isinstance(cells, list) else []


def resolve_grid_before(row: Dict[str, Any]) -> int:
    """
    Number of grid columns skipped before the first cell.

    Returns 0 when the value is invalid or when leading placeholder cells
    already stand in for the skipped columns.
    """
    attrs = row.get("attrs") or {}
    row_props = attrs.get("tableRowProperties") or {}
    raw = row_props.get("gridBefore") if isinstance(row_props, dict) else None
    if raw is None:
        raw = attrs.get("gridBefore")
    grid_before = _int_value(raw)
    if grid_before is None or grid_before <= 0:
        return 0

    cells = _row_cells(row)
    leading = 0
    while leading < len(cells) and ((cells[leading] or {}).get("attrs") or {}).get("__placeholder") == GRID_BEFORE_PLACEHOLDER:
        leading += 1
    return 0 if leading > 0 else grid_before


def get_cell_start_column(row: Dict[str, Any], target_cell: Dict[str, Any]) -> int:
    column = resolve_grid_before(row)
    for cell in _row_cells(row):
        if cell is target_cell:
            return column
        column += get_colspan(cell)
    return column


def find_cell_covering_column(row: Dict[str, Any], target_column: int) -> Optional[Dict[str, Any]]:
    column = resolve_grid_before(row)
    for cell in _row_cells(row):
        colspan = get_colspan(cell)
        if column <= target_column < column + colspan:
            return cell
        column += colspan
    return None


def find_insertion_index_for_column(row: Dict[str, Any], target_column: int) -> int:
    column = resolve_grid_before(row)
    cells = _row_cells(row)
    for index, cell in enumerate(cells):
        if column >= target_column:
            return index
        column += get_colspan(cell)
    return len(cells)


def _default_empty_paragraph() -> Dict[str, Any]:
    return {"type": "paragraph", "content": []}


def pre_process_vertical_merge_cells(
    table: Any,
    empty_paragraph_factory: Callable[[], Dict[str, Any]] = _default_empty_paragraph,
) -> Any:
    """
    Insert ``continueMerge`` placeholders below every row-spanning cell.

    For each cell with ``rowspan > 1`` the rows it covers receive a copy of
    the cell (rowspan cleared, one empty paragraph) at the column it starts
    in, unless the cell already covering that column is a continuation.
    The table is modified in place and returned.
    """
    if not callable(empty_paragraph_factory):
        raise TableStructureError("empty_paragraph_factory must be callable")
    if not isinstance(table, dict) or not isinstance(table.get("content"), list):
        return table

    rows = table["content"]
    for row_index, row in enumerate(rows):
        if not isinstance(row, dict):
            continue
        if not isinstance(row.get("content"), list):
            row["content"] = []

        for cell in list(row["content"]):
            if not isinstance(cell, dict):
                continue
            attrs = cell.get("attrs") or {}
            rowspan = _int_value(attrs.get("rowspan"))
            if rowspan is None or rowspan <= 1:
                continue

            max_rowspan = min(rowspan, len(rows) - row_index)
            start_column = get_cell_start_column(row, cell)

            for offset in range(1, max_rowspan):
                next_row = rows[row_index + offset]
                if not isinstance(next_row, dict):
                    continue
                if not isinstance(next_row.get("content"), list):
                    next_row["content"] = []

                existing = find_cell_covering_column(next_row, start_column)
                if existing is not None and (existing.get("attrs") or {}).get("continueMerge"):
                    continue

                merged_cell = {
                    "type": cell.get("type"),
                    "content": [empty_paragraph_factory()],
                    "attrs": {**attrs, "rowspan": None, "continueMerge": True},
                }
                insertion_index = find_insertion_index_for_column(next_row, start_column)
                next_row["content"].insert(insertion_index, merged_cell)

    return table

"""Fallback numbering from precomputed list rendering hints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..utils.coerce import pick_number

SYNTHETIC_NUM_ID = -1
_JUSTIFICATIONS = ("left", "right", "center")
_SUFFIXES = ("tab", "space", "nothing")


def _normalize_path(value: Any) -> Optional[List[float]]:
    if not isinstance(value, (list, tuple)):
        return None
    path = []
    for item in value:
        number = pick_number(item)
        if number is None:
            continue
        path.append(number)
    return path or None


def normalize_list_rendering_attrs(value: Any) -> Optional[Dict[str, Any]]:
    """
    Keep the well-formed fields of a ``listRendering`` hint.

    Returns a dict with any of ``markerText``, ``justification``,
    ``numberingType``, ``suffix`` and ``path``, or ``None`` when none survive.
    """
    if not isinstance(value, dict):
        return None
    result: Dict[str, Any] = {}
    if isinstance(value.get("markerText"), str):
        result["markerText"] = value["markerText"]
    if value.get("justification") in _JUSTIFICATIONS:
        result["justification"] = value["justification"]
    if isinstance(value.get("numberingType"), str):
        result["numberingType"] = value["numberingType"]
    if value.get("suffix") in _SUFFIXES:
        result["suffix"] = value["suffix"]
    path = _normalize_path(value.get("path"))
    if path is not None:
        result["path"] = path
    return result or None


def synthesize_numbering_from_list_rendering(list_rendering: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Build a numbering reference with the sentinel id from a normalized hint.

    The level is the path depth minus one; the counter is the last path entry.
    """
    if not list_rendering:
        return None
    path = list_rendering.get("path") or [1]
    path = [int(item) if float(item).is_integer() else item for item in path]
    numbering: Dict[str, Any] = {
        "numId": SYNTHETIC_NUM_ID,
        "ilvl": max(len(path) - 1, 0),
        "path": path,
        "counterValue": path[-1],
    }
    if "markerText" in list_rendering:
        numbering["markerText"] = list_rendering["markerText"]
    if "numberingType" in list_rendering:
        numbering["format"] = list_rendering["numberingType"]
    if "justification" in list_rendering:
        numbering["lvlJc"] = list_rendering["justification"]
    if "suffix" in list_rendering:
        numbering["suffix"] = list_rendering["suffix"]
    return numbering

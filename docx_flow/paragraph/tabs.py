"""Tab stop normalization and merging."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models.paragraph import TabStop
from ..styles.cascade import merge_tab_stop_sources
from ..utils.coerce import pick_number
from ..utils.units import px_to_twips

logger = logging.getLogger(__name__)

# Direct attribute positions at or below this are pixel values.
PX_POSITION_THRESHOLD = 1000


def normalize_tab_entry(entry: Any, positions_in_px: bool = False) -> Optional[Dict[str, Any]]:
    """
    Normalize one tab stop to ``{val, pos, leader?, originalPos?}`` in twips.

    Accepts ``{tab: {tabType|val, pos, originalPos?, leader?}}`` and
    ``{val, pos|position|offset, leader?}``. Entries without a value or a
    position are dropped.
    """
    if not isinstance(entry, dict):
        return None
    source = entry.get("tab") if isinstance(entry.get("tab"), dict) else entry
    val = source.get("tabType") or source.get("val")
    if not isinstance(val, str) or not val:
        return None

    original = pick_number(source.get("originalPos"))
    pos = None
    for key in ("pos", "position", "offset"):
        pos = pick_number(source.get(key))
        if pos is not None:
            break
    if original is None and pos is None:
        return None

    if original is not None:
        position = original
    elif positions_in_px and abs(pos) <= PX_POSITION_THRESHOLD:
        position = px_to_twips(pos)
    else:
        position = pos

    result: Dict[str, Any] = {"val": val, "pos": position}
    if original is not None:
        result["originalPos"] = original
    leader = source.get("leader")
    if isinstance(leader, str) and leader:
        result["leader"] = leader
    return result


def normalize_tab_entries(entries: Any, positions_in_px: bool = False) -> List[Dict[str, Any]]:
    if not isinstance(entries, (list, tuple)):
        return []
    normalized = []
    for entry in entries:
        tab = normalize_tab_entry(entry, positions_in_px=positions_in_px)
        if tab is not None:
            normalized.append(tab)
        else:
            logger.debug(f"Dropping malformed tab stop: {entry!r}")
    return normalized


def resolve_tab_stops(
    hydrated_tabs: Optional[List[Dict[str, Any]]],
    paragraph_props: Dict[str, Any],
    attrs: Dict[str, Any],
) -> Optional[Tuple[TabStop, ...]]:
    """
    Merge style, inline and direct tab stops by position.

    Later sources replace earlier stops at the same position and ``clear``
    stops remove them. Positions in the result are twips.
    """
    direct = attrs.get("tabs")
    if direct is None:
        direct = attrs.get("tabStops")
    merged = merge_tab_stop_sources(
        normalize_tab_entries(hydrated_tabs),
        normalize_tab_entries(paragraph_props.get("tabStops") or paragraph_props.get("tabs")),
        normalize_tab_entries(direct, positions_in_px=True),
    )
    if not merged:
        return None
    stops = tuple(
        TabStop(val=tab["val"], pos=tab["pos"], leader=tab.get("leader"))
        for tab in merged
        if tab["val"] != "clear"
    )
    return stops or None

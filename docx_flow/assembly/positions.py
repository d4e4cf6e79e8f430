"""Document positions for source nodes."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple

# Nodes that open and close a token pair even when they have no content yet.
TEXTBLOCK_TYPES = frozenset(
    {
        "paragraph",
        "table",
        "tableRow",
        "tableCell",
        "tableHeader",
        "structuredContentBlock",
        "documentSection",
        "documentPartObject",
        "run",
        "link",
    }
)


class PositionMap:
    """
    Start/end positions of every node in a document tree.

    Positions follow the editor convention: text counts one per character,
    leaf nodes count one, and container nodes add an opening and closing
    token around their children. Nodes are keyed by identity, so the map
    holds a reference to each node to keep the keys valid.
    """

    def __init__(self) -> None:
        self._spans: Dict[int, Tuple[int, int]] = {}
        self._nodes: List[Any] = []

    def __call__(self, node: Any) -> Optional[Tuple[int, int]]:
        return self.get(node)

    def __len__(self) -> int:
        return len(self._spans)

    def get(self, node: Any) -> Optional[Tuple[int, int]]:
        return self._spans.get(id(node))

    def set(self, node: Any, start: int, end: int) -> None:
        if id(node) not in self._spans:
            self._nodes.append(node)
        self._spans[id(node)] = (start, end)


def _node_size(node: Dict[str, Any], atom_types: frozenset, positions: PositionMap, start: int) -> int:
    node_type = node.get("type")
    if node_type == "text":
        size = len(node.get("text") or "")
    elif node_type in atom_types:
        size = 1
    elif isinstance(node.get("content"), list):
        size = 2 + _children_size(node["content"], atom_types, positions, start + 1)
    elif node_type in TEXTBLOCK_TYPES:
        size = 2
    else:
        size = 1
    positions.set(node, start, start + size)
    return size


def _children_size(children: List[Any], atom_types: frozenset, positions: PositionMap, start: int) -> int:
    offset = start
    for child in children:
        if isinstance(child, dict):
            offset += _node_size(child, atom_types, positions, offset)
    return offset - start


def build_position_map(doc: Any, atom_node_types: Optional[Iterable[str]] = None) -> PositionMap:
    """Compute positions for every node below ``doc``; the document content starts at 0."""
    positions = PositionMap()
    if isinstance(doc, dict) and isinstance(doc.get("content"), list):
        _children_size(doc["content"], frozenset(atom_node_types or ()), positions, 0)
    return positions

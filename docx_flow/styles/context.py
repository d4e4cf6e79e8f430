"""Style sheet access for the resolvers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import StyleResolutionError

logger = logging.getLogger(__name__)

NORMAL_STYLE_ID = "Normal"


@dataclass
class StyleContext:
    """
    Read-only view of the document style sheet.

    ``styles`` maps style ids to definitions of the form
    ``{"type", "basedOn", "default", "name", "paragraphProps", "runProps", "tableProps"}``.
    ``defaults`` carries document defaults (``paragraphProps``, ``runProps``,
    ``decimalSeparator``, ``defaultTabIntervalTwips``). ``numbering`` holds
    abstract/concrete numbering definitions.
    """

    styles: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    defaults: Dict[str, Any] = field(default_factory=dict)
    numbering: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StyleContext":
        data = data or {}
        if not isinstance(data, dict):
            raise StyleResolutionError("Style context must be a mapping", {"type": type(data).__name__})
        return cls(
            styles=dict(data.get("styles") or {}),
            defaults=dict(data.get("defaults") or data.get("docDefaults") or {}),
            numbering=dict(data.get("numbering") or {}),
        )

    def get_style(self, style_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not style_id:
            return None
        style = self.styles.get(style_id)
        return style if isinstance(style, dict) else None

    def default_style_id(self, style_type: str = "paragraph") -> Optional[str]:
        """Return the style flagged as default for ``style_type``, else ``Normal`` when present."""
        for style_id, style in self.styles.items():
            if isinstance(style, dict) and style.get("default") and style.get("type", "paragraph") == style_type:
                return style_id
        if style_type == "paragraph" and NORMAL_STYLE_ID in self.styles:
            return NORMAL_STYLE_ID
        return None

    def normal_style(self) -> Optional[Dict[str, Any]]:
        return self.get_style(NORMAL_STYLE_ID)

    def is_normal_default(self) -> bool:
        normal = self.normal_style()
        return bool(normal and normal.get("default"))

    @property
    def decimal_separator(self) -> Optional[str]:
        value = self.defaults.get("decimalSeparator")
        return value if isinstance(value, str) and value else None

    @property
    def default_tab_interval_twips(self) -> Optional[int]:
        value = self.defaults.get("defaultTabIntervalTwips")
        return value if isinstance(value, int) and not isinstance(value, bool) and value > 0 else None

    def resolve_style_chain(self, style_id: Optional[str]) -> List[Dict[str, Any]]:
        """
        Follow ``basedOn`` links and return the chain root first.

        Cycles and missing parents end the walk.
        """
        chain: List[Dict[str, Any]] = []
        visited = set()
        current = style_id
        while current and current not in visited:
            visited.add(current)
            style = self.get_style(current)
            if style is None:
                if current == style_id:
                    logger.debug(f"Style not found: {style_id}")
                break
            chain.append(style)
            current = style.get("basedOn")
        chain.reverse()
        return chain

"""Section geometry extracted from section properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from .base import WireModel

SectionType = Literal["continuous", "nextPage", "evenPage", "oddPage"]
Orientation = Literal["portrait", "landscape"]


@dataclass(frozen=True, slots=True)
class PageSize(WireModel):
    w: float
    h: float


@dataclass(frozen=True, slots=True)
class ColumnLayout(WireModel):
    count: int = 1
    gap: float = 48


@dataclass(frozen=True, slots=True)
class PageNumbering(WireModel):
    format: Optional[str] = None
    start: Optional[int] = None


@dataclass(frozen=True, slots=True)
class SectionMargins(WireModel):
    header: Optional[float] = None
    footer: Optional[float] = None
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None
    gutter: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SectionData(WireModel):
    """Geometry read from one ``sectPr``; lengths in pixels."""

    type: Optional[SectionType] = None
    margins: SectionMargins = field(default_factory=SectionMargins)
    page_size: Optional[PageSize] = None
    orientation: Optional[Orientation] = None
    columns: Optional[ColumnLayout] = None
    numbering: Optional[PageNumbering] = None
    header_refs: Optional[Dict[str, str]] = None
    footer_refs: Optional[Dict[str, str]] = None
    v_align: Optional[str] = None
    title_pg: bool = False


@dataclass(frozen=True, slots=True)
class SectionRange(WireModel):
    """A run of paragraphs sharing one section geometry."""

    section_index: int
    start_paragraph_index: int
    end_paragraph_index: int
    data: SectionData
    sect_pr: Optional[Dict[str, Any]] = None

    @property
    def type(self) -> Optional[str]:
        return self.data.type

    @property
    def margins(self) -> Dict[str, float]:
        margins = {
            key: value
            for key, value in self.data.margins.to_dict().items()
            if key not in ("header", "footer")
        }
        return {"header": self.data.margins.header or 0, "footer": self.data.margins.footer or 0, **margins}

    @property
    def orientation(self) -> Optional[str]:
        return self.data.orientation

    @property
    def page_size(self) -> Optional[PageSize]:
        return self.data.page_size

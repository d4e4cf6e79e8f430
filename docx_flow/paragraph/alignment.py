"""Paragraph alignment and text direction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..normalize import AlignmentNormalizer
from ..utils.coerce import to_ooxml_boolean


@dataclass(frozen=True, slots=True)
class AlignmentResult:
    alignment: str
    direction: Optional[str] = None
    rtl: Optional[bool] = None


def _flag(value: Any) -> bool:
    return bool(to_ooxml_boolean(value))


def resolve_alignment(
    attrs: Dict[str, Any],
    paragraph_props: Dict[str, Any],
    style_alignment: Optional[str],
) -> AlignmentResult:
    """
    Resolve alignment through six levels, highest first.

    1. bidi together with adjustRightInd forces ``right``
    2. ``attrs.alignment`` (or ``attrs.textAlign``)
    3. ``paragraphProperties.justification``
    4. bidi alone defaults to ``right``
    5. the style-resolved alignment
    6. ``left``

    Invalid values at any level fall through to the next one.
    """
    bidi = _flag(attrs.get("bidi")) or _flag(paragraph_props.get("bidi")) or _flag(paragraph_props.get("rightToLeft"))
    adjust_right = _flag(attrs.get("adjustRightInd")) or _flag(paragraph_props.get("adjustRightInd"))

    direct = attrs.get("alignment")
    if direct is None:
        direct = attrs.get("textAlign")

    if bidi and adjust_right:
        alignment = "right"
    else:
        alignment = (
            AlignmentNormalizer.normalize(direct)
            or AlignmentNormalizer.normalize(paragraph_props.get("justification"))
            or ("right" if bidi else None)
            or AlignmentNormalizer.normalize(style_alignment)
            or "left"
        )

    if bidi:
        return AlignmentResult(alignment=alignment, direction="rtl", rtl=True)
    return AlignmentResult(alignment=alignment)

"""Style cascade and hydration."""

from .cascade import (
    INLINE_OVERRIDE_PROPERTIES,
    apply_inline_overrides,
    combine_indent_properties,
    combine_properties,
    combine_run_properties,
    merge_spacing_sources,
    merge_tab_stop_sources,
    order_defaults_and_normal,
    resolve_font_size_with_fallback,
)
from .context import StyleContext
from .hydration import (
    CharacterStyleProperties,
    ParagraphStyleProperties,
    hydrate_character_style_attrs,
    hydrate_paragraph_style_attrs,
)

__all__ = [
    "INLINE_OVERRIDE_PROPERTIES",
    "CharacterStyleProperties",
    "ParagraphStyleProperties",
    "StyleContext",
    "apply_inline_overrides",
    "combine_indent_properties",
    "combine_properties",
    "combine_run_properties",
    "hydrate_character_style_attrs",
    "hydrate_paragraph_style_attrs",
    "merge_spacing_sources",
    "merge_tab_stop_sources",
    "order_defaults_and_normal",
    "resolve_font_size_with_fallback",
]

"""
Tests for the individual paragraph resolvers: alignment, indent, spacing,
tabs, list rendering hints, frames and list layout.
"""

import pytest

from docx_flow.models.paragraph import NumberingProperties, ParagraphIndent, TabStop
from docx_flow.paragraph.alignment import resolve_alignment
from docx_flow.paragraph.frame import (
    build_drop_cap_descriptor,
    extract_frame,
    float_alignment_for,
    parse_font_size_px,
)
from docx_flow.paragraph.indent import resolve_paragraph_indent
from docx_flow.paragraph.list_rendering import (
    normalize_list_rendering_attrs,
    synthesize_numbering_from_list_rendering,
)
from docx_flow.paragraph.spacing import (
    resolve_contextual_spacing,
    resolve_paragraph_spacing,
    spacing_twips_to_px,
)
from docx_flow.paragraph.tabs import normalize_tab_entry, resolve_tab_stops
from docx_flow.paragraph.word_layout import compute_word_layout


class TestAlignment:
    """Test cases for the alignment chain."""

    def test_bidi_with_adjust_right_forces_right(self):
        result = resolve_alignment({"bidi": True, "adjustRightInd": True, "alignment": "center"}, {}, None)
        assert result.alignment == "right"
        assert result.direction == "rtl"
        assert result.rtl is True

    def test_direct_alignment_wins(self):
        assert resolve_alignment({"alignment": "both"}, {"justification": "center"}, "right").alignment == "justify"
        assert resolve_alignment({"textAlign": "end"}, {}, None).alignment == "right"

    def test_invalid_value_falls_through(self):
        assert resolve_alignment({"alignment": "bogus"}, {"justification": "center"}, None).alignment == "center"

    def test_bidi_beats_style(self):
        result = resolve_alignment({}, {"bidi": "1"}, "center")
        assert result.alignment == "right"
        assert result.rtl is True

    def test_style_then_default(self):
        assert resolve_alignment({}, {}, "center").alignment == "center"
        result = resolve_alignment({}, {}, None)
        assert result.alignment == "left"
        assert result.direction is None


class TestIndent:
    """Test cases for resolve_paragraph_indent."""

    def test_direct_first_line_clears_style_hanging(self):
        indent = resolve_paragraph_indent({"left": 720, "hanging": 360}, {}, {"indent": {"firstLine": 10}})
        assert indent == ParagraphIndent(left=48, first_line=10)

    def test_inline_twips_are_converted(self):
        indent = resolve_paragraph_indent(None, {"indent": {"start": 1440, "end": 720}}, {})
        assert indent.left == 96
        assert indent.right == 48

    def test_text_indent(self):
        indent = resolve_paragraph_indent(None, {}, {"textIndent": 720})
        assert indent.first_line == 48

    def test_zero_left_is_dropped(self):
        indent = resolve_paragraph_indent(None, {}, {"indent": {"left": 0, "firstLine": 0}})
        assert indent.left is None
        assert indent.first_line == 0

    def test_nothing_set(self):
        assert resolve_paragraph_indent(None, {}, {}) is None


class TestSpacing:
    """Test cases for spacing resolution."""

    def test_auto_line_is_a_multiplier(self):
        assert spacing_twips_to_px({"line": 360, "lineRule": "auto"}) == {"line": 1.5, "lineRule": "auto"}
        assert spacing_twips_to_px({"line": 360, "lineRule": "exact"})["line"] == 24

    def test_sources_merge_field_by_field(self):
        spacing = resolve_paragraph_spacing(
            {"after": 200, "line": 240, "lineRule": "auto"},
            {},
            {"spacing": {"before": 5}},
        )
        assert spacing.after == pytest.approx(13.333, rel=1e-3)
        assert spacing.line == 1.0
        assert spacing.line_rule == "auto"
        assert spacing.before == 5

    def test_direct_zero_is_kept(self):
        spacing = resolve_paragraph_spacing({"after": 200}, {}, {"spacing": {"after": 0}})
        assert spacing.after == 0

    def test_empty(self):
        assert resolve_paragraph_spacing(None, {}, {}) is None

    def test_contextual_spacing_priority(self):
        attrs = {"spacing": {"contextualSpacing": "0"}}
        assert resolve_contextual_spacing(attrs, {"contextualSpacing": True}, True) is False
        assert resolve_contextual_spacing({}, {"contextualSpacing": "1"}, False) is True
        assert resolve_contextual_spacing({}, {}, True) is True
        assert resolve_contextual_spacing({}, {}, None) is None


class TestTabs:
    """Test cases for tab stop normalization and merging."""

    def test_wrapped_entry(self):
        entry = normalize_tab_entry({"tab": {"tabType": "decimal", "pos": 2880, "leader": "dot"}})
        assert entry == {"val": "decimal", "pos": 2880, "leader": "dot"}

    def test_entry_without_value_or_position(self):
        assert normalize_tab_entry({"pos": 100}) is None
        assert normalize_tab_entry({"val": "left"}) is None

    def test_direct_px_positions(self):
        assert normalize_tab_entry({"val": "left", "pos": 48}, positions_in_px=True)["pos"] == 720
        assert normalize_tab_entry({"val": "left", "pos": 2000}, positions_in_px=True)["pos"] == 2000

    def test_later_sources_replace_same_position(self):
        stops = resolve_tab_stops(
            [{"val": "left", "pos": 720}],
            {"tabStops": [{"tab": {"tabType": "center", "pos": 1440}}]},
            {"tabs": [{"val": "right", "pos": 48}]},
        )
        assert stops == (TabStop(val="right", pos=720), TabStop(val="center", pos=1440))

    def test_clear_removes_stop(self):
        stops = resolve_tab_stops([{"val": "left", "pos": 720}], {"tabStops": [{"val": "clear", "pos": 720}]}, {})
        assert stops is None


class TestListRendering:
    """Test cases for list rendering hints."""

    def test_normalize_keeps_valid_fields(self):
        result = normalize_list_rendering_attrs({
            "markerText": "a)",
            "justification": "bogus",
            "path": [1, "2", "x"],
            "suffix": "space",
        })
        assert result == {"markerText": "a)", "suffix": "space", "path": [1, 2]}

    def test_normalize_empty(self):
        assert normalize_list_rendering_attrs({"justification": "bogus"}) is None
        assert normalize_list_rendering_attrs(None) is None

    def test_synthesize(self):
        numbering = synthesize_numbering_from_list_rendering({"markerText": "a)", "path": [1, 2], "suffix": "space"})
        assert numbering == {
            "numId": -1,
            "ilvl": 1,
            "path": [1, 2],
            "counterValue": 2,
            "markerText": "a)",
            "suffix": "space",
        }


class TestFrame:
    """Test cases for frame extraction and drop caps."""

    def test_extract_frame(self):
        frame = extract_frame({"framePr": {"w:xAlign": "Right", "w:x": "1440", "dropCap": "drop", "lines": 2}}, {})
        assert frame.x_align == "right"
        assert frame.x == 96
        assert frame.drop_cap == "drop"
        assert frame.lines == 2
        assert float_alignment_for(frame) == "right"

    def test_frame_from_elements(self):
        paragraph_props = {"elements": [{"name": "w:framePr", "attributes": {"w:xAlign": "inside"}}]}
        frame = extract_frame({}, paragraph_props)
        assert frame.x_align == "inside"
        assert float_alignment_for(frame) is None

    def test_no_frame(self):
        assert extract_frame({}, {}) is None

    @pytest.mark.parametrize("value, expected", [
        ("156px", 156),
        ("117pt", 156),
        (20, 20),
        ("abc", None),
        (0, None),
    ])
    def test_parse_font_size(self, value, expected):
        assert parse_font_size_px(value) == expected

    def test_drop_cap_descriptor(self):
        para = {
            "type": "paragraph",
            "content": [{
                "type": "text",
                "text": "Once",
                "marks": [{"type": "textStyle", "attrs": {"fontSize": "48pt", "fontFamily": "Georgia, serif"}}],
            }],
        }
        frame = extract_frame({"framePr": {"dropCap": "drop", "lines": 2}}, {})
        descriptor = build_drop_cap_descriptor(para, frame)
        assert descriptor.mode == "drop"
        assert descriptor.lines == 2
        assert descriptor.run.text == "Once"
        assert descriptor.run.font_size == 64
        assert descriptor.run.font_family == "Georgia"

    def test_drop_cap_without_text(self):
        frame = extract_frame({"framePr": {"dropCap": "margin"}}, {})
        assert build_drop_cap_descriptor({"type": "paragraph", "content": []}, frame) is None


class TestWordLayout:
    """Test cases for list layout."""

    def test_hanging_layout(self):
        numbering = NumberingProperties(num_id=1, marker_text="1.", resolved_level_indent={"left": 720, "hanging": 360})
        layout = compute_word_layout(None, numbering, default_tab_interval_twips=720)
        assert layout.indent_left_px == 48
        assert layout.hanging_px == 24
        assert layout.first_line_indent_mode is False
        assert layout.text_start_px == 48
        assert layout.default_tab_interval_px == 48
        assert layout.marker.marker_text == "1."
        assert layout.marker.run.font_family == "Arial"

    def test_paragraph_first_line_replaces_level_hanging(self):
        numbering = NumberingProperties(num_id=1, marker_text="1.", resolved_level_indent={"left": 720, "hanging": 360})
        layout = compute_word_layout(ParagraphIndent(left=48, first_line=24), numbering)
        assert layout.hanging_px is None
        assert layout.first_line_indent_mode is True
        assert layout.text_start_px == 72

    def test_marker_run_from_level(self):
        numbering = NumberingProperties(
            num_id=1,
            marker_text="a)",
            lvl_jc="right",
            suffix="space",
            resolved_marker_rpr={"fontFamily": "Symbol", "fontSize": 24, "bold": True},
        )
        layout = compute_word_layout(None, numbering, default_font="Calibri", default_size=14)
        assert layout.marker.justification == "right"
        assert layout.marker.suffix == "space"
        assert layout.marker.run.font_family == "Symbol"
        assert layout.marker.run.font_size == 16
        assert layout.marker.run.bold is True

    def test_no_marker_text(self):
        layout = compute_word_layout(None, NumberingProperties(num_id=1))
        assert layout.marker is None
        assert layout.default_tab_interval_px is None

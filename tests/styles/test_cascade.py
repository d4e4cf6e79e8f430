"""
Tests for property cascade merging.
"""

from docx_flow.styles.cascade import (
    apply_inline_overrides,
    combine_indent_properties,
    combine_properties,
    combine_run_properties,
    drop_zero_horizontal_indent,
    merge_spacing_sources,
    merge_tab_stop_sources,
    order_defaults_and_normal,
    resolve_font_size_with_fallback,
)


class TestCombineProperties:
    """Test cases for combine_properties."""

    def test_deep_merge_later_wins(self):
        result = combine_properties([
            {"spacing": {"before": 10, "after": 20}, "keepNext": True},
            {"spacing": {"after": 0}},
        ])
        assert result == {"spacing": {"before": 10, "after": 0}, "keepNext": True}

    def test_skips_empty_sources(self):
        assert combine_properties([None, {}, "junk", {"a": 1}]) == {"a": 1}
        assert combine_properties([]) == {}

    def test_inputs_are_not_mutated(self):
        base = {"spacing": {"before": 10}}
        override = {"spacing": {"after": 5}}
        result = combine_properties([base, override])
        result["spacing"]["before"] = 99
        assert base == {"spacing": {"before": 10}}
        assert override == {"spacing": {"after": 5}}

    def test_full_override_replaces_whole_value(self):
        result = combine_run_properties([
            {"fontFamily": {"ascii": "Calibri", "eastAsia": "MS Mincho"}},
            {"fontFamily": {"ascii": "Arial"}},
        ])
        assert result["fontFamily"] == {"ascii": "Arial"}

    def test_special_handler_is_called(self):
        def take_max(target, source):
            return max(target.get("size", 0), source["size"])

        result = combine_properties([{"size": 10}, {"size": 4}], special_handling={"size": take_max})
        assert result == {"size": 10}


class TestIndentCascade:
    """Test cases for the firstLine/hanging exclusivity."""

    def test_first_line_clears_lower_hanging(self):
        result = combine_indent_properties([{"left": 720, "hanging": 360}, {"firstLine": 200}])
        assert result == {"left": 720, "firstLine": 200}

    def test_hanging_clears_lower_first_line(self):
        result = combine_indent_properties([{"firstLine": 720}, {"hanging": 360}])
        assert result == {"hanging": 360}

    def test_same_source_keeps_both(self):
        result = combine_indent_properties([{"firstLine": 100, "hanging": 50}])
        assert result == {"firstLine": 100, "hanging": 50}

    def test_drop_zero_horizontal_indent(self):
        assert drop_zero_horizontal_indent({"left": 0, "right": 0, "firstLine": 0}) == {"firstLine": 0}
        assert drop_zero_horizontal_indent(None) == {}


class TestRunCascadeHelpers:

    def test_inline_overrides_skip_none(self):
        result = apply_inline_overrides({"bold": False, "fontSize": 20}, {"bold": True, "fontSize": None})
        assert result == {"bold": True, "fontSize": 20}

    def test_font_size_fallback_chain(self):
        assert resolve_font_size_with_fallback(28, {"fontSize": 22}, None) == 28
        assert resolve_font_size_with_fallback(None, {"fontSize": 22}, {"fontSize": 24}) == 22
        assert resolve_font_size_with_fallback(-1, {}, {"fontSize": 24}) == 24
        assert resolve_font_size_with_fallback(None, None, None) == 20

    def test_order_defaults_and_normal(self):
        defaults, normal = {"a": 1}, {"a": 2}
        assert order_defaults_and_normal(defaults, normal, True) == [defaults, normal]
        assert order_defaults_and_normal(defaults, normal, False) == [normal, defaults]


class TestSpacingAndTabs:

    def test_spacing_keeps_zero(self):
        assert merge_spacing_sources({"before": 10, "after": 5}, {"after": 0}, None) == {"before": 10, "after": 0}
        assert merge_spacing_sources(None, {}) is None

    def test_tab_stops_merge_by_position(self):
        result = merge_tab_stop_sources(
            [{"val": "left", "pos": 100}],
            [{"val": "right", "pos": 100}, {"val": "center", "pos": 50}],
        )
        assert result == [{"val": "center", "pos": 50}, {"val": "right", "pos": 100}]

    def test_tab_stops_use_original_position(self):
        result = merge_tab_stop_sources([{"val": "left", "pos": 10, "originalPos": 720}])
        assert result == [{"val": "left", "pos": 10, "originalPos": 720}]

    def test_tab_stops_empty(self):
        assert merge_tab_stop_sources(None, [{"val": "left"}]) is None

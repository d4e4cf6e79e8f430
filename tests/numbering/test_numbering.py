"""
Tests for numbering definitions, counters and paths.
"""

import pytest

from docx_flow.exceptions import NumberingError
from docx_flow.numbering import ListCounterStore, build_numbering_path
from docx_flow.numbering.counters import ListCounterContext, advance_list_counter
from docx_flow.numbering.definitions import (
    NumberingDefinitions,
    format_counter,
    format_marker_text,
    is_valid_numbering_id,
)


class TestFormatCounter:
    """Test cases for counter formatting."""

    @pytest.mark.parametrize("counter, fmt, expected", [
        (3, "decimal", "3"),
        (5, "decimalZero", "05"),
        (12, "decimalZero", "12"),
        (1, "lowerLetter", "a"),
        (27, "lowerLetter", "aa"),
        (28, "upperLetter", "BB"),
        (4, "upperRoman", "IV"),
        (9, "lowerRoman", "ix"),
        (1, "ordinal", "1st"),
        (11, "ordinal", "11th"),
        (22, "ordinal", "22nd"),
        (7, "bullet", ""),
        (7, "somethingElse", "7"),
        (7, None, "7"),
    ])
    def test_formats(self, counter, fmt, expected):
        assert format_counter(counter, fmt) == expected


class TestFormatMarkerText:
    """Test cases for level text substitution."""

    def test_multi_level_template(self):
        assert format_marker_text("%1.%2)", [2, 3], ["decimal", "lowerLetter"]) == "2.c)"

    def test_placeholder_beyond_path_is_removed(self):
        assert format_marker_text("%1.%3", [1], ["decimal"]) == "1."

    def test_default_template(self):
        assert format_marker_text(None, [4], ["decimal"]) == "4."

    def test_bullet_glyphs(self):
        assert format_marker_text("\uf0b7", [1], ["bullet"]) == "\u2022"
        assert format_marker_text("", [1], ["bullet"]) == "\u2022"
        assert format_marker_text("-", [1], ["bullet"]) == "-"

    def test_none_format(self):
        assert format_marker_text("%1.", [1], ["none"]) == ""


class TestNumberingDefinitions:
    """Test cases for NumberingDefinitions class."""

    def test_resolve_level(self, style_context):
        numbering = NumberingDefinitions(style_context.numbering)
        level = numbering.resolve_level(1, 1)
        assert level.format == "lowerLetter"
        assert level.lvl_text == "%1.%2)"
        assert level.indent == {"left": 1440, "hanging": 360}

    def test_instance_override(self, style_context):
        numbering = NumberingDefinitions(style_context.numbering)
        assert numbering.resolve_level("3", 0).start == 5
        assert numbering.resolve_level("1", 0).start == 1

    def test_start_override_disabled(self):
        numbering = NumberingDefinitions({
            "abstract_numberings": {"1": {"levels": {"0": {"start": 1}}}},
            "numbering_instances": {"1": {"abstractNumId": 1, "levels": {"0": {"start": 9, "startOverride": False}}}},
        })
        assert numbering.resolve_level(1, 0).start == 1

    def test_unknown_ids(self, style_context):
        numbering = NumberingDefinitions(style_context.numbering)
        assert numbering.resolve_level("99", 0) is None
        assert numbering.resolve_level(None, 0) is None
        assert numbering.resolve_level("1", 5) is None

    def test_bullet_marker_run(self, style_context):
        level = NumberingDefinitions(style_context.numbering).resolve_level("2", 0)
        assert level.format == "bullet"
        assert level.marker_run == {"fontFamily": "Symbol"}

    def test_level_formats(self, style_context):
        numbering = NumberingDefinitions(style_context.numbering)
        assert numbering.level_formats("1", 2) == ["decimal", "lowerLetter", None]

    def test_flat_indent_keys(self):
        numbering = NumberingDefinitions({
            "abstracts": {"1": {"levels": {"0": {"indent_left": 720, "indent_hanging": 360}}}},
            "definitions": {"1": {"abstractNumId": "1"}},
        })
        assert numbering.resolve_level("1", 0).indent == {"left": 720, "hanging": 360}

    def test_empty(self):
        assert not NumberingDefinitions(None)


class TestNumberingIds:

    @pytest.mark.parametrize("value", [None, 0, "0", -0.0, 0.0])
    def test_disabled_ids(self, value):
        assert is_valid_numbering_id(value) is False

    @pytest.mark.parametrize("value", [1, -1, "5", "abc"])
    def test_valid_ids(self, value):
        assert is_valid_numbering_id(value) is True


class TestListCounters:
    """Test cases for ListCounterStore class."""

    def test_increment_and_get(self):
        store = ListCounterStore()
        assert store.get(1, 0) == 0
        assert store.increment(1, 0) == 1
        assert store.increment("1", 0) == 2
        assert store.get("1", 0) == 2

    def test_is_a_counter_context(self):
        assert isinstance(ListCounterStore(), ListCounterContext)

    def test_advance_resets_deeper_levels(self):
        store = ListCounterStore()
        store.increment(1, 1)
        store.increment(1, 2)
        advance_list_counter(store, 1, 0)
        assert store.get(1, 0) == 1
        assert store.get(1, 1) == 0
        assert store.get(1, 2) == 0

    def test_lists_are_independent(self):
        store = ListCounterStore()
        advance_list_counter(store, 1, 0)
        advance_list_counter(store, 2, 0)
        advance_list_counter(store, 2, 0)
        assert store.snapshot() == {"1:0": 1, "2:0": 2}

    def test_set_rejects_bad_values(self):
        store = ListCounterStore()
        store.set(1, 0, 4)
        assert store.get(1, 0) == 4
        with pytest.raises(NumberingError):
            store.set(1, 0, -1)
        with pytest.raises(NumberingError):
            store.set(1, 0, "3")

    def test_clear(self):
        store = ListCounterStore()
        store.increment(1, 0)
        store.clear()
        assert store.snapshot() == {}


class TestNumberingPath:
    """Test cases for build_numbering_path."""

    def test_reads_parent_counters(self):
        store = ListCounterStore()
        store.set("1", 0, 2)
        assert build_numbering_path("1", 2, 4, store) == [2, 1, 4]

    def test_reads_every_ancestor_level(self):
        store = ListCounterStore()
        store.set(1, 0, 2)
        store.set(1, 1, 3)
        assert build_numbering_path(1, 2, 5, store) == [2, 3, 5]
        assert build_numbering_path(1, 2, 5) == [1, 1, 5]

    def test_without_context(self):
        assert build_numbering_path("1", 2, 4) == [1, 1, 4]

    def test_without_num_id(self):
        store = ListCounterStore()
        store.set("1", 0, 3)
        assert build_numbering_path(None, 1, 2, store) == [1, 2]

    def test_level_is_floored_and_clamped(self):
        assert build_numbering_path("1", 1.7, 3) == [1, 3]
        assert build_numbering_path("1", -2, 3) == [3]

"""
Tests for conversion options, the converter context and error types.
"""

import pytest

from docx_flow import ConversionOptions, ConverterContext
from docx_flow.exceptions import ConfigurationError, DocxFlowError, StyleResolutionError
from docx_flow.styles import StyleContext


class TestConversionOptions:
    """Test cases for ConversionOptions."""

    def test_defaults(self):
        options = ConversionOptions().validate()
        assert options.default_font == "Arial"
        assert options.default_size == 16
        assert options.block_id_prefix == ""
        assert options.emit_section_breaks is False
        assert options.default_tab_interval_twips == 720
        assert options.media_files == {}

    def test_from_dict_accepts_camel_case(self):
        options = ConversionOptions.from_dict({
            "defaultFont": "Times New Roman",
            "blockIdPrefix": "hdr-",
            "emitSectionBreaks": True,
            "unknownOption": 1,
        })
        assert options.default_font == "Times New Roman"
        assert options.block_id_prefix == "hdr-"
        assert options.emit_section_breaks is True

    def test_from_dict_none(self):
        assert ConversionOptions.from_dict(None) == ConversionOptions()

    def test_from_dict_rejects_non_mapping(self):
        with pytest.raises(ConfigurationError):
            ConversionOptions.from_dict(["not", "a", "dict"])

    @pytest.mark.parametrize("kwargs", [
        {"default_font": ""},
        {"default_size": 0},
        {"default_size": True},
        {"block_id_prefix": 5},
        {"default_tab_interval_twips": -1},
        {"default_tab_interval_twips": 1.5},
        {"decimal_separator": ",,"},
        {"media_files": []},
        {"log_level": "LOUD"},
    ])
    def test_validate_rejects_bad_values(self, kwargs):
        """Test that invalid option values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            ConversionOptions(**kwargs).validate()


class TestConverterContext:
    """Test cases for ConverterContext."""

    def test_create_builds_fresh_state(self):
        first = ConverterContext.create()
        second = ConverterContext.create()
        assert first.list_counters is not second.list_counters
        assert first.metadata_cache is not second.metadata_cache

    def test_numbering_from_style_context(self, style_context):
        context = ConverterContext.create(style_context)
        assert bool(context.numbering)
        assert context.numbering.resolve_level("1", 0).format == "decimal"

    def test_cache_size_from_options(self):
        context = ConverterContext.create(options=ConversionOptions(metadata_cache_size=3))
        assert context.metadata_cache.max_size == 3

    def test_with_table_style_shares_pass_state(self, style_context):
        context = ConverterContext.create(style_context)
        nested = context.with_table_style({"spacing": {"after": 0}})
        assert nested.table_style_paragraph_props == {"spacing": {"after": 0}}
        assert nested.list_counters is context.list_counters
        assert nested.metadata_cache is context.metadata_cache
        assert nested.numbering is context.numbering
        assert context.table_style_paragraph_props is None


class TestExceptions:

    def test_str_includes_details(self):
        error = ConfigurationError("bad option", {"default_size": -1})
        assert str(error) == "bad option: default_size=-1"
        assert isinstance(error, DocxFlowError)

    def test_str_without_details(self):
        assert str(DocxFlowError("plain")) == "plain"

    def test_style_context_from_non_mapping(self):
        with pytest.raises(StyleResolutionError):
            StyleContext.from_dict("styles.xml")

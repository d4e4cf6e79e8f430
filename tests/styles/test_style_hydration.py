"""
Tests for the style context and style hydration.
"""

from docx_flow.numbering.definitions import NumberingDefinitions
from docx_flow.styles import StyleContext
from docx_flow.styles.hydration import (
    hydrate_character_style_attrs,
    hydrate_paragraph_style_attrs,
)


class TestStyleContext:
    """Test cases for StyleContext class."""

    def test_resolve_style_chain_root_first(self, style_context):
        chain = style_context.resolve_style_chain("Heading1")
        assert [style.get("name") for style in chain] == ["Normal", "heading 1"]

    def test_resolve_style_chain_stops_on_cycle(self):
        context = StyleContext.from_dict({
            "styles": {"A": {"basedOn": "B"}, "B": {"basedOn": "A"}},
        })
        assert len(context.resolve_style_chain("A")) == 2

    def test_missing_style(self, style_context):
        assert style_context.resolve_style_chain("Nope") == []
        assert style_context.get_style(None) is None

    def test_default_style(self, style_context):
        assert style_context.default_style_id("paragraph") == "Normal"
        assert style_context.default_style_id("character") is None
        assert style_context.is_normal_default() is True

    def test_document_defaults(self):
        context = StyleContext.from_dict({
            "docDefaults": {"decimalSeparator": ",", "defaultTabIntervalTwips": 360},
        })
        assert context.decimal_separator == ","
        assert context.default_tab_interval_twips == 360


class TestParagraphHydration:
    """Test cases for hydrate_paragraph_style_attrs."""

    def test_without_style_context(self, paragraph_factory):
        assert hydrate_paragraph_style_attrs(paragraph_factory("x"), None) is None

    def test_default_style_applies(self, style_context, paragraph_factory):
        hydrated = hydrate_paragraph_style_attrs(paragraph_factory("x"), style_context)
        assert hydrated.style_id is None
        assert hydrated.spacing == {"after": 200, "line": 259, "lineRule": "auto"}
        assert hydrated.is_heading is False

    def test_heading_style(self, style_context, paragraph_factory):
        hydrated = hydrate_paragraph_style_attrs(paragraph_factory("x", styleId="Heading1"), style_context)
        assert hydrated.style_id == "Heading1"
        assert hydrated.alignment == "center"
        assert hydrated.keep_next is True
        assert hydrated.is_heading is True
        assert hydrated.outline_level == 0
        assert hydrated.indent == {"firstLine": 0, "hanging": 0}

    def test_style_id_from_paragraph_properties(self, style_context, paragraph_factory):
        para = paragraph_factory("x", paragraphProperties={"styleId": "BodyIndent"})
        hydrated = hydrate_paragraph_style_attrs(para, style_context)
        assert hydrated.style_id == "BodyIndent"
        assert hydrated.indent == {"firstLine": 720}

    def test_inline_properties_win(self, style_context, paragraph_factory):
        para = paragraph_factory("x", styleId="BodyIndent", paragraphProperties={"indent": {"hanging": 200}})
        hydrated = hydrate_paragraph_style_attrs(para, style_context)
        assert hydrated.indent == {"hanging": 200}

    def test_numbering_level_indent(self, style_context, paragraph_factory):
        para = paragraph_factory("x", numberingProperties={"numId": 1, "ilvl": 0})
        numbering = NumberingDefinitions(style_context.numbering)
        hydrated = hydrate_paragraph_style_attrs(para, style_context, numbering=numbering)
        assert hydrated.indent == {"left": 720, "hanging": 360}
        assert hydrated.numbering_properties == {"numId": 1, "ilvl": 0}

    def test_table_style_spacing_overrides_style_spacing(self, style_context, paragraph_factory):
        hydrated = hydrate_paragraph_style_attrs(
            paragraph_factory("x"),
            style_context,
            table_style_paragraph_props={"spacing": {"after": 0}},
        )
        assert hydrated.spacing["after"] == 0

    def test_explicit_spacing_beats_table_style(self, style_context, paragraph_factory):
        para = paragraph_factory("x", paragraphProperties={"spacing": {"after": 100}})
        hydrated = hydrate_paragraph_style_attrs(
            para,
            style_context,
            table_style_paragraph_props={"spacing": {"after": 0, "before": 40}},
        )
        assert hydrated.spacing["after"] == 100
        assert hydrated.spacing["before"] == 40


class TestCharacterHydration:
    """Test cases for hydrate_character_style_attrs."""

    def test_defaults_and_normal(self, style_context, paragraph_factory):
        style = hydrate_character_style_attrs(paragraph_factory("x"), style_context)
        assert style.font_family == "Calibri"
        assert style.font_size == 24

    def test_paragraph_style_run_props(self, style_context, paragraph_factory):
        style = hydrate_character_style_attrs(paragraph_factory("x", styleId="Heading1"), style_context)
        assert style.bold is True
        assert style.font_size == 32

    def test_character_style_and_inline(self, style_context, paragraph_factory):
        style = hydrate_character_style_attrs(
            paragraph_factory("x"),
            style_context,
            run_props={"fontSize": 40, "underline": {"w:val": "double"}},
            run_style_id="Emphasis",
        )
        assert style.italic is True
        assert style.color == "#C00000"
        assert style.font_size == 40
        assert style.underline == "double"

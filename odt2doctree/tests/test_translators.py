import json
import logging
from unittest import TestCase

import pytest

from odt2doctree.data_types import StyleEntry
from odt2doctree.parser.namespaces import clark
from odt2doctree.parser.translators import (
    translate_paragraph_properties,
    translate_table_cell_properties,
    translate_table_column_properties,
    translate_table_properties,
    translate_table_row_properties,
    translate_text_properties,
)
from odt2doctree.serialization import deserialize_document, serialize_document

logger = logging.getLogger(__name__)

tc = TestCase()
tc.maxDiff = None


def _translate(translator, **attributes: str) -> dict[str, str]:
    """Run a translator over prefix__local keyword attributes."""
    qualified = {}
    for name, value in attributes.items():
        prefix, local = name.split("__")
        qualified[clark(prefix, local.replace("_", "-"))] = value
    properties: dict[str, str] = {}
    translator(qualified, properties)
    return properties


###################
# Text properties #
###################


def test_text_properties__verbatim_values() -> None:
    properties = _translate(
        translate_text_properties,
        fo__font_weight="bold",
        fo__font_style="italic",
        fo__color="#ff0000",
        fo__font_size="12pt",
        style__font_name="Liberation Serif",
    )

    tc.assertDictEqual(
        {
            "fontWeight": "bold",
            "fontStyle": "italic",
            "color": "#ff0000",
            "fontSize": "12pt",
            "fontFamily": "Liberation Serif",
        },
        properties,
    )


def test_text_properties__backslant_is_dropped() -> None:
    properties = _translate(translate_text_properties, fo__font_style="backslant")
    tc.assertNotIn("fontStyle", properties)


def test_text_properties__oblique_is_kept() -> None:
    properties = _translate(translate_text_properties, fo__font_style="oblique")
    tc.assertEqual("oblique", properties["fontStyle"])


@pytest.mark.parametrize(
    "underline_style, expected",
    [
        ("solid", "solid"),
        ("dash", "dashed"),
        ("dotted", "dotted"),
        ("wave", "wavy"),
        ("long-dash", "solid"),
        ("dot-dot-dash", "solid"),
    ],
)
def test_text_properties__underline_styles(underline_style, expected) -> None:
    properties = _translate(
        translate_text_properties, style__text_underline_style=underline_style
    )

    tc.assertEqual("underline", properties["textDecorationLine"])
    tc.assertEqual(expected, properties["textDecorationStyle"])


def test_text_properties__underline_none() -> None:
    properties = _translate(
        translate_text_properties, style__text_underline_style="none"
    )
    tc.assertDictEqual({"textDecorationLine": "none"}, properties)


def test_text_properties__double_overrides_dotted() -> None:
    properties = _translate(
        translate_text_properties,
        style__text_underline_style="dotted",
        style__text_underline_type="double",
    )
    tc.assertEqual("double", properties["textDecorationStyle"])


def test_text_properties__double_wins_whatever_the_attribute_order() -> None:
    properties = _translate(
        translate_text_properties,
        style__text_underline_type="double",
        style__text_underline_style="wave",
    )
    tc.assertEqual("double", properties["textDecorationStyle"])


def test_text_properties__single_type_keeps_style() -> None:
    properties = _translate(
        translate_text_properties,
        style__text_underline_style="dash",
        style__text_underline_type="single",
    )
    tc.assertEqual("dashed", properties["textDecorationStyle"])


def test_text_properties__underline_colors() -> None:
    font_color = _translate(
        translate_text_properties, style__text_underline_color="font-color"
    )
    hex_color = _translate(
        translate_text_properties, style__text_underline_color="#00ff00"
    )

    tc.assertEqual("currentcolor", font_color["textDecorationColor"])
    tc.assertEqual("#00ff00", hex_color["textDecorationColor"])


def test_text_properties__unprefixed_and_unknown_attributes_are_ignored() -> None:
    properties: dict[str, str] = {}
    translate_text_properties(
        {"font-weight": "bold", clark("fo", "hyphenate"): "true"}, properties
    )
    tc.assertDictEqual({}, properties)


def test_translators_only_insert_or_overwrite() -> None:
    properties = {"fontWeight": "normal", "marginTop": "1cm"}
    translate_text_properties(
        {clark("fo", "font-weight"): "bold", clark("fo", "color"): "#000000"},
        properties,
    )

    tc.assertDictEqual(
        {"fontWeight": "bold", "marginTop": "1cm", "color": "#000000"}, properties
    )


def test_translators_are_overwrite_idempotent() -> None:
    attributes = {
        clark("fo", "font-weight"): "bold",
        clark("style", "text-underline-style"): "dotted",
        clark("style", "text-underline-type"): "double",
        clark("style", "text-underline-color"): "font-color",
    }
    once: dict[str, str] = {}
    translate_text_properties(attributes, once)
    twice: dict[str, str] = {}
    translate_text_properties(attributes, twice)
    translate_text_properties(attributes, twice)

    tc.assertDictEqual(once, twice)


########################
# Paragraph and tables #
########################


def test_paragraph_properties() -> None:
    properties = _translate(
        translate_paragraph_properties,
        fo__text_align="center",
        fo__margin_top="0.2cm",
        fo__margin_left="1cm",
        fo__text_indent="0.5cm",
        fo__line_height="115%",
    )

    tc.assertDictEqual(
        {
            "textAlign": "center",
            "marginTop": "0.2cm",
            "marginLeft": "1cm",
            "textIndent": "0.5cm",
            "lineHeight": "115%",
        },
        properties,
    )


def test_table_properties() -> None:
    properties = _translate(
        translate_table_properties,
        style__width="17cm",
        table__align="margins",
        table__border_model="collapsing",
        fo__margin_bottom="0.1cm",
    )

    tc.assertDictEqual(
        {
            "width": "17cm",
            "tableAlign": "margins",
            "borderCollapse": "collapse",
            "marginBottom": "0.1cm",
        },
        properties,
    )


def test_table_properties__unknown_border_model_is_ignored() -> None:
    properties = _translate(translate_table_properties, table__border_model="odd")
    tc.assertDictEqual({}, properties)


def test_table_column_properties() -> None:
    properties = _translate(
        translate_table_column_properties,
        style__column_width="4.25cm",
        style__rel_column_width="16383*",
    )
    tc.assertDictEqual({"width": "4.25cm", "relativeWidth": "16383*"}, properties)


def test_table_row_properties() -> None:
    properties = _translate(
        translate_table_row_properties,
        style__row_height="1cm",
        style__min_row_height="0.5cm",
        fo__background_color="#eeeeee",
    )
    tc.assertDictEqual(
        {"height": "1cm", "minHeight": "0.5cm", "backgroundColor": "#eeeeee"},
        properties,
    )


def test_table_cell_properties() -> None:
    properties = _translate(
        translate_table_cell_properties,
        fo__border="0.5pt solid #000000",
        fo__border_top="none",
        fo__padding="0.097cm",
        style__vertical_align="middle",
        fo__wrap_option="no-wrap",
    )

    tc.assertDictEqual(
        {
            "border": "0.5pt solid #000000",
            "borderTop": "none",
            "padding": "0.097cm",
            "verticalAlign": "middle",
            "whiteSpace": "nowrap",
        },
        properties,
    )


##############
# Round trip #
##############


def test_translated_properties_survive_json_round_trip() -> None:
    properties: dict[str, str] = {}
    translate_text_properties(
        {
            clark("fo", "font-weight"): "bold",
            clark("fo", "font-style"): "italic",
            clark("fo", "color"): "#123456",
            clark("fo", "font-size"): "14pt",
            clark("style", "font-name"): "DejaVu Sans",
            clark("style", "text-underline-style"): "wave",
            clark("style", "text-underline-color"): "font-color",
        },
        properties,
    )
    translate_paragraph_properties({clark("fo", "text-align"): "end"}, properties)
    translate_table_cell_properties(
        {clark("fo", "border-left"): "1pt dashed #ff0000"}, properties
    )
    entry = StyleEntry(display_name="Emphasis", parent="text", properties=properties)

    payload = json.loads(json.dumps(serialize_document(entry)))
    restored = deserialize_document(payload)

    tc.assertIsInstance(restored, StyleEntry)
    tc.assertDictEqual(properties, restored.properties)
    tc.assertEqual(entry, restored)

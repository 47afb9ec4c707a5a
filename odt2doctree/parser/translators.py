"""
Style Property Translators
==========================

Pure functions turning the attributes of one ODF property tag into
CSS-like entries of a property map. Every translator only inserts or
overwrites keys, never deletes them, and holds no parser state, so both the
content pass and the styles pass share them.

Attribute names are expected in Clark notation, as reported by the event
source. Property names are camelCase CSS property names; values are copied
verbatim unless ODF and CSS disagree on the vocabulary.

    ODF tag                          Translator
    -------------------------------  ---------------------------------
    style:text-properties            translate_text_properties
    style:paragraph-properties       translate_paragraph_properties
    style:table-properties           translate_table_properties
    style:table-column-properties    translate_table_column_properties
    style:table-row-properties       translate_table_row_properties
    style:table-cell-properties      translate_table_cell_properties
"""

from typing import Callable, Dict, Mapping, MutableMapping

from odt2doctree.parser.namespaces import clark

PropertyMap = MutableMapping[str, str]
Translator = Callable[[Mapping[str, str], PropertyMap], None]

_MARGINS = {
    clark("fo", "margin-top"): "marginTop",
    clark("fo", "margin-bottom"): "marginBottom",
    clark("fo", "margin-left"): "marginLeft",
    clark("fo", "margin-right"): "marginRight",
}

_TEXT_VERBATIM = {
    clark("fo", "font-weight"): "fontWeight",
    clark("fo", "color"): "color",
    clark("fo", "font-size"): "fontSize",
    clark("style", "font-name"): "fontFamily",
    clark("fo", "background-color"): "backgroundColor",
    clark("fo", "font-variant"): "fontVariant",
    clark("fo", "text-transform"): "textTransform",
    clark("fo", "letter-spacing"): "letterSpacing",
}

_PARAGRAPH_VERBATIM = {
    clark("fo", "text-align"): "textAlign",
    clark("fo", "text-indent"): "textIndent",
    clark("fo", "line-height"): "lineHeight",
    clark("fo", "background-color"): "backgroundColor",
    **_MARGINS,
}

_TABLE_VERBATIM = {
    clark("style", "width"): "width",
    clark("table", "align"): "tableAlign",
    clark("fo", "background-color"): "backgroundColor",
    **_MARGINS,
}

_TABLE_COLUMN_VERBATIM = {
    clark("style", "column-width"): "width",
    clark("style", "rel-column-width"): "relativeWidth",
}

_TABLE_ROW_VERBATIM = {
    clark("style", "row-height"): "height",
    clark("style", "min-row-height"): "minHeight",
    clark("fo", "background-color"): "backgroundColor",
}

_TABLE_CELL_VERBATIM = {
    clark("fo", "border"): "border",
    clark("fo", "border-top"): "borderTop",
    clark("fo", "border-bottom"): "borderBottom",
    clark("fo", "border-left"): "borderLeft",
    clark("fo", "border-right"): "borderRight",
    clark("fo", "padding"): "padding",
    clark("fo", "padding-top"): "paddingTop",
    clark("fo", "padding-bottom"): "paddingBottom",
    clark("fo", "padding-left"): "paddingLeft",
    clark("fo", "padding-right"): "paddingRight",
    clark("fo", "background-color"): "backgroundColor",
    clark("style", "vertical-align"): "verticalAlign",
}

# ODF has dot-dash, dot-dot-dash, long-dash, ... which CSS lacks; they fall
# back to a solid line
_UNDERLINE_STYLES = {
    "dash": "dashed",
    "dotted": "dotted",
    "wave": "wavy",
}

_BORDER_MODELS = {
    "collapsing": "collapse",
    "separating": "separate",
}

_WRAP_OPTIONS = {
    "no-wrap": "nowrap",
    "wrap": "normal",
}

_ATTR_FONT_STYLE = clark("fo", "font-style")
_ATTR_UNDERLINE_STYLE = clark("style", "text-underline-style")
_ATTR_UNDERLINE_TYPE = clark("style", "text-underline-type")
_ATTR_UNDERLINE_COLOR = clark("style", "text-underline-color")
_ATTR_BORDER_MODEL = clark("table", "border-model")
_ATTR_WRAP_OPTION = clark("fo", "wrap-option")


def _copy_verbatim(
    attributes: Mapping[str, str],
    properties: PropertyMap,
    mapping: Dict[str, str],
) -> None:
    for name, value in attributes.items():
        property_name = mapping.get(name)
        if property_name is not None:
            properties[property_name] = value


def translate_text_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _TEXT_VERBATIM)

    font_style = attributes.get(_ATTR_FONT_STYLE)
    # backslant has no CSS counterpart
    if font_style is not None and font_style != "backslant":
        properties["fontStyle"] = font_style

    underline_style = attributes.get(_ATTR_UNDERLINE_STYLE)
    if underline_style == "none":
        properties["textDecorationLine"] = "none"
    elif underline_style is not None:
        properties["textDecorationLine"] = "underline"
        properties["textDecorationStyle"] = _UNDERLINE_STYLES.get(
            underline_style, "solid"
        )

    underline_color = attributes.get(_ATTR_UNDERLINE_COLOR)
    if underline_color == "font-color":
        properties["textDecorationColor"] = "currentcolor"
    elif underline_color is not None:
        properties["textDecorationColor"] = underline_color

    # CSS only has a solid double line, so the double type wins over the
    # line style whatever order the attributes came in
    if attributes.get(_ATTR_UNDERLINE_TYPE) == "double":
        properties["textDecorationStyle"] = "double"


def translate_paragraph_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _PARAGRAPH_VERBATIM)


def translate_table_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _TABLE_VERBATIM)
    border_model = _BORDER_MODELS.get(attributes.get(_ATTR_BORDER_MODEL, ""))
    if border_model is not None:
        properties["borderCollapse"] = border_model


def translate_table_column_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _TABLE_COLUMN_VERBATIM)


def translate_table_row_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _TABLE_ROW_VERBATIM)


def translate_table_cell_properties(
    attributes: Mapping[str, str], properties: PropertyMap
) -> None:
    _copy_verbatim(attributes, properties, _TABLE_CELL_VERBATIM)
    white_space = _WRAP_OPTIONS.get(attributes.get(_ATTR_WRAP_OPTION, ""))
    if white_space is not None:
        properties["whiteSpace"] = white_space


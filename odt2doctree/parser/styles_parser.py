"""
Named Style Table Builder
=========================

Turns the event stream of styles.xml into the named-style table and the
list-style table of the document.

    style:default-style   StyleEntry keyed by its family, no parent
    style:style           StyleEntry keyed by its name; the parent link is
                          the parent style name, else the family
    style:*-properties    translated into the properties of the open entry
    text:list-style       ten ListBullet slots keyed by the style name
    text:list-level-style-{bullet,number,image}
                          one slot of the open list style

Entries are committed when their own tag ends. Parent links are kept as
written; nothing here checks that the parent exists.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import IO, Callable, Dict, List, Mapping, Optional, Tuple

from odt2doctree.data_types import (
    LIST_LEVEL_COUNT,
    ListBullet,
    ListBulletCharacter,
    ListBulletImage,
    ListBulletVariant,
    StyleEntry,
    default_list_bullets,
    heading_template,
)
from odt2doctree.parser.events import (
    DEFAULT_READ_CHUNK_SIZE,
    EndElement,
    StartElement,
    XmlEvent,
    iter_xml_events,
)
from odt2doctree.parser.namespaces import QName, clark, key, parse_unsigned
from odt2doctree.parser.translators import (
    Translator,
    translate_paragraph_properties,
    translate_table_cell_properties,
    translate_table_column_properties,
    translate_table_properties,
    translate_table_row_properties,
    translate_text_properties,
)

logger = logging.getLogger(__name__)

STYLES_ENTRY = "styles.xml"

_STYLE_DEFAULT_STYLE = key("style", "default-style")
_STYLE_STYLE = key("style", "style")
_TEXT_LIST_STYLE = key("text", "list-style")
_TEXT_LIST_LEVEL_STYLE_BULLET = key("text", "list-level-style-bullet")
_TEXT_LIST_LEVEL_STYLE_NUMBER = key("text", "list-level-style-number")
_TEXT_LIST_LEVEL_STYLE_IMAGE = key("text", "list-level-style-image")

_PROPERTY_TRANSLATORS: Dict[QName, Translator] = {
    key("style", "text-properties"): translate_text_properties,
    key("style", "paragraph-properties"): translate_paragraph_properties,
    key("style", "table-properties"): translate_table_properties,
    key("style", "table-column-properties"): translate_table_column_properties,
    key("style", "table-row-properties"): translate_table_row_properties,
    key("style", "table-cell-properties"): translate_table_cell_properties,
}

_ATTR_STYLE_NAME = clark("style", "name")
_ATTR_STYLE_FAMILY = clark("style", "family")
_ATTR_STYLE_DISPLAY_NAME = clark("style", "display-name")
_ATTR_STYLE_PARENT_STYLE_NAME = clark("style", "parent-style-name")
_ATTR_STYLE_DEFAULT_OUTLINE_LEVEL = clark("style", "default-outline-level")
_ATTR_STYLE_NUM_PREFIX = clark("style", "num-prefix")
_ATTR_STYLE_NUM_SUFFIX = clark("style", "num-suffix")
_ATTR_STYLE_NUM_FORMAT = clark("style", "num-format")
_ATTR_TEXT_LEVEL = clark("text", "level")
_ATTR_TEXT_BULLET_CHAR = clark("text", "bullet-char")
_ATTR_TEXT_START_VALUE = clark("text", "start-value")
_ATTR_XLINK_HREF = clark("xlink", "href")

_NUMBERING_SCHEMES = {
    "1": "decimal",
    "a": "lowerLatin",
    "A": "upperLatin",
    "i": "lowerRoman",
    "I": "upperRoman",
}


@dataclass
class StyleTables:
    """Result of the styles pass."""

    styles: Dict[str, StyleEntry] = field(default_factory=dict)
    list_styles: Dict[str, List[ListBullet]] = field(default_factory=dict)


###################
# Tag extractors  #
###################


def _default_style_begin(attributes: Mapping[str, str]) -> Tuple[str, StyleEntry]:
    # Default styles have no name; the family stands in for it
    return attributes.get(_ATTR_STYLE_FAMILY, ""), StyleEntry(display_name="")


def _style_begin(attributes: Mapping[str, str]) -> Tuple[str, StyleEntry]:
    parent = attributes.get(_ATTR_STYLE_PARENT_STYLE_NAME)
    if parent is None:
        parent = attributes.get(_ATTR_STYLE_FAMILY, "")

    template = None
    if attributes.get(_ATTR_STYLE_DEFAULT_OUTLINE_LEVEL):
        template = heading_template(
            parse_unsigned(attributes, _ATTR_STYLE_DEFAULT_OUTLINE_LEVEL)
        )

    entry = StyleEntry(
        display_name=attributes.get(_ATTR_STYLE_DISPLAY_NAME, ""),
        parent=parent,
        template=template,
    )
    return attributes.get(_ATTR_STYLE_NAME, ""), entry


def _list_level(attributes: Mapping[str, str]) -> int:
    return parse_unsigned(attributes, _ATTR_TEXT_LEVEL)


def _bullet_character_begin(attributes: Mapping[str, str]) -> ListBullet:
    return ListBulletCharacter(
        prefix=attributes.get(_ATTR_STYLE_NUM_PREFIX),
        suffix=attributes.get(_ATTR_STYLE_NUM_SUFFIX),
        char=attributes.get(_ATTR_TEXT_BULLET_CHAR, ""),
    )


def _bullet_number_begin(attributes: Mapping[str, str]) -> ListBullet:
    prefix = attributes.get(_ATTR_STYLE_NUM_PREFIX)
    suffix = attributes.get(_ATTR_STYLE_NUM_SUFFIX)
    num_format = attributes.get(_ATTR_STYLE_NUM_FORMAT, "")

    scheme = _NUMBERING_SCHEMES.get(num_format)
    if scheme is None:
        # ODF allows any string as format; show it as a literal bullet
        return ListBulletCharacter(prefix=prefix, suffix=suffix, char=num_format)

    start_value = None
    if _ATTR_TEXT_START_VALUE in attributes:
        start_value = parse_unsigned(attributes, _ATTR_TEXT_START_VALUE)
    return ListBulletVariant(
        prefix=prefix,
        suffix=suffix,
        start_value=start_value,
        numbering_scheme=scheme,
    )


def _bullet_image_begin(attributes: Mapping[str, str]) -> ListBullet:
    return ListBulletImage(href=attributes.get(_ATTR_XLINK_HREF, ""))


###########
# Builder #
###########


class StyleTableBuilder:
    """
    Event consumer for one styles.xml pass.

    Feed every event in document order with feed(), then call close() to
    get the tables. One instance serves exactly one pass.
    """

    def __init__(self) -> None:
        self._tables = StyleTables()
        self._current_name: Optional[str] = None
        self._current_entry: Optional[StyleEntry] = None
        self._current_list_name: Optional[str] = None
        self._current_bullets: Optional[List[ListBullet]] = None

        self._start_handlers: Dict[QName, Callable] = {
            _STYLE_DEFAULT_STYLE: partial(self._open_entry, _default_style_begin),
            _STYLE_STYLE: partial(self._open_entry, _style_begin),
            _TEXT_LIST_STYLE: self._open_list_style,
            _TEXT_LIST_LEVEL_STYLE_BULLET: partial(
                self._set_bullet, _bullet_character_begin
            ),
            _TEXT_LIST_LEVEL_STYLE_NUMBER: partial(
                self._set_bullet, _bullet_number_begin
            ),
            _TEXT_LIST_LEVEL_STYLE_IMAGE: partial(
                self._set_bullet, _bullet_image_begin
            ),
        }
        for name, translator in _PROPERTY_TRANSLATORS.items():
            self._start_handlers[name] = partial(self._translate, translator)

        self._end_handlers: Dict[QName, Callable] = {
            _STYLE_DEFAULT_STYLE: self._commit_entry,
            _STYLE_STYLE: self._commit_entry,
            _TEXT_LIST_STYLE: self._commit_list_style,
        }

    def feed(self, event: XmlEvent) -> None:
        if isinstance(event, StartElement):
            handler = self._start_handlers.get(event.name)
            if handler is not None:
                handler(event.attributes)
        elif isinstance(event, EndElement):
            handler = self._end_handlers.get(event.name)
            if handler is not None:
                handler()

    def close(self) -> StyleTables:
        logger.debug(
            "Collected %d named styles and %d list styles",
            len(self._tables.styles),
            len(self._tables.list_styles),
        )
        return self._tables

    def _open_entry(
        self,
        begin: Callable[[Mapping[str, str]], Tuple[str, StyleEntry]],
        attributes: Mapping[str, str],
    ) -> None:
        self._current_name, self._current_entry = begin(attributes)

    def _translate(
        self, translator: Translator, attributes: Mapping[str, str]
    ) -> None:
        if self._current_entry is None:
            return
        translator(attributes, self._current_entry.properties)

    def _commit_entry(self) -> None:
        if self._current_entry is None:
            return
        self._tables.styles[self._current_name] = self._current_entry
        self._current_name = None
        self._current_entry = None

    def _open_list_style(self, attributes: Mapping[str, str]) -> None:
        self._current_list_name = attributes.get(_ATTR_STYLE_NAME, "")
        self._current_bullets = default_list_bullets()

    def _set_bullet(
        self,
        begin: Callable[[Mapping[str, str]], ListBullet],
        attributes: Mapping[str, str],
    ) -> None:
        if self._current_bullets is None:
            return
        level = _list_level(attributes)
        if not 1 <= level <= LIST_LEVEL_COUNT:
            logger.debug(
                "Ignoring list level %d outside 1..%d", level, LIST_LEVEL_COUNT
            )
            return
        self._current_bullets[level - 1] = begin(attributes)

    def _commit_list_style(self) -> None:
        if self._current_bullets is None:
            return
        self._tables.list_styles[self._current_list_name] = self._current_bullets
        self._current_list_name = None
        self._current_bullets = None


def parse_styles(
    stream: IO[bytes],
    *,
    entry: str = STYLES_ENTRY,
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
) -> StyleTables:
    """
    Run the styles pass over a styles.xml byte stream.

    Raises:
        OdtXmlSyntaxError: The stream is not well-formed XML.
    """
    logger.debug("Parsing %s", entry)
    builder = StyleTableBuilder()
    events = iter_xml_events(stream, entry=entry, read_chunk_size=read_chunk_size)
    for event in events:
        builder.feed(event)
    return builder.close()

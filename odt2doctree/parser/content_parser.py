"""
Content Tree Builder
====================

Turns the event stream of content.xml into the ordered root-level nodes of
the document tree.

content.xml has two regions of interest:

    office:automatic-styles   style:style definitions referenced by name
                              from the body; collected into an
                              AutomaticStyleTable
    office:body               the text; text:h, text:p and text:span become
                              Element nodes, character data becomes Text

Every other element is structurally inert: it creates no node, but the
character data inside it still lands in the innermost open heading,
paragraph or span. The builder keeps an explicit stack of open elements (no
recursion), each paired with its underline scope. An element is attached to
its parent only when it ends, so a failed parse never exposes a partial
tree.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import IO, Callable, Dict, List, Mapping, Optional

from odt2doctree.data_types import Element, Node, Text
from odt2doctree.parser.automatic_styles import AutomaticStyleTable
from odt2doctree.parser.events import (
    DEFAULT_READ_CHUNK_SIZE,
    Characters,
    EndElement,
    StartElement,
    XmlEvent,
    iter_xml_events,
)
from odt2doctree.parser.namespaces import QName, clark, key, parse_unsigned
from odt2doctree.parser.translators import (
    translate_paragraph_properties,
    translate_text_properties,
)
from odt2doctree.parser.underline import UnderlineScope, close_span, open_scope

logger = logging.getLogger(__name__)

CONTENT_ENTRY = "content.xml"

_OFFICE_BODY = key("office", "body")
_OFFICE_AUTOMATIC_STYLES = key("office", "automatic-styles")
_STYLE_STYLE = key("style", "style")
_STYLE_TEXT_PROPERTIES = key("style", "text-properties")
_STYLE_PARAGRAPH_PROPERTIES = key("style", "paragraph-properties")
_TEXT_H = key("text", "h")
_TEXT_P = key("text", "p")
_TEXT_SPAN = key("text", "span")
_TEXT_S = key("text", "s")
_TEXT_TAB = key("text", "tab")
_TEXT_LINE_BREAK = key("text", "line-break")

_ATTR_STYLE_NAME = clark("style", "name")
_ATTR_TEXT_STYLE_NAME = clark("text", "style-name")
_ATTR_TEXT_OUTLINE_LEVEL = clark("text", "outline-level")
_ATTR_TEXT_C = clark("text", "c")

# End tag -> kind of the element it closes
_ELEMENT_KINDS = {_TEXT_H: "heading", _TEXT_P: "paragraph", _TEXT_SPAN: "span"}


def _heading_begin(attributes: Mapping[str, str]) -> Element:
    level = parse_unsigned(attributes, _ATTR_TEXT_OUTLINE_LEVEL)
    return Element(kind="heading", attributes={"level": str(level)})


def _paragraph_begin(attributes: Mapping[str, str]) -> Element:
    return Element(kind="paragraph")


def _span_begin(attributes: Mapping[str, str]) -> Element:
    return Element(kind="span")


@dataclass
class _OpenElement:
    element: Element
    scope: UnderlineScope


class ContentTreeBuilder:
    """
    Event consumer for one content.xml pass.

    Feed every event in document order with feed(), then call close() to
    get the root-level nodes. One instance serves exactly one pass.
    """

    def __init__(self) -> None:
        self._automatic_styles = AutomaticStyleTable()
        self._in_styles = False
        self._in_body = False
        self._stack: List[_OpenElement] = []
        self._children: List[Node] = []
        self._pending_style_name: Optional[str] = None
        self._pending_properties: Dict[str, str] = {}

        self._outside_body_start: Dict[QName, Callable] = {
            _OFFICE_AUTOMATIC_STYLES: self._begin_automatic_styles,
            _OFFICE_BODY: self._begin_body,
        }
        self._styles_start: Dict[QName, Callable] = {
            _STYLE_STYLE: self._begin_style,
            _STYLE_TEXT_PROPERTIES: partial(
                self._translate_properties, translate_text_properties
            ),
            _STYLE_PARAGRAPH_PROPERTIES: partial(
                self._translate_properties, translate_paragraph_properties
            ),
        }
        self._styles_end: Dict[QName, Callable] = {
            _OFFICE_AUTOMATIC_STYLES: self._end_automatic_styles,
            _STYLE_STYLE: self._end_style,
        }
        self._body_start: Dict[QName, Callable] = {
            _TEXT_H: partial(self._open_element, _heading_begin),
            _TEXT_P: partial(self._open_element, _paragraph_begin),
            _TEXT_SPAN: partial(self._open_element, _span_begin),
            _TEXT_S: self._insert_spaces,
            _TEXT_TAB: lambda attributes: self._append_text("\t"),
            _TEXT_LINE_BREAK: lambda attributes: self._append_text("\n"),
        }
        self._body_end: Dict[QName, Callable] = {
            _OFFICE_BODY: self._end_body,
            _TEXT_H: self._close_element,
            _TEXT_P: self._close_element,
            _TEXT_SPAN: self._close_element,
        }

    @property
    def depth(self) -> int:
        """Number of headings, paragraphs and spans currently open."""
        return len(self._stack)

    @property
    def automatic_styles(self) -> AutomaticStyleTable:
        return self._automatic_styles

    def feed(self, event: XmlEvent) -> None:
        if isinstance(event, StartElement):
            self._handle_start(event)
        elif isinstance(event, EndElement):
            self._handle_end(event)
        elif isinstance(event, Characters):
            self._append_text(event.text)

    def close(self) -> List[Node]:
        """Root-level nodes in document order."""
        if self._stack:
            # Only reachable when events are fed by hand: a well-formed
            # document closes every element it opens
            logger.debug(
                "%d elements left open at end of content", len(self._stack)
            )
        return self._children

    def _handle_start(self, event: StartElement) -> None:
        if self._in_body:
            handler = self._body_start.get(event.name)
        else:
            handler = self._outside_body_start.get(event.name)
            if handler is None and self._in_styles:
                handler = self._styles_start.get(event.name)
        if handler is not None:
            handler(event.attributes)

    def _handle_end(self, event: EndElement) -> None:
        if self._in_body:
            handler = self._body_end.get(event.name)
        elif self._in_styles:
            handler = self._styles_end.get(event.name)
        else:
            handler = None
        if handler is not None:
            handler(event.name)

    # Regions

    def _begin_automatic_styles(self, attributes: Mapping[str, str]) -> None:
        if not self._automatic_styles.closed:
            self._in_styles = True

    def _end_automatic_styles(self, name: QName) -> None:
        self._in_styles = False

    def _begin_body(self, attributes: Mapping[str, str]) -> None:
        self._in_styles = False
        self._in_body = True
        self._automatic_styles.close()

    def _end_body(self, name: QName) -> None:
        self._in_body = False

    # Automatic styles

    def _begin_style(self, attributes: Mapping[str, str]) -> None:
        self._pending_style_name = attributes.get(_ATTR_STYLE_NAME, "")
        self._pending_properties = {}

    def _translate_properties(
        self, translator: Callable, attributes: Mapping[str, str]
    ) -> None:
        # Property tags of list levels and other non-style containers
        # carry nothing for the body
        if self._pending_style_name is None:
            return
        translator(attributes, self._pending_properties)

    def _end_style(self, name: QName) -> None:
        if self._pending_style_name is None:
            return
        self._automatic_styles.define(
            self._pending_style_name, self._pending_properties
        )
        self._pending_style_name = None
        self._pending_properties = {}

    # Body

    def _open_element(
        self,
        begin: Callable[[Mapping[str, str]], Element],
        attributes: Mapping[str, str],
    ) -> None:
        element = begin(attributes)
        element.styles = self._automatic_styles.resolve(
            attributes.get(_ATTR_TEXT_STYLE_NAME)
        )
        scope = open_scope(element.styles, self._current_scope())
        self._stack.append(_OpenElement(element, scope))

    def _close_element(self, name: QName) -> None:
        if not self._stack or self._stack[-1].element.kind != _ELEMENT_KINDS[name]:
            logger.debug("Ignoring unmatched end tag %s", name)
            return
        # The scope leaves together with its element, so the scope read
        # below is the enclosing one
        element = self._stack.pop().element
        if name == _TEXT_SPAN:
            close_span(element.styles, self._current_scope())
        if self._stack:
            self._stack[-1].element.children.append(element)
        else:
            self._children.append(element)

    def _current_scope(self) -> Optional[UnderlineScope]:
        if self._stack:
            return self._stack[-1].scope
        return None

    def _insert_spaces(self, attributes: Mapping[str, str]) -> None:
        self._append_text(" " * parse_unsigned(attributes, _ATTR_TEXT_C))

    def _append_text(self, text: str) -> None:
        if not self._stack or not text:
            return
        children = self._stack[-1].element.children
        if children and isinstance(children[-1], Text):
            children[-1].text += text
        else:
            children.append(Text(text))


def parse_content(
    stream: IO[bytes],
    *,
    entry: str = CONTENT_ENTRY,
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
) -> List[Node]:
    """
    Run the content pass over a content.xml byte stream.

    Raises:
        OdtXmlSyntaxError: The stream is not well-formed XML.
    """
    logger.debug("Parsing %s", entry)
    builder = ContentTreeBuilder()
    events = iter_xml_events(stream, entry=entry, read_chunk_size=read_chunk_size)
    for event in events:
        builder.feed(event)
    return builder.close()

"""
Streaming XML event source.

Wraps lxml's parser-target interface so that an entry of the package is
read in chunks and turned into an ordered sequence of structural events,
without ever building a tree. Self-closed tags produce a StartElement
immediately followed by an EndElement, so consumers accept both forms
without special casing. Adjacent character data is coalesced into a single
Characters event.
"""

import logging
from dataclasses import dataclass, field
from typing import IO, Dict, Iterator, List, Union

from lxml import etree

from odt2doctree.exceptions import OdtXmlSyntaxError
from odt2doctree.parser.namespaces import QName, split_clark

logger = logging.getLogger(__name__)

DEFAULT_READ_CHUNK_SIZE = 64 * 1024


@dataclass
class StartElement:
    name: QName
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class EndElement:
    name: QName


@dataclass
class Characters:
    text: str


XmlEvent = Union[StartElement, EndElement, Characters]


class _EventCollector:
    """lxml parser target queueing events until the reader drains them."""

    def __init__(self) -> None:
        self.events: List[XmlEvent] = []
        self._text: List[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self.events.append(Characters("".join(self._text)))
            self._text = []

    def start(self, tag, attrib) -> None:
        self._flush_text()
        self.events.append(StartElement(split_clark(tag), dict(attrib)))

    def end(self, tag) -> None:
        self._flush_text()
        self.events.append(EndElement(split_clark(tag)))

    def data(self, data) -> None:
        self._text.append(data)

    def comment(self, text) -> None:
        # Comments split character data in the source but carry no content
        pass

    def close(self) -> None:
        self._flush_text()

    def drain(self) -> List[XmlEvent]:
        events, self.events = self.events, []
        return events


def iter_xml_events(
    stream: IO[bytes],
    *,
    entry: str = "<stream>",
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
) -> Iterator[XmlEvent]:
    """
    Yield the structural events of an XML byte stream in document order.

    Raises:
        OdtXmlSyntaxError: The stream is not well-formed XML. Events already
            yielded stay valid, but the consumer must discard its result.
    """
    collector = _EventCollector()
    parser = etree.XMLParser(
        target=collector, resolve_entities=False, no_network=True
    )
    try:
        while True:
            chunk = stream.read(read_chunk_size)
            if not chunk:
                break
            parser.feed(chunk)
            yield from collector.drain()
        parser.close()
    except etree.XMLSyntaxError as exc:
        logger.debug("XML syntax error in %s: %s", entry, exc)
        raise OdtXmlSyntaxError(entry, cause=exc) from exc
    yield from collector.drain()

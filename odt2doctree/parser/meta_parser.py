import logging
from typing import IO, List, Optional

from odt2doctree.data_types import OdtMetadata
from odt2doctree.parser.events import (
    Characters,
    EndElement,
    StartElement,
    iter_xml_events,
)
from odt2doctree.parser.namespaces import QName, key

logger = logging.getLogger(__name__)

META_ENTRY = "meta.xml"

# meta.xml element -> OdtMetadata field
_META_FIELDS = {
    key("dc", "title"): "title",
    key("dc", "description"): "description",
    key("dc", "subject"): "subject",
    key("dc", "creator"): "creator",
    key("dc", "date"): "date",
    key("dc", "language"): "language",
    key("meta", "keyword"): "keywords",
    key("meta", "initial-creator"): "initial_creator",
    key("meta", "creation-date"): "creation_date",
    key("meta", "editing-cycles"): "editing_cycles",
    key("meta", "editing-duration"): "editing_duration",
    key("meta", "generator"): "generator",
}

_OFFICE_META = key("office", "meta")


def _store(metadata: OdtMetadata, field_name: str, value: str) -> None:
    if not value:
        return
    if field_name == "editing_cycles":
        try:
            metadata.editing_cycles = int(value)
        except ValueError:
            logger.debug("Unparsable editing cycles %r", value)
        return
    if field_name == "keywords" and metadata.keywords:
        # meta:keyword repeats once per keyword
        value = f"{metadata.keywords}, {value}"
    setattr(metadata, field_name, value)


def parse_meta(stream: IO[bytes], *, entry: str = META_ENTRY) -> OdtMetadata:
    """
    Read the document metadata of a meta.xml byte stream.

    Only the direct children of office:meta are considered.
    """
    logger.debug("Extracting ODT metadata")
    metadata = OdtMetadata()
    path: List[QName] = []
    current_field: Optional[str] = None
    text: List[str] = []

    for event in iter_xml_events(stream, entry=entry):
        if isinstance(event, StartElement):
            if len(path) > 0 and path[-1] == _OFFICE_META:
                current_field = _META_FIELDS.get(event.name)
                text = []
            path.append(event.name)
        elif isinstance(event, EndElement):
            path.pop()
            if current_field is not None and path and path[-1] == _OFFICE_META:
                _store(metadata, current_field, "".join(text).strip())
                current_field = None
        elif isinstance(event, Characters) and current_field is not None:
            text.append(event.text)

    return metadata

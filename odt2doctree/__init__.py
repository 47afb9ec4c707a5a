"""
odt2doctree: OpenDocument Text to document tree conversion.

Reads an ODT package and produces an in-memory document tree (headings,
paragraphs and spans with flattened inline styles), the named-style table
of styles.xml and the list bullet definitions, ready for a renderer.
"""

import io
from pathlib import Path
from typing import Any, Generator

from odt2doctree.data_types import (
    Element,
    ListBullet,
    ListBulletCharacter,
    ListBulletImage,
    ListBulletVariant,
    Node,
    OdtDocument,
    OdtMetadata,
    StyleEntry,
    Text,
)
from odt2doctree.exceptions import (
    ArchiveEntryMissingError,
    ExtractionError,
    ExtractionFailedError,
    ExtractionFileEncryptedError,
    ExtractionZipBombError,
    OdtXmlSyntaxError,
)
from odt2doctree.mime_types import is_supported_file
from odt2doctree.odt_reader import read_odt
from odt2doctree.parser.content_parser import parse_content
from odt2doctree.parser.styles_parser import parse_styles
from odt2doctree.serialization import deserialize_document, serialize_document

__version__ = "0.1.0"


def read_file(
    path: str | Path,
) -> Generator[OdtDocument, Any, None]:
    """
    Read and convert an ODT file.

    Args:
        path: Path to the .odt (or .ott) file to read.

    Yields:
        The converted OdtDocument.

    Raises:
        ExtractionFailedError: If the file is not an OpenDocument text file.
        FileNotFoundError: If the file does not exist.

    Example:
        >>> import odt2doctree
        >>> for document in odt2doctree.read_file("document.odt"):
        ...     print(document.get_full_text())
    """
    path = Path(path)
    if not is_supported_file(str(path)):
        raise ExtractionFailedError(f"File type not supported: {path}")
    with open(path, "rb") as f:
        yield from read_odt(io.BytesIO(f.read()), str(path))


__all__ = [
    # Version
    "__version__",
    # Main functions
    "read_file",
    "read_odt",
    "is_supported_file",
    # Single passes
    "parse_content",
    "parse_styles",
    # Serialization
    "serialize_document",
    "deserialize_document",
    # Data model
    "Element",
    "Text",
    "Node",
    "StyleEntry",
    "ListBullet",
    "ListBulletCharacter",
    "ListBulletVariant",
    "ListBulletImage",
    "OdtDocument",
    "OdtMetadata",
    # Errors
    "ExtractionError",
    "ExtractionFailedError",
    "ExtractionFileEncryptedError",
    "ExtractionZipBombError",
    "ArchiveEntryMissingError",
    "OdtXmlSyntaxError",
]

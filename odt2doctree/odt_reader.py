"""
ODT Document Reader
===================

Converts an OpenDocument Text (.odt) package into an OdtDocument: the
document tree of content.xml, the named styles and list styles of
styles.xml, and the metadata of meta.xml.

File Format Background
----------------------
ODT files are ZIP archives containing XML files following the OASIS
OpenDocument specification (ISO/IEC 26300). The entries used here:

    content.xml: Automatic styles and the document body (required)
    styles.xml: Named styles, default styles, list styles (required)
    meta.xml: Metadata (title, author, dates, statistics) (optional)
    META-INF/manifest.xml: Lists encrypted entries, if any

Both required entries are read as event streams, one pass per entry, so a
document is never held as a DOM. The passes share no state and run one
after the other.

Error Handling
--------------
    - ArchiveEntryMissingError: content.xml or styles.xml is absent
    - OdtXmlSyntaxError: an entry is not well-formed XML
    - ExtractionFileEncryptedError: the package is password-protected
    - ExtractionZipBombError: the container trips the ZIP-bomb limits
    - ExtractionFailedError: anything else, with the original cause chained

No partially built document is ever returned.

Usage
-----
    >>> import io
    >>> from odt2doctree.odt_reader import read_odt
    >>>
    >>> with open("document.odt", "rb") as f:
    ...     for doc in read_odt(io.BytesIO(f.read()), path="document.odt"):
    ...         print(f"Title: {doc.metadata.title}")
    ...         print(f"Blocks: {len(doc.children)}")
    ...         print(f"Styles: {sorted(doc.styles)}")
"""

import io
import logging
import zipfile
from typing import Any, Generator

from odt2doctree.data_types import Node, OdtDocument, OdtMetadata
from odt2doctree.exceptions import (
    ExtractionError,
    ExtractionFailedError,
    ExtractionFileEncryptedError,
)
from odt2doctree.parser.content_parser import CONTENT_ENTRY, parse_content
from odt2doctree.parser.events import DEFAULT_READ_CHUNK_SIZE
from odt2doctree.parser.meta_parser import META_ENTRY, parse_meta
from odt2doctree.parser.styles_parser import (
    STYLES_ENTRY,
    StyleTables,
    parse_styles,
)
from odt2doctree.util.encryption import is_odf_encrypted
from odt2doctree.util.zip_bomb import DEFAULT_ZIP_BOMB_LIMITS, ZipBombLimits
from odt2doctree.util.zip_context import ZipContext

logger = logging.getLogger(__name__)


def _read_package(
    ctx: ZipContext, read_chunk_size: int
) -> tuple[list[Node], StyleTables, OdtMetadata]:
    if is_odf_encrypted(ctx):
        raise ExtractionFileEncryptedError("ODT is encrypted or password-protected")

    with ctx.open_stream(CONTENT_ENTRY) as stream:
        children = parse_content(stream, read_chunk_size=read_chunk_size)

    with ctx.open_stream(STYLES_ENTRY) as stream:
        tables = parse_styles(stream, read_chunk_size=read_chunk_size)

    metadata = OdtMetadata()
    if ctx.exists(META_ENTRY):
        with ctx.open_stream(META_ENTRY) as stream:
            metadata = parse_meta(stream)
    return children, tables, metadata


def read_odt(
    file_like: io.BytesIO,
    path: str | None = None,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
) -> Generator[OdtDocument, Any, None]:
    """
    Convert an OpenDocument Text (.odt) package.

    This function uses a generator pattern for API consistency with
    read_file(), even though an ODT package holds exactly one document.

    Args:
        file_like: BytesIO object containing the complete ODT file data.
            The stream position is reset to the beginning before reading.
        path: Optional filesystem path to the source file. If provided,
            populates file metadata (filename, extension, folder) in the
            returned OdtDocument.metadata.
        limits: ZIP-bomb thresholds applied when the package is opened.
        read_chunk_size: Number of bytes handed to the XML parser at once.

    Yields:
        OdtDocument: Single document containing:
            - children: Root-level headings and paragraphs
            - styles: Named styles by name (default styles by family)
            - list_styles: Ten bullet slots per list style
            - metadata: OdtMetadata with title, creator, dates, etc.

    Raises:
        ArchiveEntryMissingError: content.xml or styles.xml is missing.
        OdtXmlSyntaxError: content.xml, styles.xml or meta.xml is malformed.
        ExtractionFileEncryptedError: The package is encrypted.
        ExtractionZipBombError: The package exceeds the ZIP-bomb limits.
        ExtractionFailedError: Any other failure, e.g. not a ZIP file.
    """
    try:
        file_like.seek(0)
        with ZipContext(file_like, limits=limits) as ctx:
            children, tables, metadata = _read_package(ctx, read_chunk_size)

        metadata.populate_from_path(path)
        logger.debug(
            "Converted ODT with %d root nodes and %d styles",
            len(children),
            len(tables.styles),
        )

        yield OdtDocument(
            children=children,
            styles=tables.styles,
            list_styles=tables.list_styles,
            metadata=metadata,
        )
    except ExtractionError:
        raise
    except zipfile.BadZipFile as exc:
        raise ExtractionFailedError(
            "Invalid ODT file: not a ZIP container", cause=exc
        ) from exc
    except Exception as exc:
        raise ExtractionFailedError("Failed to extract ODT file", cause=exc) from exc

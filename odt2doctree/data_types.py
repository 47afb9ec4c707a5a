import typing
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

LIST_LEVEL_COUNT = 10
DEFAULT_BULLET_SCHEME = "filledBullet"


@dataclass
class FileMetadataInterface:
    filename: str | None = None
    file_extension: str | None = None
    file_path: str | None = None
    folder_path: str | None = None

    def populate_from_path(self, path: str | Path | None) -> None:
        """Populate file metadata fields from a path."""
        if path is None:
            return
        p = Path(path)
        self.filename = p.name
        self.file_extension = p.suffix
        self.file_path = str(p.resolve()) if p.exists() else str(p)
        self.folder_path = (
            str(p.parent.resolve()) if p.parent.exists() else str(p.parent)
        )


@dataclass
class OdtMetadata(FileMetadataInterface):
    """
    Metadata of an ODT package.

    Combines the file information with the Dublin Core and meta:* fields
    found in meta.xml. All document fields stay empty when the package
    ships no meta.xml.
    """

    title: str = ""
    description: str = ""
    subject: str = ""
    creator: str = ""
    keywords: str = ""
    initial_creator: str = ""
    creation_date: str = ""
    date: str = ""  # Last modified date
    language: str = ""
    editing_cycles: int = 0
    editing_duration: str = ""
    generator: str = ""  # Application that created the document


###############
# Tree nodes  #
###############


@dataclass
class Text:
    """A run of character data; always a leaf."""

    text: str = ""


@dataclass
class Element:
    """
    A tagged node of the document tree.

    kind is one of "heading", "paragraph" or "span". attributes carries
    structural data (the heading level), styles the flattened CSS-like
    properties resolved from the automatic styles.
    """

    kind: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    styles: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)

    def iter_text(self) -> typing.Iterator[str]:
        for child in self.children:
            if isinstance(child, Text):
                yield child.text
            else:
                yield from child.iter_text()

    def get_text(self) -> str:
        return "".join(self.iter_text())


Node = Union[Element, Text]


def heading_template(level: int) -> Element:
    """Element used as the default heading of an outline level."""
    return Element(kind="heading", attributes={"level": str(level)})


##########
# Styles #
##########


@dataclass
class StyleEntry:
    """
    A named style from styles.xml.

    parent is the unresolved inheritance link: it may name a style that is
    defined later or not at all. Consumers flatten the chain themselves.
    """

    display_name: str = ""
    parent: Optional[str] = None
    template: Optional[Element] = None
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class ListBulletCharacter:
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    char: str = ""


@dataclass
class ListBulletVariant:
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    start_value: Optional[int] = None
    numbering_scheme: str = DEFAULT_BULLET_SCHEME


@dataclass
class ListBulletImage:
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    href: str = ""


ListBullet = Union[ListBulletCharacter, ListBulletVariant, ListBulletImage]


def default_list_bullets() -> List[ListBullet]:
    """Ten outline levels, each a filled bullet."""
    return [ListBulletVariant() for _ in range(LIST_LEVEL_COUNT)]


############
# Document #
############


@dataclass
class OdtDocument:
    """Complete conversion result of an ODT package."""

    children: List[Node] = field(default_factory=list)
    styles: Dict[str, StyleEntry] = field(default_factory=dict)
    list_styles: Dict[str, List[ListBullet]] = field(default_factory=dict)
    metadata: OdtMetadata = field(default_factory=OdtMetadata)

    def iterator(self) -> typing.Iterator[str]:
        """Yields the text of every root-level block in document order."""
        for node in self.children:
            if isinstance(node, Text):
                yield node.text
            else:
                yield node.get_text()

    def get_full_text(self) -> str:
        return "\n".join(self.iterator())

    def get_metadata(self) -> OdtMetadata:
        return self.metadata

    def to_json(self) -> dict:
        from odt2doctree.serialization import serialize_document

        return serialize_document(self)

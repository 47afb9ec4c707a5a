import mimetypes

SUPPORTED_MIME_TYPES = frozenset(
    {
        "application/vnd.oasis.opendocument.text",
        "application/vnd.oasis.opendocument.text-template",
    }
)

# Not every platform's mime database knows the ODF types
_SUPPORTED_EXTENSIONS = (".odt", ".ott")


def is_supported_mime_type(mime_type: str | None) -> bool:
    if not mime_type:
        return False
    return mime_type in SUPPORTED_MIME_TYPES


def is_supported_file(path: str) -> bool:
    """Checks if the path names an OpenDocument text document or template."""
    path = str(path).lower()
    mime_type, _ = mimetypes.guess_type(path)
    return is_supported_mime_type(mime_type) or path.endswith(_SUPPORTED_EXTENSIONS)

"""
ODF namespace table and qualified-name helpers.

Tags and attributes travel through the parser in Clark notation
("{uri}local"), which is what lxml reports. Dispatch keys are
(namespace URI, local name) pairs; an element without a namespace has the
key (None, local) and therefore never matches a handler.
"""

import logging
from typing import Mapping

logger = logging.getLogger(__name__)

# ODF namespaces
NS = {
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "style": "urn:oasis:names:tc:opendocument:xmlns:style:1.0",
    "table": "urn:oasis:names:tc:opendocument:xmlns:table:1.0",
    "draw": "urn:oasis:names:tc:opendocument:xmlns:drawing:1.0",
    "xlink": "http://www.w3.org/1999/xlink",
    "dc": "http://purl.org/dc/elements/1.1/",
    "meta": "urn:oasis:names:tc:opendocument:xmlns:meta:1.0",
    "fo": "urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0",
    "svg": "urn:oasis:names:tc:opendocument:xmlns:svg-compatible:1.0",
}

QName = tuple[str | None, str]


def key(prefix: str, local_name: str) -> QName:
    """Dispatch key for a prefixed ODF name, e.g. key("text", "p")."""
    return NS[prefix], local_name


def clark(prefix: str, local_name: str) -> str:
    """Clark-notation name for a prefixed ODF name."""
    return f"{{{NS[prefix]}}}{local_name}"


def split_clark(name: str) -> QName:
    if name.startswith("{"):
        uri, _, local_name = name[1:].partition("}")
        return uri, local_name
    return None, name


def parse_unsigned(
    attributes: Mapping[str, str], name: str, default: int = 1
) -> int:
    """
    Read an unsigned integer attribute.

    Integral decimals such as "2.0" are accepted. Absent, empty, negative,
    fractional or unparsable values give the default.
    """
    raw = attributes.get(name)
    if raw is None:
        return default
    try:
        number = float(raw.strip())
    except ValueError:
        logger.debug("Unparsable value %r for %s, using %d", raw, name, default)
        return default
    if not number.is_integer():
        logger.debug("Fractional value %r for %s, using %d", raw, name, default)
        return default
    value = int(number)
    if value < 0:
        logger.debug("Negative value %r for %s, using %d", raw, name, default)
        return default
    return value

import logging
from typing import Dict

logger = logging.getLogger(__name__)


class AutomaticStyleTable:
    """
    Automatic styles of one content.xml pass: style name to flat properties.

    Automatic styles are never chained, so a lookup returns the declared
    properties only. The table is closed when the document body starts and
    accepts no definitions afterwards.
    """

    def __init__(self) -> None:
        self._styles: Dict[str, Dict[str, str]] = {}
        self._closed = False

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, name: str) -> bool:
        return name in self._styles

    @property
    def closed(self) -> bool:
        return self._closed

    def define(self, name: str, properties: Dict[str, str]) -> None:
        if self._closed:
            raise RuntimeError(
                f"Automatic style table is closed, cannot define {name}"
            )
        self._styles[name] = dict(properties)

    def close(self) -> None:
        logger.debug("Collected %d automatic styles", len(self._styles))
        self._closed = True

    def resolve(self, name: str | None) -> Dict[str, str]:
        """A copy of the properties of a style; unknown names give an empty map."""
        if not name:
            return {}
        return dict(self._styles.get(name, {}))

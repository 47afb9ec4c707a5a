import io
import logging
import zipfile
from typing import IO

from odt2doctree.exceptions import ArchiveEntryMissingError
from odt2doctree.util.zip_bomb import (
    DEFAULT_ZIP_BOMB_LIMITS,
    ZipBombLimits,
    open_zipfile,
)

logger = logging.getLogger(__name__)


class ZipContext:
    """Opened ODT package with exact-path entry lookup."""

    def __init__(
        self,
        file_like: io.BytesIO,
        *,
        limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    ):
        self.file_like = file_like
        self.file_like.seek(0)
        self._zip = open_zipfile(
            self.file_like, limits=limits, source=type(self).__name__
        )
        self._namelist = set(self._zip.namelist())

    def __enter__(self) -> "ZipContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def exists(self, path: str) -> bool:
        return path in self._namelist

    def read_bytes(self, path: str) -> bytes:
        return self._zip.read(self._require(path))

    def open_stream(self, path: str) -> IO[bytes]:
        return self._zip.open(self._require(path))

    def close(self) -> None:
        self._zip.close()

    def _require(self, path: str) -> zipfile.ZipInfo:
        try:
            return self._zip.getinfo(path)
        except KeyError as exc:
            logger.debug("Entry %s missing from package", path)
            raise ArchiveEntryMissingError(path, cause=exc) from exc

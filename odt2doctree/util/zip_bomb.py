from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass

from odt2doctree.exceptions import ExtractionZipBombError


@dataclass(frozen=True)
class ZipBombLimits:
    """
    Heuristics for rejecting probable ZIP bombs in ODT packages.

    A text document rarely carries more than a few hundred entries; the
    defaults still leave room for documents with many embedded pictures.
    """

    max_entries: int = 10_000
    max_total_uncompressed_bytes: int = 2 * 1024 * 1024 * 1024  # 2 GiB
    max_single_uncompressed_bytes: int = 512 * 1024 * 1024  # 512 MiB
    max_total_compression_ratio: float = 200.0
    max_entry_compression_ratio: float = 500.0


DEFAULT_ZIP_BOMB_LIMITS = ZipBombLimits()


def _fail(message: str, source: str | None) -> ExtractionZipBombError:
    if source:
        message = f"{message} [{source}]"
    return ExtractionZipBombError(message)


def validate_zipfile(
    zf: zipfile.ZipFile,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> None:
    """
    Check an opened package against the ZIP-bomb limits.

    Only the central directory is inspected; nothing is decompressed.
    """
    try:
        infos = [info for info in zf.infolist() if not info.is_dir()]
    except Exception as exc:
        raise ExtractionZipBombError(
            "Failed to inspect ZIP container", cause=exc
        ) from exc

    if len(infos) > limits.max_entries:
        raise _fail(
            f"ZIP container has too many entries ({len(infos)} > {limits.max_entries})",
            source,
        )

    total_uncompressed = 0
    total_compressed = 0
    for info in infos:
        if info.file_size > limits.max_single_uncompressed_bytes:
            raise _fail(
                f"ZIP entry {info.filename} too large "
                f"({info.file_size} bytes > {limits.max_single_uncompressed_bytes})",
                source,
            )
        if info.file_size > 0:
            if info.compress_size <= 0:
                raise _fail(
                    f"ZIP entry {info.filename} has zero compressed size "
                    "but non-zero uncompressed size",
                    source,
                )
            ratio = info.file_size / info.compress_size
            if ratio > limits.max_entry_compression_ratio:
                raise _fail(
                    f"ZIP entry {info.filename} compression ratio too high "
                    f"({ratio:.1f} > {limits.max_entry_compression_ratio})",
                    source,
                )
        total_uncompressed += info.file_size
        total_compressed += info.compress_size

    if total_uncompressed > limits.max_total_uncompressed_bytes:
        raise _fail(
            f"ZIP total uncompressed size too large "
            f"({total_uncompressed} bytes > {limits.max_total_uncompressed_bytes})",
            source,
        )
    if total_uncompressed > 0:
        total_ratio = total_uncompressed / max(total_compressed, 1)
        if total_ratio > limits.max_total_compression_ratio:
            raise _fail(
                f"ZIP total compression ratio too high "
                f"({total_ratio:.1f} > {limits.max_total_compression_ratio})",
                source,
            )


def open_zipfile(
    file_like: io.BytesIO,
    *,
    limits: ZipBombLimits = DEFAULT_ZIP_BOMB_LIMITS,
    source: str | None = None,
) -> zipfile.ZipFile:
    """
    Open a package and validate it for ZIP-bomb indicators.

    Caller owns the returned ZipFile and must close it.
    """
    file_like.seek(0)
    zf = zipfile.ZipFile(file_like, "r")
    try:
        validate_zipfile(zf, limits=limits, source=source)
    except Exception:
        zf.close()
        raise
    return zf

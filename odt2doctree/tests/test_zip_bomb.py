import io
import zipfile

import pytest

from odt2doctree.exceptions import ArchiveEntryMissingError, ExtractionZipBombError
from odt2doctree.util.zip_bomb import ZipBombLimits, open_zipfile, validate_zipfile
from odt2doctree.util.zip_context import ZipContext


def _make_zip_bytesio(files: dict[str, bytes]) -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.items():
            zf.writestr(name, data)
    buffer.seek(0)
    return buffer


def test_zip_bomb_detection_can_use_low_thresholds__compression_ratio() -> None:
    buffer = _make_zip_bytesio({"content.xml": b"A" * 10_000})

    with pytest.raises(ExtractionZipBombError):
        open_zipfile(
            buffer,
            limits=ZipBombLimits(
                max_entry_compression_ratio=10.0,
                max_total_compression_ratio=10.0,
            ),
            source="test",
        )

    zf = open_zipfile(
        buffer,
        limits=ZipBombLimits(
            max_entry_compression_ratio=10_000.0,
            max_total_compression_ratio=10_000.0,
        ),
        source="test",
    )
    zf.close()


def test_zip_bomb_detection_can_use_low_thresholds__entry_count() -> None:
    buffer = _make_zip_bytesio(
        {
            "content.xml": b"a",
            "styles.xml": b"b",
            "meta.xml": b"c",
        }
    )

    with pytest.raises(ExtractionZipBombError):
        open_zipfile(buffer, limits=ZipBombLimits(max_entries=2), source="test")


def test_zip_bomb_detection_can_use_low_thresholds__entry_size() -> None:
    buffer = _make_zip_bytesio({"Pictures/large.png": b"x" * 2048})

    with zipfile.ZipFile(buffer) as zf:
        with pytest.raises(ExtractionZipBombError) as exc_info:
            validate_zipfile(
                zf, limits=ZipBombLimits(max_single_uncompressed_bytes=1024)
            )
    assert "Pictures/large.png" in str(exc_info.value)


def test_zip_bomb_error_names_its_source() -> None:
    buffer = _make_zip_bytesio({"a.xml": b"a", "b.xml": b"b"})

    with pytest.raises(ExtractionZipBombError) as exc_info:
        ZipContext(buffer, limits=ZipBombLimits(max_entries=1))
    assert "[ZipContext]" in str(exc_info.value)


def test_zip_context_entry_lookup() -> None:
    buffer = _make_zip_bytesio({"content.xml": b"<a/>"})

    with ZipContext(buffer) as ctx:
        assert ctx.exists("content.xml")
        assert not ctx.exists("Content.xml")
        assert ctx.read_bytes("content.xml") == b"<a/>"
        with ctx.open_stream("content.xml") as stream:
            assert stream.read() == b"<a/>"
        with pytest.raises(ArchiveEntryMissingError) as exc_info:
            ctx.open_stream("styles.xml")
    assert exc_info.value.entry == "styles.xml"

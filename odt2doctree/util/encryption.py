from odt2doctree.util.zip_context import ZipContext

_MANIFEST_PATH = "META-INF/manifest.xml"

# Any of these in the manifest means at least one entry is encrypted
_ENCRYPTION_MARKERS = ("encryption-data", "manifest:encrypted", "manifest:algorithm")


def is_odf_encrypted(ctx: ZipContext) -> bool:
    if not ctx.exists(_MANIFEST_PATH):
        return False
    manifest = ctx.read_bytes(_MANIFEST_PATH).decode("utf-8", errors="ignore")
    return any(marker in manifest for marker in _ENCRYPTION_MARKERS)

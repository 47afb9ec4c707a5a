class ExtractionError(Exception):
    """Base class for every failure raised while reading an ODT package."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.__cause__ = cause  # Optional chaining for debugging


class ExtractionFailedError(ExtractionError):
    """Raised when an ODT package cannot be converted for an unexpected reason."""


class ExtractionFileEncryptedError(ExtractionError):
    """Raised when the ODT package is encrypted or password-protected."""


class ExtractionZipBombError(ExtractionError):
    """Raised when the ZIP container trips one of the ZIP-bomb heuristics."""


class ArchiveEntryMissingError(ExtractionError):
    """Raised when a required entry (content.xml, styles.xml) is absent."""

    def __init__(self, entry: str, message: str = None, *, cause: Exception = None):
        self.entry = entry
        if message is None:
            message = f"Archive entry not found: {entry}"
        super().__init__(message, cause=cause)


class OdtXmlSyntaxError(ExtractionError):
    """Raised when an entry of the package is not well-formed XML."""

    def __init__(self, entry: str, message: str = None, *, cause: Exception = None):
        self.entry = entry
        if message is None:
            message = f"Malformed XML in {entry}"
            if cause is not None:
                message = f"{message}: {cause}"
        super().__init__(message, cause=cause)

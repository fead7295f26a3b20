"""Errors raised while turning an EPUB3 package into a WebBook."""

from pathlib import Path


class WebBookError(Exception):
    """Base class for every fatal conversion error."""

    pass


class ArchiveError(WebBookError):
    """Raised when the EPUB archive is missing, corrupt or unreadable."""

    pass


class ParseError(WebBookError):
    """Raised when a container, package or navigation document is not well-formed XML."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot parse XML file {path}: {reason}")


class FileAccessError(WebBookError):
    """Raised when a package file cannot be read or written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot access file {path}: {reason}")


class StructuralError(WebBookError):
    """Raised when a required element or attribute is missing or has the wrong value."""

    pass


class IncompatibleVersionError(StructuralError):
    """Raised when the package document is not an EPUB 3.0/3.1 package."""

    def __init__(self, version: str | None):
        self.version = version
        super().__init__(
            f"The version of EPUB ({version}) is incompatible with this tool"
        )

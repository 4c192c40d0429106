from __future__ import annotations
from enum import Enum


class Format(str, Enum):
    """Compression encoding of a stream."""
    NONE = "none"
    GZIP = "gzip"
    XZ = "xz"
    ZSTD = "zstd"


class NoContentError(EOFError):
    """Raised when a stream holds fewer bytes than a check needs (empty or truncated)."""
    pass


class DirNotSupportedError(IsADirectoryError):
    """Raised when a directory is opened for reading."""
    pass


class StdinNotDetectedError(RuntimeError):
    """Raised when '-' is opened but nothing is piped or redirected into stdin."""
    pass


class UnknownUserError(LookupError):
    """Raised when ~user cannot be resolved to a home directory."""
    pass

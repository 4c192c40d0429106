"""fastopen - buffered readers and writers that see through gzip, xz and zstd."""

from .core.model import Format, NoContentError, DirNotSupportedError, StdinNotDetectedError, UnknownUserError  # re-export
from .core.registry import _REGISTRY                                  # singleton
from .core.util import expand_user, exists, is_stdin
from .io import (                                                     # entry points
    ropen, wopen, wopen_file, buf, open_source, open_sink,
    Reader, Writer, check_bytes, is_gzip, is_xz, is_zst,
    HTTPStatusError, CommandStartError, ParentNotDirectoryError,
)

# Import codecs to trigger registration
from .codecs import gzip, xz, zstd  # noqa: F401


__all__ = [
    "ropen", "wopen", "wopen_file", "buf", "open_source", "open_sink",
    "Reader", "Writer", "Format",
    "check_bytes", "is_gzip", "is_xz", "is_zst",
    "expand_user", "exists", "is_stdin",
    "NoContentError", "DirNotSupportedError", "StdinNotDetectedError", "UnknownUserError",
    "HTTPStatusError", "CommandStartError", "ParentNotDirectoryError",
]

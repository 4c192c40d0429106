"""I/O layer for fastopen - resolves descriptors and composes buffered handles."""

import os

# Re-export these for import convenience
from .base import RawSource, RawSink, HTTPStatusError, CommandStartError, ParentNotDirectoryError
from .local import open_local_source, open_local_sink, DEFAULT_WRITE_FLAGS, DEFAULT_WRITE_PERM
from .stdio import open_stdin_source, open_stdout_sink
from .http_sync import open_http_source
from .process import open_process_source
from .sniff import check_bytes, is_gzip, is_xz, is_zst, detect_codec
from .reader import Reader, buf, open_buffered
from .writer import Writer, open_encoded

def open_source(f, *, session=None) -> RawSource:
    """Resolve a descriptor ('-', '|cmd args', URL, ~user/path or path) to a raw source."""
    f = os.fspath(f)
    if f == "-":
        return open_stdin_source()
    if f.startswith("|"):
        return open_process_source(f[1:])
    if f.startswith(("http://", "https://")):
        return open_http_source(f, session=session)
    return open_local_source(f)


def open_sink(f, flags: int = DEFAULT_WRITE_FLAGS, perm: int = DEFAULT_WRITE_PERM) -> RawSink:
    """Resolve a descriptor ('-' or a path) to a raw sink."""
    f = os.fspath(f)
    if f == "-":
        return open_stdout_sink()
    return open_local_sink(f, flags, perm)


def ropen(f, *, buffer_size: int | None = None, session=None) -> Reader:
    """Open a (possibly compressed) file, stdin, |command or URL for buffered reading.

    Compression is detected from the content, not from the name.
    Raises NoContentError for empty input.
    """
    source = open_source(f, session=session)
    try:
        return open_buffered(source, buffer_size)
    except BaseException:
        source.close()
        raise


def wopen(f, *, buffer_size: int | None = None) -> Writer:
    """Open a file (or '-' for stdout) for buffered writing.

    Ending in .gz, .xz or .zst (any case) selects gzip, xz or zstd output.
    """
    return wopen_file(f, DEFAULT_WRITE_FLAGS, DEFAULT_WRITE_PERM, buffer_size=buffer_size)


def wopen_file(f, flags: int, perm: int, *, buffer_size: int | None = None) -> Writer:
    """Like wopen, with explicit os.open flags and permission bits."""
    f = os.fspath(f)
    sink = open_sink(f, flags, perm)
    try:
        return open_encoded(sink, name=f, buffer_size=buffer_size)
    except BaseException:
        sink.close()
        raise

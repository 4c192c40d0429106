"""Local file sources and sinks."""

import logging
import os
import stat

from ..core.model import DirNotSupportedError
from ..core.util import expand_user
from .base import ParentNotDirectoryError, RawSink, RawSource

logger = logging.getLogger(__name__)

DEFAULT_WRITE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC
DEFAULT_WRITE_PERM = 0o666


def open_local_source(path: str) -> RawSource:
    """Open a local file (after ~ expansion) for reading."""
    path = expand_user(path)
    if os.path.isdir(path):
        raise DirNotSupportedError(f"input is a directory: {path}")
    logger.debug("opening local file %s", path)
    return RawSource(open(path, "rb", buffering=0), name=path, must_close=True)


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path) or "."
    try:
        st = os.stat(parent)
    except FileNotFoundError:
        os.makedirs(parent, 0o755, exist_ok=True)
        return
    except NotADirectoryError as e:
        # some ancestor is a plain file
        raise ParentNotDirectoryError(f"can not write file into a non-directory path: {parent}") from e
    if not stat.S_ISDIR(st.st_mode):
        raise ParentNotDirectoryError(f"can not write file into a non-directory path: {parent}")


def open_local_sink(path: str, flags: int = DEFAULT_WRITE_FLAGS, perm: int = DEFAULT_WRITE_PERM) -> RawSink:
    """Open (creating parents as needed) a local file for writing."""
    _ensure_parent(path)
    fd = os.open(path, flags, perm)
    mode = "ab" if flags & os.O_APPEND else "wb"
    logger.debug("opened local file %s for writing", path)
    try:
        stream = os.fdopen(fd, mode)
    except BaseException:
        os.close(fd)
        raise
    return RawSink(stream, name=path, must_close=True)

from __future__ import annotations
import io
import os
import pwd
import stat
import sys

from .model import UnknownUserError


def expand_user(path: str) -> str:
    """Expand ~/path and ~otheruser/path to the matching home directory."""
    if not path or path[0] != "~":
        return path
    name = path[1:].split("/", 1)[0]
    if name == "":
        home = os.path.expanduser("~")
    else:
        try:
            home = pwd.getpwnam(name).pw_dir
        except KeyError:
            raise UnknownUserError(f"unknown user: {name}") from None
    return home + path[1 + len(name):]


def exists(path: str) -> bool:
    """Check whether a local path exists, after ~ expansion."""
    try:
        path = expand_user(path)
    except UnknownUserError:
        return False
    return os.path.exists(path)


def is_stdin(stream=None) -> bool:
    """Return True when stdin is a pipe or redirect rather than a terminal."""
    stream = sys.stdin if stream is None else stream
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, ValueError, OSError, io.UnsupportedOperation):
        return False
    return not stat.S_ISCHR(mode)

"""Standard input and output, wrapped so the composites never close them."""

import sys

from ..core.model import StdinNotDetectedError
from ..core.util import is_stdin
from .base import RawSink, RawSource


def open_stdin_source() -> RawSource:
    """Use stdin as a source; refuses when nothing is piped in."""
    if not is_stdin():
        raise StdinNotDetectedError("stdin not detected")
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    return RawSource(stream, name="<stdin>", must_close=False)


def open_stdout_sink() -> RawSink:
    """Use stdout as a sink; closing it only flushes."""
    stream = getattr(sys.stdout, "buffer", sys.stdout)
    return RawSink(stream, name="<stdout>", must_close=False)

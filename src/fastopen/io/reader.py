"""Decoding pipeline and the composite Reader it returns."""

from __future__ import annotations

import contextlib
import io
import logging
from typing import BinaryIO, Optional

from ..core import config
from ..core.model import Format, NoContentError
from .base import RawSource, teardown
from .buffer import PeekableReader
from .sniff import detect_codec

logger = logging.getLogger(__name__)

UTF8_BOM = b'\xef\xbb\xbf'


class Reader(io.BufferedIOBase):
    """Buffered, decoded view of one opened source.

    Owns every layer created for it: the peek buffers, the decoder (if the
    source was compressed) and the raw source (if the resolver marked it as
    owned). close() releases them in that order, attempting each even when
    an earlier one fails, and is a no-op the second time.
    """

    def __init__(self, buffer: PeekableReader, source: RawSource, *,
                 decoder: Optional[BinaryIO] = None, fmt: Format = Format.NONE,
                 inner: Optional[PeekableReader] = None):
        self._buffer = buffer
        self._inner = inner
        self._decoder = decoder
        self._source = source
        self.format = fmt

    @property
    def name(self) -> str:
        return self._source.name

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> bytes:
        return self._buffer.read(size)

    def read1(self, size: int = -1) -> bytes:
        return self._buffer.read1(size)

    def readinto(self, b) -> int:
        return self._buffer.readinto(b)

    def readline(self, size: int | None = -1) -> bytes:
        return self._buffer.readline(size)

    def peek(self, size: int = 1) -> bytes:
        return self._buffer.peek(size)

    def close(self) -> None:
        if self.closed:
            return
        steps = [("buffer", self._buffer.close)]
        if self._inner is not None:
            steps.append(("read buffer", self._inner.close))
        if self._decoder is not None:
            steps.append((f"{self.format.value} decoder", self._decoder.close))
        steps.append(("source", self._source.close))
        try:
            teardown(steps, self.name)
        finally:
            super().close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} format={self.format.value}>"


def _skip_bom(b: PeekableReader) -> None:
    head = b.peek(len(UTF8_BOM))
    if not head:
        raise NoContentError("no content")
    if head == UTF8_BOM:
        b.read(len(UTF8_BOM))


def open_buffered(source: RawSource, buffer_size: int | None = None) -> Reader:
    """Sniff the source, wrap it in at most one decoder and return a Reader.

    Raises NoContentError when the (decoded) stream is empty. Layers created
    here are released on failure; releasing `source` is left to the caller.
    """
    size = config.get_buffer_size() if buffer_size is None else buffer_size
    b = PeekableReader(source.stream, size)
    codec = detect_codec(b)
    if codec is None:
        logger.debug("%s: no compression detected", source.name)
        try:
            _skip_bom(b)
        except BaseException:
            b.close()
            raise
        return Reader(b, source)

    logger.debug("%s: detected %s", source.name, codec.format.value)
    decoder = None
    outer = None
    try:
        decoder = codec.decoder(b)
        outer = PeekableReader(decoder, size)
        _skip_bom(outer)
    except BaseException:
        steps = [(label, layer.close) for label, layer in
                 (("buffer", outer), ("decoder", decoder), ("read buffer", b)) if layer is not None]
        # failures are logged by teardown; the pipeline error is the one raised
        with contextlib.suppress(Exception):
            teardown(steps, source.name)
        raise
    return Reader(outer, source, decoder=decoder, fmt=codec.format, inner=b)


def buf(stream: BinaryIO, *, buffer_size: int | None = None, close_source: bool = False,
        name: str | None = None) -> Reader:
    """Run the decoding pipeline over an already-open stream.

    `close_source` says whether the returned Reader takes ownership of
    `stream` and closes it on close().
    """
    if name is None:
        name = getattr(stream, "name", None)
        name = name if isinstance(name, str) else "<stream>"
    source = RawSource(stream, name=name, must_close=close_source)
    try:
        return open_buffered(source, buffer_size)
    except BaseException:
        source.close()
        raise

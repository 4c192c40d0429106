"""Encoding pipeline and the composite Writer it returns."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Optional

from ..core import config
from ..core.model import Format
from ..core.registry import _REGISTRY
from .base import RawSink, teardown
from .buffer import BufferedSink

logger = logging.getLogger(__name__)


class Writer(io.BufferedIOBase):
    """Buffered, encoding writer over one opened sink.

    flush() drains the buffer, then the encoder, then the sink. close()
    drains the buffer, closes the encoder and closes the sink, always in
    that order and attempting every step; the last failure is raised.
    """

    def __init__(self, buffer: BufferedSink, sink: RawSink, *,
                 encoder: Optional[BinaryIO] = None, fmt: Format = Format.NONE):
        self._buffer = buffer
        self._encoder = encoder
        self._sink = sink
        self._released = False
        self.format = fmt

    @property
    def name(self) -> str:
        return self._sink.name

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        return self._buffer.write(b)

    def flush(self) -> None:
        if self._released:
            return
        self._buffer.flush()
        if self._encoder is not None:
            self._encoder.flush()
        self._sink.flush()

    def close(self) -> None:
        if self.closed or self._released:
            return
        self._released = True
        steps = [("buffer", self._buffer.close)]
        if self._encoder is not None:
            steps.append((f"{self.format.value} encoder", self._encoder.close))
        steps.append(("sink", self._sink.close))
        try:
            teardown(steps, self.name)
        finally:
            super().close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} format={self.format.value}>"


def open_encoded(sink: RawSink, name: str | None = None, buffer_size: int | None = None) -> Writer:
    """Pick an encoder from the suffix of `name` (default: the sink's name) and wrap `sink`.

    Releasing `sink` on failure is left to the caller.
    """
    name = sink.name if name is None else name
    size = config.get_buffer_size() if buffer_size is None else buffer_size
    if size <= 0:
        raise ValueError("buffer_size must be positive")
    codec = _REGISTRY.for_name(name)
    if codec is None:
        return Writer(BufferedSink(sink.stream, size), sink)

    logger.debug("%s: writing %s", name, codec.format.value)
    encoder = codec.encoder(sink.stream)
    return Writer(BufferedSink(encoder, size), sink, encoder=encoder, fmt=codec.format)

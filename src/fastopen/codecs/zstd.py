from __future__ import annotations

import io
from typing import BinaryIO, ClassVar

import zstandard

from ..core import config
from ..core.codec_base import Codec
from ..core.model import Format

ZSTD_MAGIC = b'\x28\xb5\x2f\xfd'


class ZstdFrameReader(io.RawIOBase):
    """Decode consecutive zstd frames from `source`.

    zstandard's stream_reader reports a frame cut short as a clean end of
    stream; this reader raises zstandard.ZstdError instead. The wrapped
    stream is never closed.
    """

    def __init__(self, source: BinaryIO, dctx: zstandard.ZstdDecompressor,
                 read_size: int = zstandard.DECOMPRESSION_RECOMMENDED_INPUT_SIZE):
        self._read = source.read1 if isinstance(source, io.BufferedIOBase) else source.read
        self._dctx = dctx
        self._dobj = None  # decompressobj of the frame in progress
        self._read_size = read_size
        self._pending = memoryview(b"")
        self._eof = False

    def readable(self) -> bool:
        return True

    def _decode(self, data: bytes) -> bytes:
        out = []
        while data:
            if self._dobj is None:
                self._dobj = self._dctx.decompressobj()
            out.append(self._dobj.decompress(data))
            if self._dobj.eof:
                data = self._dobj.unused_data
                self._dobj = None
            else:
                data = b""
        return b"".join(out)

    def _next_chunk(self) -> bytes:
        while not self._eof:
            data = self._read(self._read_size)
            if not data:
                self._eof = True
                if self._dobj is not None:
                    raise zstandard.ZstdError("zstd stream ended in the middle of a frame")
                break
            out = self._decode(data)
            if out:
                return out
        return b""

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        mv = memoryview(b).cast("B")
        if not self._pending:
            self._pending = memoryview(self._next_chunk())
        n = min(len(mv), len(self._pending))
        mv[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n


class ZstdCodec(Codec):
    """Zstandard frames; consecutive frames are read as one stream."""

    format: ClassVar = Format.ZSTD
    suffixes: ClassVar = (".zst",)
    magic: ClassVar = ZSTD_MAGIC
    priority: ClassVar = 30

    @classmethod
    def decoder(cls, source: BinaryIO) -> BinaryIO:
        return ZstdFrameReader(source, zstandard.ZstdDecompressor())

    @classmethod
    def encoder(cls, sink: BinaryIO) -> BinaryIO:
        cctx = zstandard.ZstdCompressor(level=config.ZSTD_LEVEL)
        return cctx.stream_writer(sink, closefd=False)

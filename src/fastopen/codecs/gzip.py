from __future__ import annotations

import gzip
from typing import BinaryIO, ClassVar

from ..core import config
from ..core.codec_base import Codec
from ..core.model import Format

GZIP_MAGIC = b'\x1f\x8b'


class GzipCodec(Codec):
    """gzip streams, including concatenated members."""

    format: ClassVar = Format.GZIP
    suffixes: ClassVar = (".gz",)
    magic: ClassVar = GZIP_MAGIC
    priority: ClassVar = 10

    @classmethod
    def decoder(cls, source: BinaryIO) -> BinaryIO:
        return gzip.GzipFile(fileobj=source, mode="rb")

    @classmethod
    def encoder(cls, sink: BinaryIO) -> BinaryIO:
        # empty filename keeps the sink's name (e.g. "<stdout>") out of the header
        return gzip.GzipFile(filename="", fileobj=sink, mode="wb", compresslevel=config.GZIP_LEVEL)

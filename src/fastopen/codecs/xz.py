from __future__ import annotations

import lzma
from typing import BinaryIO, ClassVar

from ..core import config
from ..core.codec_base import Codec
from ..core.model import Format

XZ_MAGIC = b'\xfd7zXZ\x00'


class XzCodec(Codec):
    """xz container streams."""

    format: ClassVar = Format.XZ
    suffixes: ClassVar = (".xz",)
    magic: ClassVar = XZ_MAGIC
    priority: ClassVar = 20

    @classmethod
    def decoder(cls, source: BinaryIO) -> BinaryIO:
        return lzma.LZMAFile(source, mode="rb", format=lzma.FORMAT_XZ)

    @classmethod
    def encoder(cls, sink: BinaryIO) -> BinaryIO:
        return lzma.LZMAFile(sink, mode="wb", format=lzma.FORMAT_XZ, preset=config.XZ_PRESET)

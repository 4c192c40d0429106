"""Magic-byte checks on a PeekableReader."""

from __future__ import annotations

from typing import Type

from ..codecs.gzip import GZIP_MAGIC
from ..codecs.xz import XZ_MAGIC
from ..codecs.zstd import ZSTD_MAGIC
from ..core.codec_base import Codec
from ..core.model import NoContentError
from ..core.registry import _REGISTRY
from .buffer import PeekableReader


def check_bytes(b: PeekableReader, magic: bytes) -> bool:
    """Peek at the stream and report whether it starts with `magic`.

    Nothing is consumed. Raises NoContentError when fewer than len(magic)
    bytes are available.
    """
    head = b.peek(len(magic))
    if len(head) < len(magic):
        raise NoContentError(f"need {len(magic)} bytes, stream has {len(head)}")
    return head == magic


def is_gzip(b: PeekableReader) -> bool:
    return check_bytes(b, GZIP_MAGIC)


def is_xz(b: PeekableReader) -> bool:
    return check_bytes(b, XZ_MAGIC)


def is_zst(b: PeekableReader) -> bool:
    return check_bytes(b, ZSTD_MAGIC)


def detect_codec(b: PeekableReader) -> Type[Codec] | None:
    """Return the first registered codec whose signature leads the stream, or None."""
    for codec in _REGISTRY.codecs:
        try:
            if check_bytes(b, codec.magic):
                return codec
        except NoContentError:
            # too short for this signature; may still be plain content
            continue
    return None

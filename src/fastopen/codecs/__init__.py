"""Compression codecs for fastopen."""

from .gzip import GzipCodec
from .xz import XzCodec
from .zstd import ZstdCodec

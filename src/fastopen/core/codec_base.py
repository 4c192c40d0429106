from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar

from .model import Format


class Codec(ABC):
    # --- required by subclasses ---
    format: ClassVar[Format]
    suffixes: ClassVar[tuple[str, ...]]     # destination suffixes (lower, with dot)
    magic: ClassVar[bytes]                  # leading signature, checked at offset 0
    priority: ClassVar[int] = 100           # lower = sniffed earlier

    # --- read side ---
    @classmethod
    @abstractmethod
    def decoder(cls, source: BinaryIO) -> BinaryIO:
        """Wrap a readable stream so reads return decoded bytes.

        Closing the decoder must not close `source`.
        """
        ...

    # --- write side ---
    @classmethod
    @abstractmethod
    def encoder(cls, sink: BinaryIO) -> BinaryIO:
        """Wrap a writable stream so written bytes are encoded into it.

        The returned object must support flush() and close(); closing it
        finishes the encoded stream but must not close `sink`.
        """
        ...

    # --- registry hook ---
    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        from .registry import _REGISTRY
        _REGISTRY.register(cls)           # noqa: E402

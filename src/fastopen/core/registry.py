from __future__ import annotations
import bisect
from typing import List, Type

from .codec_base import Codec


class CodecRegistry:
    def __init__(self) -> None:
        self._codecs: List[tuple[int, str, Type[Codec]]] = []   # sorted by priority

    # called from Codec.__init_subclass__
    def register(self, codec_cls: Type[Codec]) -> None:
        # Use (priority, class_name, codec_cls) to ensure stable sorting
        entry = (codec_cls.priority, codec_cls.__name__, codec_cls)
        bisect.insort(self._codecs, entry)

    @property
    def codecs(self) -> list[Type[Codec]]:
        """Registered codecs in sniffing order."""
        return [c for _, _, c in self._codecs]

    def for_name(self, name: str) -> Type[Codec] | None:
        """Pick the encoder for a destination from its (case-insensitive) suffix."""
        lowered = str(name).lower()
        for _, _, c in self._codecs:
            if lowered.endswith(c.suffixes):
                return c
        return None


# singleton used project-wide
_REGISTRY = CodecRegistry()

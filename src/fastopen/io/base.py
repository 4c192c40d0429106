"""Raw handles and shared types for the I/O layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


class HTTPStatusError(IOError):
    """Raised when an HTTP source answers with anything but 200."""

    def __init__(self, url: str, status_code: int, reason: str | None = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"http error downloading {url}. status: {status_code} {self.reason}".rstrip())


class CommandStartError(OSError):
    """Raised when a |command source cannot be spawned."""


class ParentNotDirectoryError(NotADirectoryError):
    """Raised when the parent of a write target exists but is not a directory."""


@dataclass
class RawSource:
    """Innermost byte producer, as handed back by a source resolver.

    `must_close` is decided by the resolver: True for streams opened on the
    caller's behalf (files, pipes, HTTP bodies), False for streams owned
    elsewhere (stdin, caller-supplied objects).
    """

    stream: BinaryIO
    name: str
    must_close: bool
    closer: Optional[Callable[[], None]] = None

    def close(self) -> None:
        if not self.must_close:
            return
        if self.closer is not None:
            self.closer()
        else:
            self.stream.close()


@dataclass
class RawSink:
    """Innermost byte consumer; sinks that are not owned are flushed instead of closed."""

    stream: BinaryIO
    name: str
    must_close: bool = True

    def flush(self) -> None:
        self.stream.flush()

    def close(self) -> None:
        if self.must_close:
            self.stream.close()
        else:
            self.stream.flush()


def teardown(steps: Iterable[Tuple[str, Callable[[], None]]], name: str) -> None:
    """Run every release step even if earlier ones fail, then raise the last failure."""
    last_error: Exception | None = None
    for label, step in steps:
        try:
            step()
        except Exception as e:
            logger.warning("closing %s of %s failed: %s", label, name, e)
            last_error = e
    if last_error is not None:
        raise last_error

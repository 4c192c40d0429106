"""Buffers sitting between the caller and codec/raw layers."""

import io
from typing import BinaryIO


class _Layer(io.BufferedIOBase):
    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")


class PeekableReader(_Layer):
    """Read buffer whose peek() blocks until the requested bytes are there.

    Unlike io.BufferedReader.peek, which performs at most one raw read,
    peek(n) keeps reading until n bytes are buffered or the stream ends, so
    short reads from pipes and sockets cannot hide a signature.
    Closing the buffer does not close the wrapped stream.
    """

    def __init__(self, raw: BinaryIO, buffer_size: int):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._raw = raw
        # buffered streams may block in read(n) until n bytes arrive; read1 returns what is there
        self._read = raw.read1 if isinstance(raw, io.BufferedIOBase) else raw.read
        self._size = buffer_size
        self._buf = bytearray()
        self._eof = False

    def readable(self) -> bool:
        return True

    def _fill(self, wanted: int) -> None:
        """Read from the wrapped stream until `wanted` bytes are buffered or EOF."""
        while len(self._buf) < wanted and not self._eof:
            chunk = self._read(max(self._size, wanted - len(self._buf)))
            if not chunk:
                self._eof = True
                break
            self._buf += chunk

    def peek(self, size: int = 1) -> bytes:
        """Return up to `size` upcoming bytes without consuming them.

        Fewer than `size` bytes are returned only at end of stream.
        """
        self._check_open()
        self._fill(size)
        return bytes(self._buf[:size])

    def _take(self, size: int) -> bytes:
        data = bytes(self._buf[:size])
        del self._buf[:size]
        return data

    def read(self, size: int | None = -1) -> bytes:
        self._check_open()
        if size is None or size < 0:
            chunks = [self._take(len(self._buf))]
            while not self._eof:
                chunk = self._read(self._size)
                if not chunk:
                    self._eof = True
                    break
                chunks.append(chunk)
            return b"".join(chunks)
        self._fill(size)
        return self._take(size)

    def read1(self, size: int = -1) -> bytes:
        self._check_open()
        if not self._buf:
            self._fill(1)
        if size is None or size < 0:
            size = len(self._buf)
        return self._take(size)

    def readinto(self, b) -> int:
        mv = memoryview(b).cast("B")
        data = self.read(len(mv))
        n = len(data)
        mv[:n] = data
        return n

    def readline(self, size: int | None = -1) -> bytes:
        self._check_open()
        limit = -1 if size is None else size
        start = 0
        while True:
            idx = self._buf.find(b"\n", start)
            if idx >= 0:
                end = idx + 1
                break
            if 0 <= limit <= len(self._buf) or self._eof:
                end = len(self._buf)
                break
            start = len(self._buf)
            self._fill(len(self._buf) + self._size)
        if 0 <= limit < end:
            end = limit
        return self._take(end)

    def close(self) -> None:
        self._buf = bytearray()
        super().close()


class BufferedSink(_Layer):
    """Write buffer that drains into the next layer once `buffer_size` bytes pile up.

    flush() only drains into the wrapped stream; flushing or closing that
    stream is left to the owner.
    """

    def __init__(self, raw: BinaryIO, buffer_size: int):
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._raw = raw
        self._size = buffer_size
        self._buf = bytearray()

    def writable(self) -> bool:
        return True

    def write(self, b) -> int:
        self._check_open()
        view = memoryview(b)
        self._buf += view
        if len(self._buf) >= self._size:
            self._drain()
        return view.nbytes

    def _drain(self) -> None:
        if self._buf:
            data = bytes(self._buf)
            self._buf.clear()
            self._raw.write(data)

    def flush(self) -> None:
        self._check_open()
        self._drain()

    @property
    def pending(self) -> int:
        """Bytes written but not yet drained."""
        return len(self._buf)

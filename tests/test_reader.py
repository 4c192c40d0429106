"""Tests for the decoding pipeline and the composite Reader."""

import gzip
import io
import lzma
import random

import pytest
import zstandard

from fastopen import buf, Format, NoContentError
from fastopen.io.base import RawSource
from fastopen.io.buffer import PeekableReader
from fastopen.io.reader import Reader, open_buffered


def _zstd(data: bytes) -> bytes:
    return zstandard.ZstdCompressor().compress(data)


def _xz(data: bytes) -> bytes:
    return lzma.compress(data, format=lzma.FORMAT_XZ)


class TestDecodingPipeline:
    """Test format detection, decoding and BOM handling."""

    @pytest.mark.parametrize("encode,fmt", [
        (lambda d: d, Format.NONE),
        (gzip.compress, Format.GZIP),
        (_xz, Format.XZ),
        (_zstd, Format.ZSTD),
    ])
    def test_decodes_by_content(self, encode, fmt):
        payload = b"line one\nline two\n" * 100
        with buf(io.BytesIO(encode(payload))) as rdr:
            assert rdr.format is fmt
            assert rdr.read() == payload

    def test_strips_utf8_bom(self):
        with buf(io.BytesIO(b"\xef\xbb\xbfid,value\n")) as rdr:
            assert rdr.read() == b"id,value\n"

    def test_strips_bom_after_decompression(self):
        with buf(io.BytesIO(gzip.compress(b"\xef\xbb\xbfhello"))) as rdr:
            assert rdr.read() == b"hello"

    def test_keeps_first_character_without_bom(self):
        with buf(io.BytesIO("ébc".encode())) as rdr:
            assert rdr.read() == "ébc".encode()

    def test_bom_only_stripped_once(self):
        bom = b"\xef\xbb\xbf"
        with buf(io.BytesIO(bom + bom + b"x")) as rdr:
            assert rdr.read() == bom + b"x"

    def test_partial_bom_preserved(self):
        with buf(io.BytesIO(b"\xef\xbb")) as rdr:
            assert rdr.read() == b"\xef\xbb"

    def test_single_byte_stream(self):
        with buf(io.BytesIO(b"a")) as rdr:
            assert rdr.format is Format.NONE
            assert rdr.read() == b"a"

    def test_empty_stream_is_no_content(self):
        with pytest.raises(NoContentError):
            buf(io.BytesIO(b""))

    def test_empty_compressed_stream_is_no_content(self):
        with pytest.raises(NoContentError):
            buf(io.BytesIO(gzip.compress(b"")))

    def test_concatenated_gzip_members(self):
        data = gzip.compress(b"first ") + gzip.compress(b"second")
        with buf(io.BytesIO(data)) as rdr:
            assert rdr.read() == b"first second"

    def test_concatenated_zstd_frames(self):
        data = _zstd(b"first ") + _zstd(b"second")
        with buf(io.BytesIO(data)) as rdr:
            assert rdr.read() == b"first second"

    def test_malformed_gzip_surfaces_codec_error(self):
        with pytest.raises(gzip.BadGzipFile):
            buf(io.BytesIO(b"\x1f\x8b" + b"\x00" * 20))

    def test_malformed_xz_surfaces_codec_error(self):
        with pytest.raises(lzma.LZMAError):
            buf(io.BytesIO(b"\xfd7zXZ\x00" + b"\x00" * 20))

    @pytest.mark.parametrize("encode,error", [
        (gzip.compress, EOFError),
        (_xz, EOFError),
        (_zstd, zstandard.ZstdError),
    ])
    def test_truncated_stream_is_codec_error(self, encode, error):
        """A stream cut short fails loudly instead of reading as a shorter file."""
        data = encode(random.Random(0).randbytes(200_000))[:-1000]
        with pytest.raises(error) as excinfo:
            with buf(io.BytesIO(data)) as rdr:
                rdr.read()
        assert not isinstance(excinfo.value, NoContentError)

    @pytest.mark.parametrize("encode,error", [
        (gzip.compress, EOFError),
        (_xz, EOFError),
        (_zstd, zstandard.ZstdError),
    ])
    def test_stream_cut_in_header_is_not_empty(self, encode, error):
        with pytest.raises(error) as excinfo:
            buf(io.BytesIO(encode(b"payload")[:8]))
        assert not isinstance(excinfo.value, NoContentError)

    def test_zero_buffer_size_rejected(self):
        with pytest.raises(ValueError):
            buf(io.BytesIO(b"abc"), buffer_size=0)

    def test_small_buffer_size(self):
        payload = bytes(range(256)) * 50
        with buf(io.BytesIO(gzip.compress(payload)), buffer_size=7) as rdr:
            assert rdr.read() == payload

    def test_line_iteration(self):
        with buf(io.BytesIO(gzip.compress(b"a\nb\nc"))) as rdr:
            assert list(rdr) == [b"a\n", b"b\n", b"c"]

    def test_text_wrapper(self):
        with buf(io.BytesIO(_xz("naïve\n".encode("utf-8")))) as rdr:
            text = io.TextIOWrapper(rdr, encoding="utf-8")
            assert text.read() == "naïve\n"


class TestOwnership:
    """Test that buf() honours the ownership flag."""

    def test_caller_keeps_stream_by_default(self):
        raw = io.BytesIO(b"data")
        rdr = buf(raw)
        rdr.close()
        assert not raw.closed

    def test_close_source_takes_ownership(self):
        raw = io.BytesIO(gzip.compress(b"data"))
        rdr = buf(raw, close_source=True)
        rdr.close()
        assert raw.closed

    def test_owned_stream_closed_on_failure(self):
        raw = io.BytesIO(b"")
        with pytest.raises(NoContentError):
            buf(raw, close_source=True)
        assert raw.closed


class Recorder:
    """Fake layer that records close calls and optionally fails."""

    def __init__(self, label, log, fail=False):
        self.label = label
        self.log = log
        self.fail = fail

    def close(self):
        self.log.append(self.label)
        if self.fail:
            raise OSError(f"{self.label} failed")


class TestReaderClose:
    """Test teardown order and fail-soft close."""

    def _reader(self, log, *, decoder_fails=False, source_fails=False):
        decoder = Recorder("decoder", log, fail=decoder_fails)
        source_stream = Recorder("source", log, fail=source_fails)
        source = RawSource(source_stream, name="fake", must_close=True)
        outer = PeekableReader(io.BytesIO(b"x"), 4)
        return Reader(outer, source, decoder=decoder, fmt=Format.GZIP)

    def test_decoder_closed_before_source(self):
        log = []
        self._reader(log).close()
        assert log == ["decoder", "source"]

    def test_source_closed_even_if_decoder_fails(self):
        log = []
        rdr = self._reader(log, decoder_fails=True)
        with pytest.raises(OSError, match="decoder failed"):
            rdr.close()
        assert log == ["decoder", "source"]
        assert rdr.closed

    def test_last_failure_is_raised(self):
        log = []
        rdr = self._reader(log, decoder_fails=True, source_fails=True)
        with pytest.raises(OSError, match="source failed"):
            rdr.close()

    def test_close_is_idempotent(self):
        log = []
        rdr = self._reader(log)
        rdr.close()
        rdr.close()
        assert log == ["decoder", "source"]

    def test_unowned_source_not_closed(self):
        log = []
        source = RawSource(Recorder("source", log), name="stdin", must_close=False)
        rdr = Reader(PeekableReader(io.BytesIO(b"x"), 4), source)
        rdr.close()
        assert log == []

    def test_read_after_close(self):
        with buf(io.BytesIO(b"abc")) as rdr:
            pass
        with pytest.raises(ValueError):
            rdr.read()

    def test_open_buffered_reports_source_name(self):
        source = RawSource(io.BytesIO(b"abc"), name="fixture.txt", must_close=False)
        with open_buffered(source) as rdr:
            assert rdr.name == "fixture.txt"
            assert rdr.peek(2) == b"ab"
            assert rdr.read() == b"abc"

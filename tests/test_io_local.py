"""Tests for local file sources."""

import gzip
import tempfile
from pathlib import Path

import pytest

from fastopen import ropen, DirNotSupportedError, NoContentError, UnknownUserError
from fastopen.io.local import open_local_source, open_local_sink


class TestLocalSource:
    """Test reading local files through ropen."""

    def test_plain_file(self):
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()

            with ropen(f.name) as rdr:
                assert rdr.read(5) == b"01234"
                assert rdr.read() == b"56789"

    def test_path_object(self, tmp_path):
        target = tmp_path / "data.txt"
        target.write_bytes(b"abc")
        with ropen(target) as rdr:
            assert rdr.name == str(target)
            assert rdr.read() == b"abc"

    def test_gzip_file_read_twice_is_identical(self, tmp_path):
        """Fresh opens of the same fixture yield the same bytes."""
        target = tmp_path / "fixture.txt.gz"
        payload = b"".join(b"row %d\n" % i for i in range(5000))
        target.write_bytes(gzip.compress(payload))

        with ropen(str(target)) as first:
            a = first.read()
        with ropen(str(target)) as second:
            b = second.read()
        assert a == b == payload

    def test_format_detected_from_content_not_name(self, tmp_path):
        """A gzip file without .gz is still decoded; a .gz name on plain text is not."""
        hidden = tmp_path / "data.txt"
        hidden.write_bytes(gzip.compress(b"compressed"))
        mislabeled = tmp_path / "plain.gz"
        mislabeled.write_bytes(b"not compressed")

        with ropen(str(hidden)) as rdr:
            assert rdr.read() == b"compressed"
        with ropen(str(mislabeled)) as rdr:
            assert rdr.read() == b"not compressed"

    def test_directory(self, tmp_path):
        with pytest.raises(DirNotSupportedError, match="directory"):
            ropen(str(tmp_path))

    def test_directory_error_is_distinguished(self, tmp_path):
        with pytest.raises(IsADirectoryError):
            ropen(str(tmp_path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ropen(str(tmp_path / "missing.txt"))

    def test_empty_file(self):
        with tempfile.NamedTemporaryFile() as f:
            with pytest.raises(NoContentError):
                ropen(f.name)

    def test_file_closed_after_failed_open(self, tmp_path, monkeypatch):
        target = tmp_path / "empty.txt"
        target.write_bytes(b"")
        opened = []
        real_open = open_local_source

        def tracking(path):
            source = real_open(path)
            opened.append(source.stream)
            return source

        monkeypatch.setattr("fastopen.io.open_local_source", tracking)
        with pytest.raises(NoContentError):
            ropen(str(target))
        assert opened and opened[0].closed

    def test_file_closed_by_reader(self, tmp_path, monkeypatch):
        target = tmp_path / "data.txt.gz"
        target.write_bytes(gzip.compress(b"abc"))
        opened = []
        real_open = open_local_source

        def tracking(path):
            source = real_open(path)
            opened.append(source.stream)
            return source

        monkeypatch.setattr("fastopen.io.open_local_source", tracking)
        rdr = ropen(str(target))
        assert not opened[0].closed
        rdr.close()
        assert opened[0].closed

    def test_home_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / "notes.txt").write_bytes(b"home sweet home")
        with ropen("~/notes.txt") as rdr:
            assert rdr.read() == b"home sweet home"

    def test_unknown_user(self):
        with pytest.raises(UnknownUserError):
            ropen("~no_such_user_fastopen/notes.txt")


class TestLocalSink:
    """Test the local sink resolver."""

    def test_sink_is_owned(self, tmp_path):
        sink = open_local_sink(str(tmp_path / "out.bin"))
        assert sink.must_close
        sink.stream.write(b"x")
        sink.close()
        assert sink.stream.closed
        assert (tmp_path / "out.bin").read_bytes() == b"x"

    def test_bare_filename_uses_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        sink = open_local_sink("here.txt")
        sink.close()
        assert Path(tmp_path, "here.txt").exists()

    def test_source_is_owned(self, tmp_path):
        target = tmp_path / "in.txt"
        target.write_bytes(b"x")
        source = open_local_source(str(target))
        assert source.must_close
        source.close()
        assert source.stream.closed

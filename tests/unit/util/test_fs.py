"""Unit tests for util/fs.py"""

import asyncio

import pytest

from mdpage.errors import IncludeError, IncludeNotFoundError
from mdpage.util.fs import read_file, read_text


def test_read_file_bytes(tmp_path):
    """read_file returns raw bytes."""
    f = tmp_path / "a.bin"
    f.write_bytes(b"\x00abc")
    assert asyncio.run(read_file(f)) == b"\x00abc"


def test_read_file_missing(tmp_path):
    """A missing file raises IncludeNotFoundError carrying the path."""
    missing = tmp_path / "missing.css"
    with pytest.raises(IncludeNotFoundError, match="not found") as exc:
        asyncio.run(read_file(missing))
    assert exc.value.path == str(missing)
    assert isinstance(exc.value.__cause__, FileNotFoundError)


def test_read_file_directory(tmp_path):
    """A directory is not readable as an include file."""
    with pytest.raises(IncludeError):
        asyncio.run(read_file(tmp_path))


def test_read_text_decodes_utf8(tmp_path):
    """read_text decodes UTF-8 content."""
    f = tmp_path / "u.md"
    f.write_text("héllo", encoding="utf-8")
    assert asyncio.run(read_text(f)) == "héllo"


def test_read_text_invalid_encoding(tmp_path):
    """Undecodable bytes raise IncludeError rather than UnicodeDecodeError."""
    f = tmp_path / "bad.md"
    f.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(IncludeError, match="not valid utf-8"):
        asyncio.run(read_text(f))

"""Tests for the VFile value type."""

import os

import pytest

from to_vfile import VFile, is_buffer


class TestVFileConstruction:
    def test_defaults(self):
        file = VFile()
        assert file.cwd == os.getcwd()
        assert file.path is None
        assert file.value is None
        assert file.history == []
        assert file.data == {}

    def test_from_mapping(self):
        file = VFile({"path": "a/b.txt", "value": "hi", "cwd": "/srv"})
        assert file.path == "a/b.txt"
        assert file.value == "hi"
        assert file.cwd == "/srv"

    def test_from_content(self):
        """A bare string or buffer is the content, not the path."""
        assert VFile("hello").value == "hello"
        assert VFile(b"\x00\x01").value == b"\x00\x01"
        assert VFile("hello").path is None

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unexpected VFile fields"):
            VFile({"path": "x", "colour": "red"})

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            VFile(42)

    def test_history_option(self):
        file = VFile({"history": ["old.md", "new.md"]})
        assert file.path == "new.md"
        assert file.history == ["old.md", "new.md"]

    def test_path_parts_from_mapping(self):
        file = VFile({"basename": "index.js", "dirname": "lib"})
        assert file.path == os.path.join("lib", "index.js")

    def test_extname_without_path_raises(self):
        with pytest.raises(ValueError, match="requires `path`"):
            VFile({"extname": ".js"})


class TestVFilePath:
    def test_parts(self):
        file = VFile({"path": os.path.join("docs", "readme.md")})
        assert file.dirname == "docs"
        assert file.basename == "readme.md"
        assert file.stem == "readme"
        assert file.extname == ".md"

    def test_setting_path_records_history(self):
        file = VFile({"path": "a.txt"})
        file.path = "b.txt"
        file.path = "b.txt"
        assert file.history == ["a.txt", "b.txt"]

    def test_path_accepts_bytes_and_pathlike(self, tmp_path):
        file = VFile()
        file.path = b"raw.bin"
        assert file.path == "raw.bin"
        file.path = tmp_path / "p.txt"
        assert file.path == str(tmp_path / "p.txt")

    def test_empty_path_raises(self):
        file = VFile()
        with pytest.raises(ValueError, match="cannot be empty"):
            file.path = ""

    def test_set_extname(self):
        file = VFile({"path": os.path.join("docs", "readme.md")})
        file.extname = ".txt"
        assert file.path == os.path.join("docs", "readme.txt")
        file.extname = ""
        assert file.basename == "readme"

    def test_set_extname_without_dot_raises(self):
        file = VFile({"path": "a.md"})
        with pytest.raises(ValueError, match="must start with"):
            file.extname = "txt"

    def test_set_extname_double_dot_raises(self):
        file = VFile({"path": "a.md"})
        with pytest.raises(ValueError, match="multiple dots"):
            file.extname = ".tar.gz"

    def test_set_stem(self):
        file = VFile({"path": os.path.join("docs", "readme.md")})
        file.stem = "index"
        assert file.path == os.path.join("docs", "index.md")

    def test_set_basename(self):
        file = VFile({"path": os.path.join("docs", "readme.md")})
        file.basename = "other.rst"
        assert file.path == os.path.join("docs", "other.rst")

    def test_basename_with_separator_raises(self):
        file = VFile({"path": "a.md"})
        with pytest.raises(ValueError, match="cannot be a path"):
            file.basename = os.path.join("x", "y")

    def test_set_dirname(self):
        file = VFile({"path": os.path.join("docs", "readme.md")})
        file.dirname = "site"
        assert file.path == os.path.join("site", "readme.md")

    def test_set_dirname_without_path_raises(self):
        file = VFile()
        with pytest.raises(ValueError, match="requires `path`"):
            file.dirname = "site"


class TestVFileContent:
    def test_to_string(self):
        assert VFile({"value": "text"}).to_string() == "text"
        assert str(VFile({"value": "café".encode()})) == "café"
        assert VFile({"value": b"\xe9"}).to_string("latin-1") == "é"

    def test_to_string_without_value(self):
        assert str(VFile()) == ""

    def test_is_buffer(self):
        assert is_buffer(b"x")
        assert is_buffer(bytearray(b"x"))
        assert is_buffer(memoryview(b"x"))
        assert not is_buffer("x")
        assert not is_buffer(None)

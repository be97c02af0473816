"""Tests for file_handler module: path validation and encoding-aware read/write."""

from pathlib import Path

import pytest

from md_renderer.file_handler import (
    decode_bytes,
    read_file_with_encoding,
    validate_file_path,
    write_file,
)

# =============================================================================
# validate_file_path
# =============================================================================


class TestValidateFilePath:
    def test_existing_file(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text("# hi")
        result = validate_file_path(str(f))
        assert isinstance(result, Path)
        assert result == f.resolve()

    def test_nonexistent_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            validate_file_path(str(tmp_path / "missing.md"))

    def test_directory_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not a file"):
            validate_file_path(str(tmp_path))


# =============================================================================
# Reading and writing
# =============================================================================


class TestReadFileWithEncoding:
    def test_utf8(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_bytes("# Überschrift\n\nGrüße aus München\n".encode("utf-8"))
        content, encoding = read_file_with_encoding(f)
        assert content == "# Überschrift\n\nGrüße aus München\n"
        assert encoding == "utf-8"

    def test_ascii_normalised_to_utf8(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_bytes(b"# plain ascii\n")
        content, encoding = read_file_with_encoding(f)
        assert content == "# plain ascii\n"
        assert encoding == "utf-8"

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.md"
        f.write_bytes(b"")
        assert read_file_with_encoding(f) == ("", "utf-8")

    def test_short_ascii_stays_utf8(self):
        assert decode_bytes(b"_x_\n") == ("_x_\n", "utf-8")

    def test_non_utf8_falls_back_to_detection(self):
        text = (
            "Résumé de la réunion\n\n"
            "Le comité a décidé de réviser le texte intégré.\n"
        ) * 4
        content, encoding = decode_bytes(text.encode("latin-1"))
        assert content == text
        assert encoding != "utf-8"

    def test_decode_bytes_empty(self):
        assert decode_bytes(b"") == ("", "utf-8")


class TestWriteFile:
    def test_writes_and_counts_bytes(self, tmp_path):
        f = tmp_path / "out.md"
        written = write_file(f, "héllo\n")
        assert written == len("héllo\n".encode("utf-8"))
        assert f.read_text(encoding="utf-8") == "héllo\n"

    def test_creates_parent_directories(self, tmp_path):
        f = tmp_path / "a" / "b" / "out.md"
        write_file(f, "x\n")
        assert f.exists()

    def test_custom_encoding(self, tmp_path):
        f = tmp_path / "out.md"
        write_file(f, "café\n", encoding="latin-1")
        assert f.read_bytes() == "café\n".encode("latin-1")

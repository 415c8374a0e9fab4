# tests/core/epub/test_archive.py
"""
Tests pour le module core.epub.archive.
"""

import io
import zipfile

import pytest

from epub_loader.core.epub.archive import Archive
from epub_loader.exceptions import ArchiveError


class TestFromBytes:
    """Tests pour Archive.from_bytes."""

    def test_indexes_files_and_directories(self, make_epub):
        data = make_epub({"mimetype": "application/epub+zip", "OEBPS": None, "OEBPS/a.xhtml": "<a/>"})

        archive = Archive.from_bytes(data)

        assert len(archive) == 3
        assert set(archive.names()) == {"mimetype", "OEBPS", "OEBPS/a.xhtml"}
        assert "OEBPS/a.xhtml" in archive

    def test_accepts_list_of_ints(self, minimal_epub):
        archive = Archive.from_bytes(list(minimal_epub))
        assert "mimetype" in archive

    def test_not_a_zip_raises(self):
        with pytest.raises(ArchiveError):
            Archive.from_bytes(b"This is not an EPUB")

    def test_truncated_zip_raises(self, minimal_epub):
        with pytest.raises(ArchiveError):
            Archive.from_bytes(minimal_epub[: len(minimal_epub) // 2])

    def test_corrupted_member_raises(self):
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_STORED) as zf:
            zf.writestr("a.txt", b"hello world")
        data = buf.getvalue().replace(b"hello world", b"HELLO WORLD")

        with pytest.raises(ArchiveError):
            Archive.from_bytes(data)

    def test_empty_buffer_raises(self):
        with pytest.raises(ArchiveError):
            Archive.from_bytes(b"")

    def test_str_input_raises(self):
        with pytest.raises(ArchiveError, match="not str"):
            Archive.from_bytes("not bytes")

    @pytest.mark.parametrize("data", [object(), [256], None])
    def test_non_buffer_input_raises(self, data):
        with pytest.raises(ArchiveError):
            Archive.from_bytes(data)

    def test_encrypted_entry_raises(self):
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_STORED) as zf:
            zf.writestr("secret.txt", b"hello")
        data = bytearray(buf.getvalue())
        # flag de chiffrement dans l'en-tête du répertoire central
        flags = data.index(b"PK\x01\x02") + 8
        data[flags] |= 0x1

        with pytest.raises(ArchiveError, match="Encrypted"):
            Archive.from_bytes(bytes(data))


class TestEntryLookup:
    """Tests pour entry / is_directory."""

    def test_lookup_is_exact(self, minimal_epub):
        archive = Archive.from_bytes(minimal_epub)

        assert archive.entry("OEBPS/content.opf") is not None
        assert archive.entry("oebps/content.opf") is None
        assert archive.entry("/OEBPS/content.opf") is None
        assert archive.entry("OEBPS/./content.opf") is None

    def test_directory_marker(self, make_epub):
        archive = Archive.from_bytes(make_epub({"META-INF": None}))

        entry = archive.entry("META-INF")
        assert entry is not None
        assert archive.is_directory(entry) is True

    def test_file_is_not_directory(self, minimal_epub):
        archive = Archive.from_bytes(minimal_epub)
        assert archive.is_directory(archive.entry("mimetype")) is False


class TestRead:
    """Tests pour read_bytes / read_text."""

    def test_read_text_utf8(self, make_epub):
        archive = Archive.from_bytes(make_epub({"t.txt": "Élément ✓".encode("utf-8")}))
        assert archive.read_text(archive.entry("t.txt")) == "Élément ✓"

    def test_read_text_invalid_utf8_raises(self, make_epub):
        archive = Archive.from_bytes(make_epub({"t.txt": b"\xff\xfe\xfa"}))
        with pytest.raises(ArchiveError):
            archive.read_text(archive.entry("t.txt"))

    def test_read_text_declared_encoding(self, make_epub):
        archive = Archive.from_bytes(make_epub({"t.txt": "café".encode("latin-1")}))
        assert archive.read_text(archive.entry("t.txt"), encoding="latin-1") == "café"

    def test_read_bytes_directory_raises(self, make_epub):
        archive = Archive.from_bytes(make_epub({"dir": None}))
        with pytest.raises(ArchiveError):
            archive.read_bytes(archive.entry("dir"))

# tests/core/epub/test_cover_finder.py
"""
Tests pour le module core.epub.cover_finder.
"""

from epub_loader.core.epub.cover_finder import find_cover_data, find_cover_item
from epub_loader.core.epub.reader import load_book

PNG = b"\x89PNG\r\n\x1a\nfake"


def _book(make_epub, minimal_entries, make_opf, manifest, metadata=None, files=None):
    kwargs = {"manifest": manifest}
    if metadata is not None:
        kwargs["metadata"] = metadata
    minimal_entries["OEBPS/content.opf"] = make_opf(**kwargs)
    minimal_entries.update(files or {})
    return load_book(make_epub(minimal_entries))


CHAPTER = '<item id="chap1" href="chap1.xhtml" media-type="application/xhtml+xml"/>'


class TestFindCoverItem:
    """Tests pour find_cover_item."""

    def test_cover_image_property(self, make_epub, minimal_entries, make_opf):
        manifest = (
            CHAPTER
            + '<item id="cover" href="img/cover.jpg" media-type="image/jpeg"/>'
            + '<item id="c3" href="img/c3.png" media-type="image/png" properties="cover-image"/>'
        )
        book = _book(make_epub, minimal_entries, make_opf, manifest)

        assert find_cover_item(book)[0] == "c3"

    def test_meta_cover(self, make_epub, minimal_entries, make_opf):
        metadata = (
            "<dc:identifier>urn:example:1</dc:identifier><dc:title>T</dc:title>"
            '<dc:language>en</dc:language><meta name="cover" content="img2"/>'
        )
        manifest = (
            CHAPTER
            + '<item id="img1" href="img/cover.png" media-type="image/png"/>'
            + '<item id="img2" href="img/front.png" media-type="image/png"/>'
        )
        book = _book(make_epub, minimal_entries, make_opf, manifest, metadata=metadata)

        assert find_cover_item(book)[0] == "img2"

    def test_bruteforce_prefers_cover_name(self, make_epub, minimal_entries, make_opf):
        manifest = (
            CHAPTER
            + '<item id="img1" href="img/map.png" media-type="image/png"/>'
            + '<item id="img2" href="img/couverture.png" media-type="image/png"/>'
            + '<item id="img3" href="img/Cover.png" media-type="image/png"/>'
        )
        book = _book(make_epub, minimal_entries, make_opf, manifest)

        assert find_cover_item(book)[0] == "img3"

    def test_bruteforce_first_image(self, make_epub, minimal_entries, make_opf):
        manifest = (
            CHAPTER
            + '<item id="img1" href="img/map.png" media-type="image/png"/>'
            + '<item id="img2" href="img/plan.png" media-type="image/png"/>'
        )
        book = _book(make_epub, minimal_entries, make_opf, manifest)

        assert find_cover_item(book)[0] == "img1"

    def test_no_image(self, minimal_epub):
        assert find_cover_item(load_book(minimal_epub)) is None


class TestFindCoverData:
    """Tests pour find_cover_data."""

    def test_reads_cover_bytes(self, make_epub, minimal_entries, make_opf):
        manifest = CHAPTER + '<item id="c" href="img/c.png" media-type="image/png" properties="cover-image"/>'
        book = _book(make_epub, minimal_entries, make_opf, manifest, files={"OEBPS/img/c.png": PNG})

        assert find_cover_data(book) == PNG

    def test_missing_cover_file(self, make_epub, minimal_entries, make_opf):
        manifest = CHAPTER + '<item id="c" href="img/c.png" media-type="image/png" properties="cover-image"/>'
        book = _book(make_epub, minimal_entries, make_opf, manifest)

        assert find_cover_data(book) is None

    def test_no_cover(self, minimal_epub):
        assert find_cover_data(load_book(minimal_epub)) is None

# tests/conftest.py
"""
Configuration globale pour pytest.

Fournit des fabriques d'archives EPUB en mémoire pour tous les tests.
"""

import io
import zipfile
from typing import Dict, Optional, Union

import pytest

DEFAULT_METADATA = """
    <dc:identifier id="bookid">urn:example:1</dc:identifier>
    <dc:title>Test Book</dc:title>
    <dc:language>en</dc:language>
"""

DEFAULT_MANIFEST = """
    <item id="chap1" href="chap1.xhtml" media-type="application/xhtml+xml"/>
"""

DEFAULT_SPINE = """
    <itemref idref="chap1"/>
"""

CHAPTER_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Chapter 1</title></head>
<body><h1>Chapter 1</h1><p>Hello.</p></body></html>
"""


def _container_xml(*paths: str) -> str:
    rootfiles = "\n".join(
        f'    <rootfile full-path="{p}" media-type="application/oebps-package+xml"/>'
        for p in paths
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">\n'
        f"  <rootfiles>\n{rootfiles}\n  </rootfiles>\n"
        "</container>\n"
    )


def _opf(
    metadata: Optional[str] = DEFAULT_METADATA,
    manifest: Optional[str] = DEFAULT_MANIFEST,
    spine: Optional[str] = DEFAULT_SPINE,
    spine_attrs: str = "",
) -> str:
    """Document OPF; une section à None est omise."""
    parts = ['<?xml version="1.0" encoding="UTF-8"?>']
    parts.append(
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0" '
        'unique-identifier="bookid">'
    )
    if metadata is not None:
        parts.append(
            '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/" '
            'xmlns:opf="http://www.idpf.org/2007/opf">'
            f"{metadata}</metadata>"
        )
    if manifest is not None:
        parts.append(f"<manifest>{manifest}</manifest>")
    if spine is not None:
        parts.append(f"<spine{spine_attrs}>{spine}</spine>")
    parts.append("</package>")
    return "\n".join(parts)


def _epub(entries: Dict[str, Union[str, bytes, None]]) -> bytes:
    """Archive ZIP; une valeur None crée un dossier."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            if content is None:
                zf.writestr(name.rstrip("/") + "/", b"")
            elif name == "mimetype":
                zf.writestr(name, content, compress_type=zipfile.ZIP_STORED)
            else:
                zf.writestr(name, content)
    return buf.getvalue()


@pytest.fixture
def container_xml():
    """Fabrique de META-INF/container.xml."""
    return _container_xml


@pytest.fixture
def make_opf():
    """Fabrique de document OPF."""
    return _opf


@pytest.fixture
def make_epub():
    """Fabrique d'archive EPUB en mémoire."""
    return _epub


@pytest.fixture
def minimal_entries() -> Dict[str, Union[str, bytes, None]]:
    """Entrées d'un EPUB minimal valide."""
    return {
        "mimetype": "application/epub+zip",
        "META-INF/container.xml": _container_xml("OEBPS/content.opf"),
        "OEBPS/content.opf": _opf(),
        "OEBPS/chap1.xhtml": CHAPTER_XHTML,
    }


@pytest.fixture
def minimal_epub(minimal_entries) -> bytes:
    """EPUB minimal valide."""
    return _epub(minimal_entries)

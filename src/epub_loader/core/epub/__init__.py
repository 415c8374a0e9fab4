# epub_loader/src/epub_loader/core/epub/__init__.py
"""
Module EPUB - Chargement des fichiers EPUB.

Ce module fournit les étapes du chargement (archive, conteneur, package)
et la fonction qui les enchaîne.
"""

from .archive import Archive, ArchiveEntry
from .container import list_rootfiles, locate_package_path, validate_mimetype
from .cover_finder import find_cover_data, find_cover_item
from .metadata_extractors import find_isbn
from .package import decode_manifest, decode_metadata, decode_package, decode_spine
from .reader import load_book, load_book_or_raise

__all__ = [
    "Archive",
    "ArchiveEntry",
    "validate_mimetype",
    "locate_package_path",
    "list_rootfiles",
    "decode_package",
    "decode_metadata",
    "decode_manifest",
    "decode_spine",
    "find_cover_data",
    "find_cover_item",
    "find_isbn",
    "load_book",
    "load_book_or_raise",
]

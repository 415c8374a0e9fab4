"""epub_loader public API.

Charge un fichier EPUB (octets bruts) en un objet Book immuable:
metadata, manifest et spine du document OPF.
"""

from .core.epub import load_book, load_book_or_raise
from .core.models import (
    Book,
    Creator,
    ItemRef,
    ManifestItem,
    ManifestProperty,
    Metadata,
    Package,
)
from .exceptions import (
    ArchiveError,
    EpubLoadError,
    InvalidContainerPointerError,
    InvalidMimetypeError,
    InvalidPackageDocumentError,
    SourceError,
)

__all__ = [
    "Book",
    "Creator",
    "ItemRef",
    "ManifestItem",
    "ManifestProperty",
    "Metadata",
    "Package",
    "load_book",
    "load_book_or_raise",
    "EpubLoadError",
    "ArchiveError",
    "InvalidMimetypeError",
    "InvalidContainerPointerError",
    "InvalidPackageDocumentError",
    "SourceError",
]

# epub_loader/src/epub_loader/core/epub/reader.py
"""
Module de chargement EPUB.

Responsabilité unique: Enchaîner les étapes du chargement, des octets
bruts de l'archive jusqu'à l'objet Book.
"""

import logging
import posixpath
from typing import Optional

from ...exceptions import (
    EpubLoadError,
    InvalidContainerPointerError,
    InvalidMimetypeError,
    InvalidPackageDocumentError,
)
from ..models import Book
from .archive import Archive
from .container import locate_package_path, validate_mimetype
from .package import decode_package

logger = logging.getLogger(__name__)


def root_path_of(package_path: str) -> str:
    """Dossier contenant le document OPF ("." à la racine de l'archive)."""
    return posixpath.dirname(package_path) or "."


def load_book_or_raise(data: bytes) -> Book:
    """
    Charge un livre EPUB en levant une erreur typée en cas de rejet.

    Étapes: ouverture de l'archive, vérification du mimetype,
    localisation du document OPF, puis décodage du package.

    Args:
        data: Contenu brut de l'archive

    Returns:
        Objet Book

    Raises:
        ArchiveError: archive ZIP illisible
        InvalidMimetypeError: entrée mimetype absente ou incorrecte
        InvalidContainerPointerError: container.xml inutilisable
        InvalidPackageDocumentError: document OPF incomplet
    """
    archive = Archive.from_bytes(data)

    if not validate_mimetype(archive):
        raise InvalidMimetypeError("Invalid mimetype.")

    package_path = locate_package_path(archive)
    if package_path is None:
        raise InvalidContainerPointerError("Invalid container.xml file.")

    package = decode_package(archive, package_path)
    if package is None:
        raise InvalidPackageDocumentError("Invalid opf file.")

    book = Book(archive=archive, root_path=root_path_of(package_path), package_data=package)
    logger.info(
        "Loaded EPUB %r (%s) from %s",
        package.metadata.title,
        package.metadata.identifier,
        package_path,
    )
    return book


def load_book(data: bytes) -> Optional[Book]:
    """
    Charge un livre EPUB de manière sécurisée.

    Returns:
        Objet Book si succès, None sinon (la raison est journalisée)
    """
    try:
        return load_book_or_raise(data)
    except EpubLoadError as e:
        logger.error("%s", e)
        return None

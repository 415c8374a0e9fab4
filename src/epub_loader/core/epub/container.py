# epub_loader/src/epub_loader/core/epub/container.py
"""
Module de validation du conteneur EPUB.

Responsabilité unique: Vérifier le fichier mimetype et trouver le
document OPF via META-INF/container.xml.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ...config import CONTAINER_PATH, EPUB_MIMETYPE, MIMETYPE_PATH
from ...exceptions import ArchiveError
from .archive import Archive
from .xml_utils import parse_xml, select_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rootfile:
    """Rendition déclarée dans container.xml."""

    full_path: Optional[str]
    media_type: Optional[str] = None


def validate_mimetype(archive: Archive) -> bool:
    """
    Vérifie que l'archive est un conteneur EPUB.

    Le contenu de l'entrée `mimetype` doit être exactement
    "application/epub+zip", sans espace ni retour à la ligne.
    """
    entry = archive.entry(MIMETYPE_PATH)
    if entry is None or archive.is_directory(entry):
        return False

    try:
        content = archive.read_text(entry)
    except ArchiveError:
        logger.debug("mimetype entry is not valid UTF-8")
        return False

    return content == EPUB_MIMETYPE


def list_rootfiles(archive: Archive) -> List[Rootfile]:
    """
    Liste les rootfiles déclarés, dans l'ordre du document.

    Returns:
        Liste des renditions, vide si container.xml est absent ou invalide
    """
    entry = archive.entry(CONTAINER_PATH)
    if entry is None or archive.is_directory(entry):
        return []

    root = parse_xml(archive.read_bytes(entry), CONTAINER_PATH)
    if root is None:
        return []

    return [
        Rootfile(full_path=el.get("full-path"), media_type=el.get("media-type"))
        for el in select_all(root, "container", "rootfiles", "rootfile")
    ]


def locate_package_path(archive: Archive) -> Optional[str]:
    """
    Trouve le chemin du document OPF.

    Seul le premier rootfile est pris en compte, même si plusieurs
    renditions sont déclarées.

    Args:
        archive: Archive décompressée

    Returns:
        Chemin du document OPF dans l'archive, ou None
    """
    rootfiles = list_rootfiles(archive)
    if not rootfiles:
        logger.debug("No rootfile found in %s", CONTAINER_PATH)
        return None
    if len(rootfiles) > 1:
        logger.info("%d renditions declared, using the first one", len(rootfiles))

    opf_path = rootfiles[0].full_path
    if opf_path is None:
        logger.debug("First rootfile has no full-path attribute")
        return None

    opf = archive.entry(opf_path)
    if opf is None or archive.is_directory(opf):
        logger.debug("Package document %s not found in archive", opf_path)
        return None

    return opf_path

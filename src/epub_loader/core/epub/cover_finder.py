# epub_loader/src/epub_loader/core/epub/cover_finder.py
"""
Module de recherche de couverture EPUB.

Responsabilité unique: Implémenter différentes stratégies pour trouver
la couverture d'un livre chargé.

Pattern: Strategy Pattern pour les différentes méthodes de recherche.
"""

import logging
from typing import Optional, Tuple

from ..models import Book, ManifestItem, ManifestProperty

logger = logging.getLogger(__name__)

CoverCandidate = Tuple[str, ManifestItem]


def _is_image(item: ManifestItem) -> bool:
    return item.media_type.startswith("image/")


def _find_cover_by_property(book: Book) -> Optional[CoverCandidate]:
    """
    Stratégie 1: Item du manifest portant la propriété cover-image (EPUB 3).
    """
    items = book.items_with_property(ManifestProperty.COVER_IMAGE)
    if items:
        logger.info("Cover found via cover-image property")
        return items[0]
    return None


def _find_cover_by_meta(book: Book) -> Optional[CoverCandidate]:
    """
    Stratégie 2: Chercher <meta name="cover"> dans les métadonnées OPF.
    """
    cover_id = book.package_data.metadata.cover_id
    if cover_id:
        item = book.package_data.manifest.get(cover_id)
        if item is not None:
            logger.info("Cover found via OPF metadata")
            return cover_id, item
    return None


def _find_cover_by_bruteforce(book: Book) -> Optional[CoverCandidate]:
    """
    Stratégie 3: Recherche brute-force parmi les images.

    Cherche la première image dont l'id ou le href contient "cover" ou
    "couv", sinon retourne la première image du manifest.
    """
    logger.info("Standard cover methods failed. Trying brute-force...")
    images = [
        (item_id, item)
        for item_id, item in book.package_data.manifest.items()
        if _is_image(item)
    ]
    if images:

        def rank(candidate: CoverCandidate) -> int:
            name = f"{candidate[0]} {candidate[1].href}".lower()
            return 0 if "cover" in name else 1 if "couv" in name else 2

        # sort est stable: l'ordre du manifest départage les ex aequo
        images.sort(key=rank)
        logger.info("Cover found via brute-force: %s", images[0][1].href)
        return images[0]
    return None


def find_cover_item(book: Book) -> Optional[CoverCandidate]:
    """
    Trouve l'item de couverture en appliquant les stratégies en cascade.

    Args:
        book: Livre chargé

    Returns:
        Tuple (id, ManifestItem) ou None si aucune image
    """
    return (
        _find_cover_by_property(book)
        or _find_cover_by_meta(book)
        or _find_cover_by_bruteforce(book)
    )


def find_cover_data(book: Book) -> Optional[bytes]:
    """
    Extrait les données binaires de la couverture.

    Returns:
        Données de l'image ou None si non trouvée
    """
    cover = find_cover_item(book)
    if cover is None:
        logger.info("No cover found for %r", book.package_data.metadata.title)
        return None

    return book.read_item(cover[0])

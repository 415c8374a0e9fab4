# epub_loader/src/epub_loader/cli.py
"""
Logique pour le mode ligne de commande.

Charge un fichier, une URL ou tous les EPUB d'un dossier et affiche un
résumé de chaque livre.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from .core.epub import find_cover_item, find_isbn, load_book_or_raise
from .core.file_utils import find_epubs_in_folder
from .core.models import Book
from .core.sources import fetch_epub_bytes, is_url
from .exceptions import EpubLoadError

logger = logging.getLogger(__name__)


@dataclass
class LoadOutcome:
    """Résultat du chargement d'une source."""

    source: str
    book: Optional[Book] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.book is not None


def cli_load_source(source: str) -> LoadOutcome:
    """Charge un seul EPUB (fichier ou URL)."""
    try:
        book = load_book_or_raise(fetch_epub_bytes(source))
    except EpubLoadError as e:
        logger.error("Rejected %s: %s", source, e)
        return LoadOutcome(source=source, error=str(e))
    return LoadOutcome(source=source, book=book)


def cli_load(location: str) -> List[LoadOutcome]:
    """
    Charge tous les EPUB désignés par location.

    Args:
        location: Fichier, dossier (parcouru récursivement) ou URL

    Returns:
        Liste des résultats, dans l'ordre de traitement
    """
    if not is_url(location) and os.path.isdir(location):
        sources = find_epubs_in_folder(location)
    else:
        sources = [location]

    logger.info("CLI mode - loading %d source(s)", len(sources))
    outcomes = [cli_load_source(source) for source in sources]
    logger.info("CLI mode - loaded %d/%d", sum(1 for o in outcomes if o.ok), len(outcomes))
    return outcomes


def print_book_summary(book: Book):
    """Affiche les informations principales d'un livre."""
    meta = book.package_data.metadata
    print(f"  Titre: {meta.title}")
    print(f"  Identifiant: {meta.identifier}")

    isbn = find_isbn(meta)
    if isbn:
        print(f"  ISBN: {isbn}")

    print(f"  Langue: {meta.language}")
    if meta.creators:
        print(f"  Auteurs: {', '.join(c.name for c in meta.creators)}")
    if meta.publisher:
        print(f"  Éditeur: {meta.publisher}")

    print(f"  Manifest: {len(book.package_data.manifest)} item(s)")
    order = [ref.idref for ref in book.package_data.spine]
    print(f"  Ordre de lecture ({len(order)}): {', '.join(order)}")

    cover = find_cover_item(book)
    if cover:
        print(f"  Couverture: {book.resolve_href(cover[1].href)}")


def print_load_summary(outcomes: List[LoadOutcome]):
    """Affiche un résumé des chargements."""
    print("\n=== Résumé du chargement ===")
    print(f"Fichiers traités: {len(outcomes)}")
    print(f"Chargés: {sum(1 for o in outcomes if o.ok)}")

    for outcome in outcomes:
        print(f"\n{outcome.source}:")
        if outcome.ok:
            print_book_summary(outcome.book)
        else:
            print(f"  Rejeté: {outcome.error}")

# epub_loader/src/epub_loader/core/models.py
import logging
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, FrozenSet, List, Mapping, Optional, Tuple
from urllib.parse import unquote

if TYPE_CHECKING:
    from .epub.archive import Archive

logger = logging.getLogger(__name__)


class ManifestProperty(str, Enum):
    """Valeurs reconnues de l'attribut properties d'un item du manifest."""

    COVER_IMAGE = "cover-image"
    MATHML = "mathml"
    NAV = "nav"
    REMOTE_RESOURCES = "remote-resources"
    SCRIPTED = "scripted"
    SVG = "svg"
    SWITCH = "switch"


@dataclass(frozen=True)
class Creator:
    """Auteur (dc:creator) avec ses raffinements éventuels."""

    name: str
    file_as: Optional[str] = None
    role: Optional[str] = None
    # xml:lang -> nom dans une autre écriture
    alternate: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class Metadata:
    """Métadonnées Dublin Core du document OPF."""

    identifier: str
    title: str
    language: str

    # Champs optionnels
    identifiers: Tuple[str, ...] = ()
    contributor: Optional[str] = None
    coverage: Optional[str] = None
    creators: Tuple[Creator, ...] = ()
    date: Optional[str] = None
    description: Optional[str] = None
    publisher: Optional[str] = None
    relation: Optional[str] = None
    rights: Optional[str] = None
    source: Optional[str] = None
    subject: Optional[str] = None
    # <meta name="cover" content="..."> (EPUB 2)
    cover_id: Optional[str] = None
    format: Optional[str] = None
    type: Optional[str] = None


@dataclass(frozen=True)
class ManifestItem:
    href: str
    media_type: str
    media_overlay: Optional[str] = None
    properties: FrozenSet[ManifestProperty] = frozenset()
    fallback: Optional[str] = None

    def has_property(self, prop: ManifestProperty) -> bool:
        return prop in self.properties


@dataclass(frozen=True)
class ItemRef:
    idref: str
    id: Optional[str] = None
    linear: Optional[str] = None
    properties: Optional[str] = None


@dataclass(frozen=True)
class Package:
    """Contenu décodé du document OPF: metadata, manifest et spine."""

    metadata: Metadata
    manifest: Mapping[str, ManifestItem]
    spine: Tuple[ItemRef, ...]

    version: Optional[str] = None
    unique_identifier: Optional[str] = None
    spine_toc: Optional[str] = None
    page_progression_direction: Optional[str] = None


@dataclass(frozen=True)
class Book:
    """
    Livre EPUB chargé.

    Construit uniquement par Book.load / load_book, jamais modifié ensuite.
    """

    archive: "Archive"
    root_path: str
    package_data: Package

    @classmethod
    def load(cls, data: bytes) -> Optional["Book"]:
        """Charge un livre depuis les octets de l'archive, None si rejeté."""
        from .epub.reader import load_book

        return load_book(data)

    def resolve_href(self, href: str) -> str:
        """
        Convertit un href du manifest en chemin dans l'archive.

        Args:
            href: Chemin relatif au document OPF (éventuellement encodé URL)

        Returns:
            Chemin normalisé depuis la racine de l'archive
        """
        path = unquote(href.split("#", 1)[0])
        return posixpath.normpath(posixpath.join(self.root_path, path))

    def read_item(self, item_id: str) -> Optional[bytes]:
        """Retourne le contenu brut d'un item du manifest, ou None."""
        item = self.package_data.manifest.get(item_id)
        if item is None:
            return None

        entry = self.archive.entry(self.resolve_href(item.href))
        if entry is None or self.archive.is_directory(entry):
            logger.warning("Manifest item %s points to missing entry %s", item_id, item.href)
            return None
        return self.archive.read_bytes(entry)

    def reading_order(self) -> List[Tuple[ItemRef, ManifestItem]]:
        """Spine résolu contre le manifest; les idref orphelins sont ignorés."""
        order = []
        for ref in self.package_data.spine:
            item = self.package_data.manifest.get(ref.idref)
            if item is None:
                logger.warning("Spine idref %s has no manifest item", ref.idref)
                continue
            order.append((ref, item))
        return order

    def items_with_property(self, prop: ManifestProperty) -> List[Tuple[str, ManifestItem]]:
        return [
            (item_id, item)
            for item_id, item in self.package_data.manifest.items()
            if item.has_property(prop)
        ]

    def nav_item(self) -> Optional[Tuple[str, ManifestItem]]:
        """Item déclaré comme document de navigation (EPUB 3), sans l'analyser."""
        items = self.items_with_property(ManifestProperty.NAV)
        return items[0] if items else None

# epub_loader/src/epub_loader/core/epub/metadata_extractors.py
"""
Module d'extracteurs de métadonnées.

Responsabilité unique: Lire les éléments Dublin Core du bloc metadata
et fournir des extracteurs spécialisés (auteurs raffinés, ISBN).
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from isbnlib import canonical, is_isbn10, is_isbn13
from lxml import etree

from ...config import DC_NS, ISBN_RE, OPF_NS, XML_NS
from ..models import Creator, Metadata
from .xml_utils import text_content

logger = logging.getLogger(__name__)

OPTIONAL_DC_FIELDS = (
    "contributor",
    "coverage",
    "date",
    "description",
    "format",
    "publisher",
    "relation",
    "rights",
    "source",
    "subject",
    "type",
)


def dc_texts(metadata_el: etree._Element, name: str) -> List[str]:
    """Textes de tous les éléments dc:<name>, dans l'ordre du document."""
    return [text_content(el) for el in metadata_el.iter(f"{{{DC_NS}}}{name}")]


def first_dc_text(metadata_el: etree._Element, name: str) -> Optional[str]:
    """
    Texte du premier élément dc:<name>.

    Returns:
        Le texte (éventuellement vide) ou None si l'élément est absent
    """
    for el in metadata_el.iter(f"{{{DC_NS}}}{name}"):
        return text_content(el)
    return None


def extract_optional_fields(metadata_el: etree._Element) -> Dict[str, Optional[str]]:
    """Extrait les champs Dublin Core optionnels (premier élément de chaque)."""
    return {name: first_dc_text(metadata_el, name) for name in OPTIONAL_DC_FIELDS}


def _collect_refinements(metadata_el: etree._Element) -> Dict[str, List[etree._Element]]:
    """Regroupe les <meta refines="#id"> EPUB 3 par id raffiné."""
    refinements: Dict[str, List[etree._Element]] = {}
    for meta in metadata_el.iter("{*}meta"):
        target = meta.get("refines")
        if target and target.startswith("#"):
            refinements.setdefault(target[1:], []).append(meta)
    return refinements


def _build_creator(el: etree._Element, refinements: Dict[str, List[etree._Element]]) -> Creator:
    file_as = el.get(f"{{{OPF_NS}}}file-as")
    role = el.get(f"{{{OPF_NS}}}role")
    alternate: Dict[str, str] = {}

    for meta in refinements.get(el.get("id") or "", []):
        prop = meta.get("property")
        value = text_content(meta).strip()
        if prop == "file-as" and file_as is None:
            file_as = value
        elif prop == "role" and role is None:
            role = value
        elif prop == "alternate-script":
            lang = meta.get(f"{{{XML_NS}}}lang")
            if lang:
                alternate[lang] = value

    return Creator(
        name=text_content(el).strip(),
        file_as=file_as,
        role=role,
        alternate=MappingProxyType(alternate),
    )


def extract_creators(metadata_el: etree._Element) -> Tuple[Creator, ...]:
    """
    Extrait les auteurs avec leurs raffinements.

    Supporte les attributs opf:file-as / opf:role (EPUB 2) et les
    <meta refines> file-as, role et alternate-script (EPUB 3).

    Args:
        metadata_el: Élément metadata du document OPF

    Returns:
        Tuple des auteurs, vide si aucun dc:creator
    """
    refinements = _collect_refinements(metadata_el)
    creators = tuple(
        _build_creator(el, refinements) for el in metadata_el.iter(f"{{{DC_NS}}}creator")
    )
    if creators:
        logger.debug("Extracted %d creator(s)", len(creators))
    return creators


def extract_cover_id(metadata_el: etree._Element) -> Optional[str]:
    """Id du manifest référencé par <meta name="cover"> (EPUB 2)."""
    for meta in metadata_el.iter("{*}meta"):
        if meta.get("name") == "cover" and meta.get("content"):
            return meta.get("content")
    return None


def find_isbn(metadata: Metadata) -> Optional[str]:
    """
    Cherche un ISBN valide parmi les identifiants du livre.

    Args:
        metadata: Métadonnées décodées

    Returns:
        ISBN canonique ou None
    """
    candidates = [metadata.identifier, *metadata.identifiers]
    for candidate in candidates:
        m = ISBN_RE.search(candidate)
        if not m:
            continue
        raw = m.group(0)
        if is_isbn10(raw) or is_isbn13(raw):
            isbn = canonical(raw)
            logger.debug("ISBN found in identifier: %s", isbn)
            return isbn
    return None

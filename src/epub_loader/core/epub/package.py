# epub_loader/src/epub_loader/core/epub/package.py
"""
Module de décodage du document OPF.

Responsabilité unique: Transformer le document de package en modèle
typé (metadata, manifest, spine). Le décodage est tout-ou-rien.
"""

import logging
from types import MappingProxyType
from typing import FrozenSet, Iterator, Mapping, Optional, Tuple

from lxml import etree

from ..models import ItemRef, ManifestItem, ManifestProperty, Metadata, Package
from .archive import Archive
from .metadata_extractors import (
    dc_texts,
    extract_cover_id,
    extract_creators,
    extract_optional_fields,
    first_dc_text,
)
from .xml_utils import parse_xml, select_first

logger = logging.getLogger(__name__)

REQUIRED_DC_FIELDS = ("identifier", "title", "language")


# --- Metadata ---


def decode_metadata(root: etree._Element) -> Optional[Metadata]:
    """
    Décode le bloc `package > metadata`.

    identifier, title et language sont obligatoires: un élément absent
    fait échouer le décodage. Un texte vide est accepté.

    Args:
        root: Racine du document OPF

    Returns:
        Objet Metadata ou None
    """
    metadata_el = select_first(root, "package", "metadata")
    if metadata_el is None:
        logger.debug("No package > metadata element")
        return None

    required = {name: first_dc_text(metadata_el, name) for name in REQUIRED_DC_FIELDS}
    missing = [name for name, value in required.items() if value is None]
    if missing:
        logger.debug("Missing required metadata: %s", ", ".join(missing))
        return None

    for name, value in required.items():
        if value == "":
            logger.warning("Empty dc:%s accepted", name)

    return Metadata(
        identifier=required["identifier"],
        title=required["title"],
        language=required["language"],
        identifiers=tuple(dc_texts(metadata_el, "identifier")),
        creators=extract_creators(metadata_el),
        cover_id=extract_cover_id(metadata_el),
        **extract_optional_fields(metadata_el),
    )


# --- Manifest ---


def _parse_properties(value: Optional[str]) -> FrozenSet[ManifestProperty]:
    props = set()
    for token in (value or "").split():
        try:
            props.add(ManifestProperty(token))
        except ValueError:
            logger.debug("Unknown manifest property ignored: %s", token)
    return frozenset(props)


def _manifest_entries(manifest_el: etree._Element) -> Iterator[Tuple[str, ManifestItem]]:
    for item in manifest_el.iter("{*}item"):
        item_id = item.get("id")
        href = item.get("href")
        media_type = item.get("media-type")

        if item_id is None or href is None or media_type is None:
            logger.debug("Manifest item skipped (id=%s, href=%s)", item_id, href)
            continue

        yield item_id, ManifestItem(
            href=href,
            media_type=media_type,
            media_overlay=item.get("media-overlay"),
            properties=_parse_properties(item.get("properties")),
            fallback=item.get("fallback"),
        )


def decode_manifest(root: etree._Element) -> Optional[Mapping[str, ManifestItem]]:
    """
    Décode le bloc `package > manifest`.

    Les items incomplets sont ignorés; en cas d'id dupliqué, le dernier
    l'emporte.

    Returns:
        Mapping en lecture seule {id: ManifestItem}, ou None si le bloc
        manifest est absent
    """
    manifest_el = select_first(root, "package", "manifest")
    if manifest_el is None:
        logger.debug("No package > manifest element")
        return None

    return MappingProxyType(dict(_manifest_entries(manifest_el)))


# --- Spine ---


def _spine_entries(spine_el: etree._Element) -> Iterator[ItemRef]:
    for itemref in spine_el.iter("{*}itemref"):
        idref = itemref.get("idref")
        if idref is None:
            logger.debug("Spine itemref without idref skipped")
            continue

        yield ItemRef(
            idref=idref,
            id=itemref.get("id"),
            linear=itemref.get("linear"),
            properties=itemref.get("properties"),
        )


def decode_spine(root: etree._Element) -> Optional[Tuple[ItemRef, ...]]:
    """Décode le bloc `package > spine` en conservant l'ordre de lecture."""
    spine_el = select_first(root, "package", "spine")
    if spine_el is None:
        logger.debug("No package > spine element")
        return None

    return tuple(_spine_entries(spine_el))


# --- Fonction principale de décodage ---


def decode_package(archive: Archive, package_path: str) -> Optional[Package]:
    """
    Décode le document OPF situé à package_path.

    Args:
        archive: Archive décompressée
        package_path: Chemin du document OPF dans l'archive

    Returns:
        Package complet, ou None si une des trois sections échoue
    """
    entry = archive.entry(package_path)
    if entry is None or archive.is_directory(entry):
        logger.debug("Package document %s not found", package_path)
        return None

    root = parse_xml(archive.read_bytes(entry), package_path)
    if root is None:
        return None

    metadata = decode_metadata(root)
    if metadata is None:
        logger.warning("Invalid metadata in %s", package_path)
        return None

    manifest = decode_manifest(root)
    if manifest is None:
        logger.warning("Missing manifest in %s", package_path)
        return None

    spine = decode_spine(root)
    if spine is None:
        logger.warning("Missing spine in %s", package_path)
        return None

    package_el = select_first(root, "package")
    spine_el = select_first(root, "package", "spine")

    logger.debug(
        "Decoded %s: %d manifest item(s), %d spine entries",
        package_path,
        len(manifest),
        len(spine),
    )
    return Package(
        metadata=metadata,
        manifest=manifest,
        spine=spine,
        version=package_el.get("version"),
        unique_identifier=package_el.get("unique-identifier"),
        spine_toc=spine_el.get("toc"),
        page_progression_direction=spine_el.get("page-progression-direction"),
    )

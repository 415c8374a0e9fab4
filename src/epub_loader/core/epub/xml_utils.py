# epub_loader/src/epub_loader/core/epub/xml_utils.py
"""
Utilitaires XML (lxml).

Le parseur résout les entités déclarées dans le sous-ensemble interne du
DOCTYPE, mais jamais une entité externe (SYSTEM/PUBLIC), et n'accède pas
au réseau: les documents viennent d'archives non fiables.
"""

import logging
from typing import List, Optional

from lxml import etree

logger = logging.getLogger(__name__)


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        # entités du sous-ensemble interne seulement, jamais SYSTEM/PUBLIC
        resolve_entities="internal",
        no_network=True,
        load_dtd=False,
        dtd_validation=False,
        huge_tree=False,
    )


def parse_xml(data: bytes, source: str = "<xml>") -> Optional[etree._Element]:
    """
    Parse un document XML de manière sécurisée.

    L'encodage déclaré dans le prologue XML est respecté.

    Args:
        data: Contenu brut du document
        source: Nom du document (pour logging uniquement)

    Returns:
        Élément racine si succès, None sinon
    """
    try:
        return etree.fromstring(data, parser=_make_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.warning("Could not parse %s: %s", source, e)
        return None


def select_all(root: etree._Element, *names: str) -> List[etree._Element]:
    """
    Équivalent du sélecteur CSS `a > b > c` sur les noms locaux.

    Le premier nom peut se trouver n'importe où dans le document; les
    suivants sont des enfants directs. Résultat dans l'ordre du document.
    """
    steps = "/".join(f"*[local-name()='{name}']" for name in names)
    return root.xpath(f"//{steps}")


def select_first(root: etree._Element, *names: str) -> Optional[etree._Element]:
    found = select_all(root, *names)
    return found[0] if found else None


def text_content(element: etree._Element) -> str:
    """Texte de l'élément et de ses descendants, comme textContent en DOM."""
    return "".join(element.itertext())

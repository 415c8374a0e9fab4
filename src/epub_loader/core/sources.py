# epub_loader/src/epub_loader/core/sources.py
"""
Obtention des octets d'une archive depuis un chemin local ou une URL.
"""

import logging

import requests

from ..exceptions import SourceError
from .file_utils import read_epub_bytes
from .network_utils import http_download_bytes

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http://", "https://")


def is_url(location: str) -> bool:
    return location.lower().startswith(URL_SCHEMES)


def fetch_epub_bytes(location: str) -> bytes:
    """
    Retourne le contenu brut de l'archive désignée par location.

    Args:
        location: Chemin de fichier ou URL http(s)

    Raises:
        SourceError: si la lecture ou le téléchargement échoue
    """
    if not is_url(location):
        return read_epub_bytes(location)

    try:
        return http_download_bytes(location)
    except requests.RequestException as e:
        raise SourceError(f"Cannot download {location}: {e}") from e

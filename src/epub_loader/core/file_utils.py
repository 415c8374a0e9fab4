# epub_loader/src/epub_loader/core/file_utils.py
"""
Logique pour les opérations sur le système de fichiers (trouver, lire).
"""

import logging
import os
from pathlib import Path
from typing import List

from ..config import SUPPORTED_EXT
from ..exceptions import SourceError

logger = logging.getLogger(__name__)


def find_epubs_in_folder(folder: str) -> List[str]:
    """Trouve tous les fichiers EPUB dans un dossier et ses sous-dossiers."""
    files = []
    for root, _, filenames in os.walk(folder):
        for f in sorted(filenames):
            if f.lower().endswith(SUPPORTED_EXT):
                files.append(os.path.join(root, f))
    logger.info("Found %d epub(s) in folder %s", len(files), folder)
    return files


def read_epub_bytes(path: str) -> bytes:
    """
    Lit le contenu brut d'un fichier EPUB.

    Raises:
        SourceError: si le fichier est absent ou illisible
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise SourceError(f"Cannot read {path}: {e}") from e
    logger.debug("Read %d bytes from %s", len(data), path)
    return data

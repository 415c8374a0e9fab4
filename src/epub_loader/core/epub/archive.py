# epub_loader/src/epub_loader/core/epub/archive.py
"""
Module de lecture de l'archive ZIP.

Responsabilité unique: Décompresser le conteneur en mémoire et donner
accès aux entrées par leur chemin.
"""

import io
import logging
import lzma
import zipfile
import zlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional

from ...exceptions import ArchiveError

logger = logging.getLogger(__name__)

# Erreurs levées par zipfile et ses décompresseurs sur une archive
# corrompue, tronquée ou utilisant une compression non supportée
# (bz2 signale un flux invalide par OSError).
_ZIP_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    lzma.LZMAError,
    EOFError,
    NotImplementedError,
    OSError,
)

# Bit 0 du champ "general purpose flag": entrée chiffrée
_ENCRYPTED_FLAG = 0x1


@dataclass(frozen=True)
class ArchiveEntry:
    """Entrée de l'archive: un dossier ou un fichier avec son contenu."""

    name: str
    is_dir: bool
    data: bytes = b""


class Archive:
    """
    Archive décompressée, en lecture seule.

    Les dossiers sont indexés sans le '/' final, comme les fichiers.
    """

    def __init__(self, entries: Dict[str, ArchiveEntry]):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Archive":
        """
        Décompresse une archive ZIP entièrement en mémoire.

        Args:
            data: Contenu brut de l'archive

        Returns:
            Archive indexée par chemin

        Raises:
            ArchiveError: si le buffer n'est pas un ZIP lisible
        """
        if isinstance(data, str):
            raise ArchiveError("Archive data must be bytes, not str")
        try:
            buffer = bytes(data)
        except (TypeError, ValueError) as e:
            raise ArchiveError(f"Archive data is not a byte buffer: {e}") from e

        entries: Dict[str, ArchiveEntry] = {}
        try:
            with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
                for info in zf.infolist():
                    if info.flag_bits & _ENCRYPTED_FLAG:
                        raise ArchiveError(f"Encrypted entry not supported: {info.filename}")
                    if info.is_dir():
                        name = info.filename.rstrip("/")
                        # Un fichier du même nom reste prioritaire
                        entries.setdefault(name, ArchiveEntry(name, True))
                    else:
                        entries[info.filename] = ArchiveEntry(
                            info.filename, False, zf.read(info)
                        )
        except _ZIP_ERRORS as e:
            raise ArchiveError(f"Invalid zip archive: {e}") from e

        logger.debug("Archive opened with %d entries", len(entries))
        return cls(entries)

    def entry(self, path: str) -> Optional[ArchiveEntry]:
        """Recherche exacte d'une entrée (aucune normalisation du chemin)."""
        return self._entries.get(path)

    @staticmethod
    def is_directory(entry: ArchiveEntry) -> bool:
        return entry.is_dir

    def read_bytes(self, entry: ArchiveEntry) -> bytes:
        if entry.is_dir:
            raise ArchiveError(f"{entry.name} is a directory")
        return entry.data

    def read_text(self, entry: ArchiveEntry, encoding: str = "utf-8") -> str:
        """
        Décode le contenu d'une entrée en texte.

        Raises:
            ArchiveError: si l'entrée est un dossier ou n'est pas décodable
        """
        try:
            return self.read_bytes(entry).decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ArchiveError(f"Cannot decode {entry.name} as {encoding}: {e}") from e

    def names(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

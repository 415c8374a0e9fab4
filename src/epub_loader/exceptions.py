# epub_loader/src/epub_loader/exceptions.py
"""
Erreurs du chargement EPUB.

Toutes dérivent de EpubLoadError: ce sont des échecs prévisibles, que le CLI
affiche sans traceback.
"""


class EpubLoadError(Exception):
    """Échec du chargement d'un livre EPUB."""


class ArchiveError(EpubLoadError):
    """Le buffer n'est pas une archive ZIP valide, ou une entrée est illisible."""


class InvalidMimetypeError(EpubLoadError):
    """L'entrée `mimetype` est absente ou n'annonce pas application/epub+zip."""


class InvalidContainerPointerError(EpubLoadError):
    """META-INF/container.xml est absent, illisible ou sans rootfile utilisable."""


class InvalidPackageDocumentError(EpubLoadError):
    """Le document OPF manque d'une section ou d'un champ obligatoire."""


class SourceError(EpubLoadError):
    """Impossible d'obtenir les octets de l'archive (fichier, réseau)."""

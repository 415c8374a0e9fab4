# epub_loader/src/epub_loader/config.py
"""
Configuration et constantes pour EPUB Loader
"""

import os
import re

# ---------- Conteneur EPUB ----------
MIMETYPE_PATH = "mimetype"
EPUB_MIMETYPE = "application/epub+zip"
CONTAINER_PATH = "META-INF/container.xml"

# ---------- Namespaces XML ----------
CONTAINER_NS = "urn:oasis:names:tc:opendocument:xmlns:container"
OPF_NS = "http://www.idpf.org/2007/opf"
DC_NS = "http://purl.org/dc/elements/1.1/"
XML_NS = "http://www.w3.org/XML/1998/namespace"

# ---------- Expressions régulières ----------
ISBN_RE = re.compile(r"(?:(?:ISBN(?:-1[03])?:?\s*)?)(97[89][ -]?)?[0-9][0-9 -]{8,}[0-9Xx]")

# ---------- Configuration réseau ----------
API_TIMEOUT = 10

# ---------- Configuration retry/backoff ----------
MAX_RETRIES = 5
INITIAL_BACKOFF = 1.0  # seconds
MAX_BACKOFF = 30.0
JITTER = 0.3  # fraction for jitter

# ---------- Extensions supportées ----------
SUPPORTED_EXT = (".epub",)

# ---------- Configuration logging ----------
LOG_DIR_ENV_VAR = "EPUB_LOADER_LOG_DIR"
LOG_DIR = os.getenv(LOG_DIR_ENV_VAR, "logs")
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 5
LOG_ENCODING = "utf-8"


# ---------- Initialisation des dossiers ----------
def ensure_directories():
    """Crée les dossiers nécessaires s'ils n'existent pas."""
    os.makedirs(LOG_DIR, exist_ok=True)

# epub_loader/src/epub_loader/main.py
"""
Point d'entrée principal pour EPUB Loader
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from .config import (
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_ENCODING,
    LOG_MAX_BYTES,
    ensure_directories,
)


def setup_logging(verbose: bool = False):
    """Configure le système de logging."""
    logger = logging.getLogger("epub_loader")
    if logger.handlers:
        return logger

    ensure_directories()
    logger.setLevel(logging.DEBUG)

    # Handler pour fichier avec rotation
    logfile = os.path.join(LOG_DIR, "epub_loader.log")
    handler = RotatingFileHandler(
        logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding=LOG_ENCODING
    )
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(threadName)s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # Handler pour console
    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    return logger


def print_usage():
    print("Usage: python -m epub_loader <path|folder|url> [--verbose]")
    print("  path|folder|url: Fichier EPUB, dossier contenant des EPUB ou URL http(s)")
    print("  --verbose: Affiche les messages de debug")


def run_cli(argv: Optional[List[str]] = None) -> int:
    """Lance le mode ligne de commande."""
    args = list(sys.argv[1:] if argv is None else argv)
    logger = logging.getLogger("epub_loader")

    positional = [a for a in args if not a.startswith("--")]
    if len(positional) != 1:
        print_usage()
        return 1

    from .cli import cli_load, print_load_summary

    location = positional[0]
    logger.info("Starting EPUB Loader CLI on %s", location)

    outcomes = cli_load(location)
    if not outcomes:
        print(f"Error: no EPUB found in {location}")
        return 1

    print_load_summary(outcomes)
    return 0 if all(o.ok for o in outcomes) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Point d'entrée principal."""
    args = list(sys.argv[1:] if argv is None else argv)
    setup_logging(verbose="--verbose" in args)

    try:
        return run_cli(args)
    except Exception as e:
        logging.getLogger("epub_loader").exception("Error in CLI mode")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

# epub_loader/src/epub_loader/core/network_utils.py
"""
Téléchargement HTTP des archives, avec retry sur les erreurs transitoires.

Seules les coupures réseau, les timeouts et les réponses 5xx / 429 sont
retentées; une erreur client (404, 403, 410...) est définitive.
"""

import logging
import random
import time
from functools import wraps
from typing import Callable

import requests

from ..config import (
    API_TIMEOUT,
    INITIAL_BACKOFF,
    JITTER,
    MAX_BACKOFF,
    MAX_RETRIES,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS = frozenset({429})


def is_transient(error: requests.RequestException) -> bool:
    """Indique si une nouvelle tentative a une chance de réussir."""
    if isinstance(error, (requests.ConnectionError, requests.Timeout)):
        return True
    if isinstance(error, requests.HTTPError):
        status = getattr(error.response, "status_code", None)
        return status is not None and (status >= 500 or status in RETRYABLE_STATUS)
    return False


def _backoff_delay(attempt: int, initial: float, maximum: float, jitter: float) -> float:
    """Délai exponentiel (initial * 2^(attempt-1)), borné et bruité."""
    base = min(maximum, initial * 2 ** (attempt - 1))
    return max(0.0, min(maximum, base * (1 + random.uniform(-jitter, jitter))))


def retry_backoff(
    max_retries: int = MAX_RETRIES,
    initial_backoff: float = INITIAL_BACKOFF,
    max_backoff: float = MAX_BACKOFF,
    jitter: float = JITTER,
    should_retry: Callable[[requests.RequestException], bool] = is_transient,
):
    """
    Décorateur de retry pour les appels HTTP.

    Args:
        max_retries: Nombre total de tentatives
        should_retry: Prédicat décidant si une erreur requests est transitoire
    """

    def deco(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            attempt = 1
            while True:
                try:
                    return func(*args, **kwargs)
                except requests.RequestException as e:
                    if not should_retry(e):
                        logger.error("Permanent error in %s: %s", func.__name__, e)
                        raise
                    if attempt >= max_retries:
                        logger.error("Giving up %s after %d attempts: %s", func.__name__, attempt, e)
                        raise

                    delay = _backoff_delay(attempt, initial_backoff, max_backoff, jitter)
                    logger.warning(
                        "%s failed (attempt %d/%d): %s -- retrying in %.2fs",
                        func.__name__,
                        attempt,
                        max_retries,
                        e,
                        delay,
                    )
                    time.sleep(delay)
                    attempt += 1

        return wrapper

    return deco


@retry_backoff()
def http_download_bytes(url: str, timeout: int = API_TIMEOUT) -> bytes:
    """Télécharge le contenu brut d'une archive."""
    logger.debug("Downloading %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content

"""
HTTP GET of JSON lexicon fragments with retries and exponential backoff.
"""
import logging
import time
from typing import Any, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_INITIAL_BACKOFF = 1.0


def get_json_with_retries(
    url: str,
    timeout: int = 10,
    max_retries: int = DEFAULT_MAX_RETRIES,
    initial_backoff: float = DEFAULT_INITIAL_BACKOFF,
) -> Tuple[Optional[Any], Optional[str]]:
    """
    GET url and decode JSON. Retries timeouts, connection errors and 5xx with backoff;
    4xx and undecodable bodies fail immediately.
    Returns (payload, None) on success, (None, error_message) on failure.
    """
    last_error: Optional[str] = None
    for attempt in range(max_retries):
        try:
            resp = requests.get(url, timeout=timeout, headers={"Cache-Control": "no-store"})
            if resp.status_code >= 500:
                last_error = f"HTTP {resp.status_code}"
            elif resp.status_code >= 400:
                return (None, f"HTTP {resp.status_code}")
            else:
                try:
                    return (resp.json(), None)
                except ValueError as e:
                    return (None, f"invalid JSON: {e}")
        except requests.Timeout as e:
            last_error = f"Read timed out: {e}"
        except requests.RequestException as e:
            last_error = f"{type(e).__name__}: {e}"
        logger.warning(
            "EXTENSION_FETCH retry attempt=%s/%s url=%s error=%s",
            attempt + 1, max_retries, url[:80], last_error,
        )
        if attempt < max_retries - 1:
            delay = initial_backoff * (2 ** attempt)
            logger.info("EXTENSION_FETCH backoff %.1fs before retry", delay)
            time.sleep(delay)
    return (None, last_error)

"""
Fetch remote lexicon fragments. Each source is fetched independently: a failing
source is logged and dropped without affecting the others. Fragments are returned
unvalidated; the merger validates and skips malformed ones.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence
import logging

from veganscan.config import get_extension_urls, get_extension_fetch_timeout
from veganscan.extensions.http_retry import get_json_with_retries

logger = logging.getLogger(__name__)

_MAX_WORKERS = 4


def fetch_extension_fragments(
    urls: Optional[Sequence[str]] = None,
    timeout: Optional[int] = None,
    max_retries: int = 2,
) -> List[Any]:
    """Fetch all sources in parallel; return parsed JSON of those that succeeded, in source order."""
    urls = list(urls) if urls is not None else get_extension_urls()
    timeout = timeout if timeout is not None else get_extension_fetch_timeout()
    if not urls:
        return []

    def _one(url: str):
        return get_json_with_retries(url, timeout=timeout, max_retries=max_retries)

    with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(urls))) as pool:
        results = list(pool.map(_one, urls))

    fragments: List[Any] = []
    for url, (payload, error) in zip(urls, results):
        if error is not None:
            logger.warning("EXTENSION_FETCH failed url=%s error=%s", url[:80], error)
            continue
        logger.info("EXTENSION_FETCH ok url=%s", url[:80])
        fragments.append(payload)
    logger.info("EXTENSION_FETCH done sources=%d fetched=%d", len(urls), len(fragments))
    return fragments

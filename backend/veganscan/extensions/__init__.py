"""
Remote lexicon extension sources (caller-side; the scan engine performs no I/O).
"""
from .http_retry import get_json_with_retries
from .fetcher import fetch_extension_fragments

__all__ = [
    "get_json_with_retries",
    "fetch_extension_fragments",
]

"""
Paths, remote extension sources, and centralized configuration.
All data paths resolve relative to the repository root.
"""
import os
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

# backend/veganscan/config.py -> parent=veganscan, parent.parent=backend, parent.parent.parent=repo
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent

# Display cap for unknown tokens in a scan result
UNKNOWN_TOKEN_LIMIT = 30


# --- Data paths ---
def get_lexicon_path() -> Path:
    override = os.environ.get("VEGANSCAN_LEXICON_PATH", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "lexicon.json"


def get_extensions_dir() -> Path:
    override = os.environ.get("VEGANSCAN_EXTENSIONS_DIR", "").strip()
    if override:
        return Path(override)
    return _REPO_ROOT / "data" / "extensions"


def get_local_extensions_enabled() -> bool:
    return os.environ.get("LOCAL_EXTENSIONS_ENABLED", "true").lower() in ("1", "true", "yes")


# --- Remote lexicon extensions (lazy read from env) ---
def get_extension_urls() -> List[str]:
    raw = os.environ.get("VEGANSCAN_EXTENSION_URLS", "")
    return [u.strip() for u in raw.split(",") if u.strip()]


def get_extension_fetch_timeout() -> int:
    return int(os.environ.get("EXTENSION_FETCH_TIMEOUT", "10"))


# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: lexicon=%s exists=%s extensions_dir=%s local_extensions=%s "
        "extension_urls=%d fetch_timeout=%ds unknown_token_limit=%d",
        get_lexicon_path(), get_lexicon_path().exists(),
        get_extensions_dir(), get_local_extensions_enabled(),
        len(get_extension_urls()), get_extension_fetch_timeout(),
        UNKNOWN_TOKEN_LIMIT,
    )

"""
Loads the base lexicon from data/lexicon.json and optional local extension fragments
from data/extensions/*.json. The only place the lexicon touches the filesystem.
"""
from pathlib import Path
from typing import Any, List, Optional
import json
import logging

from .lexicon_schema import Lexicon, LexiconValidationError
from veganscan.config import get_lexicon_path, get_extensions_dir
from veganscan.normalization.normalizer import normalize_text

logger = logging.getLogger(__name__)


def _warn_unnormalized(lexicon: Lexicon, source: Path) -> None:
    """Entries are matched verbatim; flag any the normalizer would rewrite."""
    entries = list(lexicon.blacklist) + list(lexicon.greylist) + list(lexicon.code_map)
    for entry in sorted(set(entries)):
        if normalize_text(entry) != entry:
            logger.warning(
                "LEXICON entry not normalized entry=%r expected=%r source=%s",
                entry, normalize_text(entry), source,
            )


def load_lexicon(path: Optional[Path] = None) -> Optional[Lexicon]:
    """
    Load and validate the base lexicon.
    Returns None when the file is missing (scans then fail safe to Unclear).
    Raises LexiconValidationError when the file is not valid JSON or does not match the schema.
    """
    path = Path(path) if path is not None else get_lexicon_path()
    if not path.exists():
        logger.warning("Lexicon file not found at %s; scans will be Unclear.", path)
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LexiconValidationError(f"lexicon file {path} is not valid UTF-8 JSON: {e}") from e
    lexicon = Lexicon.from_dict(data)
    _warn_unnormalized(lexicon, path)
    logger.info(
        "LEXICON loaded blacklist=%d greylist=%d enumbers=%d from %s",
        len(lexicon.blacklist), len(lexicon.greylist), len(lexicon.code_map), path,
    )
    return lexicon


def load_local_fragments(directory: Optional[Path] = None) -> List[Any]:
    """
    Read every *.json file in the extensions directory, sorted by name.
    Returns parsed JSON values unvalidated; the merger validates and skips bad ones.
    Unreadable files are logged and skipped.
    """
    directory = Path(directory) if directory is not None else get_extensions_dir()
    if not directory.is_dir():
        return []
    fragments: List[Any] = []
    for path in sorted(directory.glob("*.json")):
        try:
            with open(path, encoding="utf-8") as f:
                fragments.append(json.load(f))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("EXTENSION local fragment load failed path=%s error=%s", path, e)
    logger.info("EXTENSION loaded %d local fragments from %s", len(fragments), directory)
    return fragments

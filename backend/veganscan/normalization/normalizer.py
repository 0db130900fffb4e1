"""
Deterministic normalization of OCR label text. No fuzzy matching, no translation.
Produces the canonical form shared by the matcher and the unknown-term detector.
Lexicon entries are expected to already be in this form; they are never re-normalized here.
"""
import logging
import unicodedata
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

# German diacritics and ligatures
GERMAN_FOLDS: dict[str, str] = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "ß": "ss",
}

# hyphen, non-breaking hyphen, figure dash, en dash, em dash, horizontal bar
HYPHEN_VARIANTS = frozenset("\u2010\u2011\u2012\u2013\u2014\u2015")

# Collapsed to a single space together with whitespace runs
SEPARATORS = frozenset(",;:()/\\")

# Token boundaries for unknown-term detection (in addition to whitespace)
TOKEN_SEPARATORS = frozenset(",;:()")

# Whole-token OCR confusions only; substrings are never rewritten
OCR_TOKEN_FIXES: dict[str, str] = {
    "o": "0",
    "1": "l",
}


def _split_on(text: str, separators: Iterable[str]) -> List[str]:
    seps = frozenset(separators)
    return "".join(" " if ch in seps else ch for ch in text).split()


def normalize_text(raw: Union[str, bytes, None]) -> str:
    """
    Canonicalize raw label text.
    - Lowercase, NFKC composition (lowercased again, NFKC can emit capitals).
    - Fold ae/oe/ue/ss, unify dash variants to "-".
    - Collapse whitespace and separator punctuation to single spaces.
    - Whole-token OCR fixes: "o" -> "0", "1" -> "l".
    Idempotent: normalize_text(normalize_text(s)) == normalize_text(s).
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if not raw or not isinstance(raw, str):
        return ""
    t = unicodedata.normalize("NFKC", raw.lower()).lower()
    t = "".join(GERMAN_FOLDS.get(ch, ch) for ch in t)
    t = "".join("-" if ch in HYPHEN_VARIANTS else ch for ch in t)
    # folding can expose a new base letter to a trailing combining mark (u+0308 after "ue")
    t = unicodedata.normalize("NFC", t)
    tokens = [OCR_TOKEN_FIXES.get(tok, tok) for tok in _split_on(t, SEPARATORS)]
    return " ".join(tokens)


def split_tokens(text: str) -> List[str]:
    """Split normalized text on whitespace and , ; : ( ) into candidate tokens."""
    if not text:
        return []
    return _split_on(text, TOKEN_SEPARATORS)

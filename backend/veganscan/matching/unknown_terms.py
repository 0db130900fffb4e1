"""
Unknown-term detection: word-like tokens not covered by any lexicon tier
or by generic label vocabulary. Additive codes are reported via code hits, not here.
"""
from typing import List
import logging

from veganscan.config import UNKNOWN_TOKEN_LIMIT
from veganscan.lexicon.lexicon_schema import Lexicon
from veganscan.matching.matcher import is_additive_code
from veganscan.normalization.normalizer import normalize_text, split_tokens

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3
TOKEN_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-")
TOKEN_START = frozenset("abcdefghijklmnopqrstuvwxyz")

# Generic German label vocabulary with no vegan-safety signal (structural words,
# category names, plain staples). Kept as written on labels; normalized below.
_GENERIC_LABEL_WORDS = [
    "zutaten", "spuren", "kann", "enthält", "enthaelt", "hergestellt",
    "mit", "und", "oder", "aus", "von", "frei", "ohne",
    "natürliches", "natuerliches", "aroma", "aromen",
    "farbstoff", "emulgator", "stabilisator",
    "säureregulator", "saeureregulator", "süßstoff", "suesstoff",
    "gewürz", "gewuerz", "gewürze", "gewuerze",
    "pflanzlich", "pflanzliche", "öl", "oel", "fett", "fette",
    "protein", "proteinpulver", "extrakt", "pulver", "konzentrat",
    "mehl", "stärke", "staerke",
    "zucker", "salz", "wasser",
]

STOPWORDS = frozenset(normalize_text(w) for w in _GENERIC_LABEL_WORDS)


def is_candidate_token(token: str) -> bool:
    """At least 3 chars, only [a-z0-9-], starts with a letter."""
    return (
        len(token) >= MIN_TOKEN_LENGTH
        and token[0] in TOKEN_START
        and all(ch in TOKEN_ALPHABET for ch in token)
    )


def detect_unknown(normalized_text: str, lexicon: Lexicon, limit: int = UNKNOWN_TOKEN_LIMIT) -> List[str]:
    """
    Tokens not in the lexicon (any tier or code key) and not generic vocabulary.
    Deduplicated, first-occurrence order, at most `limit` entries.
    """
    unknown: dict[str, None] = {}
    for tok in split_tokens(normalized_text):
        if tok in unknown or not is_candidate_token(tok):
            continue
        if lexicon.is_known(tok) or tok in STOPWORDS or is_additive_code(tok):
            continue
        unknown[tok] = None
    if len(unknown) > limit:
        logger.debug("UNKNOWN_TERMS truncated count=%d limit=%d", len(unknown), limit)
    return list(unknown)[:limit]

"""
Lexicon matching over normalized text.
- Blacklist/greylist: full-text substring containment, so entries may be phrases ("l-cystein").
- Additive codes: explicit character scan for "e" + 3-4 ASCII digits, bounded by
  non-alphanumeric characters or string edges. No regex, so behavior does not depend
  on a regex engine's Unicode word-boundary rules.
"""
from dataclasses import dataclass
from typing import List, Tuple
import logging

from veganscan.lexicon.lexicon_schema import CodeTag, Lexicon

logger = logging.getLogger(__name__)

ASCII_DIGITS = frozenset("0123456789")
CODE_PREFIX = "e"
CODE_MIN_DIGITS = 3
CODE_MAX_DIGITS = 4


@dataclass(frozen=True)
class MatchResult:
    blacklist_hits: Tuple[str, ...] = ()
    greylist_hits: Tuple[str, ...] = ()
    code_hits: Tuple[str, ...] = ()


def _is_boundary(text: str, idx: int) -> bool:
    """True at string edges or on a non-alphanumeric character."""
    return idx < 0 or idx >= len(text) or not text[idx].isalnum()


def is_additive_code(token: str) -> bool:
    """Token is exactly "e" followed by 3 or 4 ASCII digits, e.g. e120, e1105."""
    if not token or token[0] != CODE_PREFIX:
        return False
    digits = token[1:]
    return CODE_MIN_DIGITS <= len(digits) <= CODE_MAX_DIGITS and all(ch in ASCII_DIGITS for ch in digits)


def extract_additive_codes(text: str) -> List[str]:
    """All word-bounded additive codes in text, deduplicated, first occurrence order."""
    found: dict[str, None] = {}
    n = len(text or "")
    i = 0
    while i < n:
        if text[i] != CODE_PREFIX or not _is_boundary(text, i - 1):
            i += 1
            continue
        j = i + 1
        while j < n and text[j] in ASCII_DIGITS:
            j += 1
        if CODE_MIN_DIGITS <= j - i - 1 <= CODE_MAX_DIGITS and _is_boundary(text, j):
            found[text[i:j]] = None
        i = max(j, i + 1)
    return list(found)


def match(normalized_text: str, lexicon: Lexicon) -> MatchResult:
    """
    Substring hits per tier, then additive codes resolved through the code map:
    not_vegan -> blacklist hits, maybe -> greylist hits, absent -> code_hits only.
    """
    text = normalized_text or ""
    blacklist_hits: List[str] = [k for k in sorted(lexicon.blacklist) if k in text]
    greylist_hits: List[str] = [k for k in sorted(lexicon.greylist) if k in text]
    code_hits = extract_additive_codes(text)

    unresolved: List[str] = []
    for code in code_hits:
        tag = lexicon.code_map.get(code)
        if tag is CodeTag.NOT_VEGAN:
            if code not in blacklist_hits:
                blacklist_hits.append(code)
        elif tag is CodeTag.MAYBE:
            if code not in greylist_hits:
                greylist_hits.append(code)
        else:
            unresolved.append(code)

    if unresolved:
        logger.debug("MATCH unresolved additive codes=%s", unresolved)
    return MatchResult(
        blacklist_hits=tuple(blacklist_hits),
        greylist_hits=tuple(greylist_hits),
        code_hits=tuple(code_hits),
    )

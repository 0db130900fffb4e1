from .matcher import MatchResult, extract_additive_codes, is_additive_code, match
from .unknown_terms import STOPWORDS, detect_unknown

__all__ = [
    "MatchResult",
    "extract_additive_codes",
    "is_additive_code",
    "match",
    "STOPWORDS",
    "detect_unknown",
]

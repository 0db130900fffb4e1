"""
Deterministic scan pipeline: normalize -> match + unknown terms -> aggregate.
Pure and synchronous; the lexicon is passed in on every call and only read.
"""
from typing import Optional, Union
import logging

from veganscan.evaluation.verdict_aggregator import aggregate
from veganscan.lexicon.lexicon_schema import Lexicon
from veganscan.matching.matcher import match
from veganscan.matching.unknown_terms import detect_unknown
from veganscan.models.scan_result import ScanResult
from veganscan.normalization.normalizer import normalize_text

logger = logging.getLogger(__name__)


def classify(raw_text: Union[str, bytes, None], lexicon: Optional[Lexicon]) -> ScanResult:
    """
    Classify raw OCR text against a lexicon.
    No lexicon -> Unclear with empty hits (cannot evaluate, never assume safe).
    Any text, including empty or garbage input, yields a result rather than an error.
    """
    if lexicon is None:
        logger.warning("SCAN no lexicon loaded; returning Unclear")
        return ScanResult.unclear()

    text = normalize_text(raw_text)
    hits = match(text, lexicon)
    unknown = detect_unknown(text, lexicon)
    verdict = aggregate(hits.blacklist_hits, hits.greylist_hits, unknown)

    result = ScanResult(
        verdict=verdict,
        blacklist_hits=hits.blacklist_hits,
        greylist_hits=hits.greylist_hits,
        code_hits=hits.code_hits,
        unknown_tokens=tuple(unknown),
    )
    logger.info(
        "SCAN verdict=%s chars=%d blacklist=%d greylist=%d codes=%d unknown=%d",
        verdict.value, len(text), len(result.blacklist_hits), len(result.greylist_hits),
        len(result.code_hits), len(result.unknown_tokens),
    )
    return result

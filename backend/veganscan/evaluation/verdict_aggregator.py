"""
Verdict precedence: any blacklist hit -> NotVegan; else any greylist hit or unknown token -> Unclear;
else Vegan. A strict order over evidence classes, not a score.
"""
from typing import Sequence

from veganscan.models.scan_result import Verdict


def aggregate(
    blacklist_hits: Sequence[str],
    greylist_hits: Sequence[str],
    unknown_tokens: Sequence[str],
) -> Verdict:
    if blacklist_hits:
        return Verdict.NOT_VEGAN
    if greylist_hits or unknown_tokens:
        return Verdict.UNCLEAR
    return Verdict.VEGAN

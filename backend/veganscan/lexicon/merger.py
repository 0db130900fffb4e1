"""
Extension merger: union a base lexicon with externally supplied fragments into a new Lexicon.

Code-map overlay order is part of the contract: base entries first, then each fragment in
the order given, so a later fragment overrides the base (and earlier fragments) for the same
code. This is how remote extensions re-tag an additive, not a side effect.
"""
from typing import Any, Iterable, List, Mapping, Optional, Union
import logging

from .lexicon_schema import (
    CodeTag,
    Lexicon,
    LexiconFragment,
    LexiconValidationError,
    parse_fragment,
)

logger = logging.getLogger(__name__)

FragmentLike = Union[Lexicon, LexiconFragment, Mapping[str, Any]]


def _as_fragment(fragment: FragmentLike) -> LexiconFragment:
    if isinstance(fragment, Lexicon):
        return LexiconFragment(
            blacklist=list(fragment.blacklist),
            greylist=list(fragment.greylist),
            enumbers=dict(fragment.code_map),
        )
    return parse_fragment(fragment)


def valid_fragments(fragments: Iterable[FragmentLike]) -> List[LexiconFragment]:
    """Parse fragments in order, dropping malformed ones with a warning."""
    valid: List[LexiconFragment] = []
    for idx, raw in enumerate(fragments):
        try:
            valid.append(_as_fragment(raw))
        except LexiconValidationError as e:
            logger.warning("MERGE skipped fragment index=%d reason=%s", idx, e)
    return valid


def merge_lexicons(base: Optional[Lexicon], *fragments: FragmentLike) -> Lexicon:
    """
    Merge fragments into base. Never mutates base; returns a new Lexicon.
    - blacklist/greylist: set union (dedup, order irrelevant).
    - code map: overlay, last fragment wins on collision.
    - Malformed fragments are skipped with a warning; the rest are still merged.
    """
    base = base if base is not None else Lexicon.empty()
    blacklist = set(base.blacklist)
    greylist = set(base.greylist)
    code_map: dict[str, CodeTag] = dict(base.code_map)

    merged = valid_fragments(fragments)
    for frag in merged:
        blacklist.update(frag.blacklist)
        greylist.update(frag.greylist)
        for code, tag in frag.enumbers.items():
            previous = code_map.get(code)
            if previous is not None and previous != tag:
                logger.info("MERGE code override code=%s %s -> %s", code, previous.value, tag.value)
            code_map[code] = tag

    logger.info(
        "MERGE done fragments=%d merged=%d blacklist=%d greylist=%d enumbers=%d",
        len(fragments), len(merged), len(blacklist), len(greylist), len(code_map),
    )
    return Lexicon(blacklist=frozenset(blacklist), greylist=frozenset(greylist), code_map=code_map)

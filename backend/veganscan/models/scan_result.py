"""
Structured scan verdict. Single immutable output shape for API, CLI, and session re-scans.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple


class Verdict(str, Enum):
    VEGAN = "Vegan"
    NOT_VEGAN = "NotVegan"
    UNCLEAR = "Unclear"

    @property
    def label(self) -> str:
        """German display label."""
        return _LABELS[self]


_LABELS = {
    Verdict.VEGAN: "Vegan",
    Verdict.NOT_VEGAN: "Nicht vegan",
    Verdict.UNCLEAR: "Unklar",
}


def _sorted_unique(items: Iterable[str]) -> Tuple[str, ...]:
    return tuple(sorted(set(items)))


@dataclass(frozen=True)
class ScanResult:
    verdict: Verdict
    blacklist_hits: Tuple[str, ...] = ()
    greylist_hits: Tuple[str, ...] = ()
    code_hits: Tuple[str, ...] = ()
    unknown_tokens: Tuple[str, ...] = ()  # insertion order, capped for display

    def __post_init__(self) -> None:
        object.__setattr__(self, "blacklist_hits", _sorted_unique(self.blacklist_hits))
        object.__setattr__(self, "greylist_hits", _sorted_unique(self.greylist_hits))
        object.__setattr__(self, "code_hits", _sorted_unique(self.code_hits))
        object.__setattr__(self, "unknown_tokens", tuple(self.unknown_tokens))

    @classmethod
    def unclear(cls) -> "ScanResult":
        """Cannot evaluate (e.g. no lexicon): Unclear with empty hit lists."""
        return cls(verdict=Verdict.UNCLEAR)

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "blacklistHits": list(self.blacklist_hits),
            "greylistHits": list(self.greylist_hits),
            "codeHits": list(self.code_hits),
            "unknownTokens": list(self.unknown_tokens),
        }

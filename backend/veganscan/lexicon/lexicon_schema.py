"""
Strict contract for the tiered lexicon: blacklist, greylist, additive-code map.
JSON input is validated here, at the ingestion boundary; matching code only ever sees a typed Lexicon.
"""
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator


class CodeTag(str, Enum):
    NOT_VEGAN = "not_vegan"
    MAYBE = "maybe"


class LexiconValidationError(ValueError):
    """Lexicon or fragment does not match the schema. `errors` holds the pydantic error list."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class LexiconFragment(BaseModel):
    """
    Partial lexicon as supplied in JSON: {"blacklist": [...], "greylist": [...], "enumbers": {...}}.
    Missing or null fields default to empty; wrong types are rejected.
    """
    model_config = ConfigDict(extra="ignore")

    blacklist: list[str] = Field(default_factory=list)
    greylist: list[str] = Field(default_factory=list)
    enumbers: dict[str, CodeTag] = Field(default_factory=dict)

    @field_validator("blacklist", "greylist", "enumbers", mode="before")
    @classmethod
    def _null_is_empty(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return {} if info.field_name == "enumbers" else []
        return v

    @field_validator("blacklist", "greylist")
    @classmethod
    def _no_blank_entries(cls, v: list[str]) -> list[str]:
        if any(not s.strip() for s in v):
            raise ValueError("blank entry not allowed")
        return v

    @field_validator("enumbers")
    @classmethod
    def _no_blank_codes(cls, v: dict[str, CodeTag]) -> dict[str, CodeTag]:
        if any(not k.strip() for k in v):
            raise ValueError("blank additive code not allowed")
        return v


def parse_fragment(data: Any) -> LexiconFragment:
    """Validate a JSON-shaped mapping. Raises LexiconValidationError on any schema violation."""
    if isinstance(data, LexiconFragment):
        return data
    if not isinstance(data, Mapping):
        raise LexiconValidationError(
            f"lexicon must be a JSON object, got {type(data).__name__}",
        )
    try:
        return LexiconFragment.model_validate(dict(data))
    except ValidationError as e:
        errors = e.errors()
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in errors})
        raise LexiconValidationError(f"invalid lexicon fields: {', '.join(fields)}", errors) from e


@dataclass(frozen=True)
class Lexicon:
    """
    Immutable word/code table. Entries are expected in normalized form
    (see veganscan.normalization); nothing is re-normalized at match time.
    New lexicons come from the merger, never from mutation.
    """
    blacklist: frozenset[str] = frozenset()
    greylist: frozenset[str] = frozenset()
    code_map: Mapping[str, CodeTag] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "blacklist", frozenset(self.blacklist))
        object.__setattr__(self, "greylist", frozenset(self.greylist))
        object.__setattr__(
            self,
            "code_map",
            MappingProxyType({k: CodeTag(v) for k, v in dict(self.code_map).items()}),
        )

    @classmethod
    def empty(cls) -> "Lexicon":
        return cls()

    @classmethod
    def from_fragment(cls, fragment: LexiconFragment) -> "Lexicon":
        return cls(
            blacklist=frozenset(fragment.blacklist),
            greylist=frozenset(fragment.greylist),
            code_map=dict(fragment.enumbers),
        )

    @classmethod
    def from_dict(cls, d: Any) -> "Lexicon":
        return cls.from_fragment(parse_fragment(d))

    def to_dict(self) -> dict:
        return {
            "blacklist": sorted(self.blacklist),
            "greylist": sorted(self.greylist),
            "enumbers": {k: self.code_map[k].value for k in sorted(self.code_map)},
        }

    def is_known(self, token: str) -> bool:
        """Token is a blacklist or greylist entry, or an additive-code key."""
        return token in self.blacklist or token in self.greylist or token in self.code_map

    def counts(self) -> dict[str, int]:
        return {
            "blacklist": len(self.blacklist),
            "greylist": len(self.greylist),
            "enumbers": len(self.code_map),
        }

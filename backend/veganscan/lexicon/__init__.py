from .lexicon_schema import CodeTag, Lexicon, LexiconFragment, LexiconValidationError, parse_fragment
from .lexicon_loader import load_lexicon, load_local_fragments
from .merger import merge_lexicons, valid_fragments

__all__ = [
    "CodeTag",
    "Lexicon",
    "LexiconFragment",
    "LexiconValidationError",
    "parse_fragment",
    "load_lexicon",
    "load_local_fragments",
    "merge_lexicons",
    "valid_fragments",
]

"""
VeganScan: classify ingredient-label text into a vegan-safety verdict.
"""
from veganscan.models.scan_result import ScanResult, Verdict
from veganscan.lexicon.lexicon_schema import Lexicon, CodeTag, LexiconValidationError
from veganscan.lexicon.merger import merge_lexicons
from veganscan.scanner import classify

__all__ = [
    "ScanResult",
    "Verdict",
    "Lexicon",
    "CodeTag",
    "LexiconValidationError",
    "merge_lexicons",
    "classify",
]

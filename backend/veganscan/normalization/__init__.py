from .normalizer import normalize_text, split_tokens

__all__ = ["normalize_text", "split_tokens"]

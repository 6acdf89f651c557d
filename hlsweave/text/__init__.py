"""Text canonicalization components.

This package turns raw source text into the token sequence used for phrase
matching and provides the slug helpers used for static clip lookup.
"""

from .normalizer import TextNormalizer, is_punctuation, is_word_char
from .slug import canonical_punctuation, slugify_token

__all__ = [
    "TextNormalizer",
    "canonical_punctuation",
    "is_punctuation",
    "is_word_char",
    "slugify_token",
]

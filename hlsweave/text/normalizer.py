"""Text normalization and tokenization stage.

Responsibilities:
- Fold typographic variants and diacritics into a canonical lowercase form.
- Split canonical text into word and punctuation tokens.

Tokenization uses explicit character classification rather than a regex so
that word boundaries do not depend on regex engine Unicode semantics.
"""

from __future__ import annotations

import unicodedata

_INVISIBLE_CHARACTERS = ("\ufeff", "\u200b", "\u200c", "\u200d")

_TYPOGRAPHIC_VARIANTS = {
    "\u2018": "'",
    "\u2019": "'",
    "\u201a": "'",
    "\u201b": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u201e": '"',
    "\u201f": '"',
    "\u2032": "'",
    "\u2033": '"',
    "`": "'",
    "\u00b4": "'",
    "\u2013": "-",
    "\u2014": "-",
}

_COMBINING_MARKS_START = "\u0300"
_COMBINING_MARKS_END = "\u036f"

_WORD_JOINERS = frozenset({"'", "-"})


def is_word_char(character: str) -> bool:
    """Return whether a character belongs to the word class (letters, digits, `_`)."""

    return character.isalnum() or character == "_"


def _is_word_run_char(character: str) -> bool:
    """Return whether a character may appear inside a word token."""

    return is_word_char(character) or character in _WORD_JOINERS


def is_punctuation(token: str) -> bool:
    """Return whether a token consists only of non-word, non-space characters.

    A lone apostrophe or hyphen is punctuation even though both may appear
    inside word tokens.
    """

    if not token:
        return False
    return all(not is_word_char(ch) and not ch.isspace() for ch in token)


class TextNormalizer:
    """Normalize raw text into the canonical token sequence."""

    def canonicalize(self, text: str) -> str:
        """Return folded lowercase text before tokenization."""

        for character in _INVISIBLE_CHARACTERS:
            text = text.replace(character, "")
        for variant, replacement in _TYPOGRAPHIC_VARIANTS.items():
            text = text.replace(variant, replacement)
        decomposed = unicodedata.normalize("NFD", text)
        stripped = "".join(
            ch
            for ch in decomposed
            if not _COMBINING_MARKS_START <= ch <= _COMBINING_MARKS_END
        )
        return stripped.lower()

    def tokenize(self, text: str) -> list[str]:
        """Split canonical text into word runs and single punctuation characters."""

        tokens: list[str] = []
        word: list[str] = []
        for character in text:
            if _is_word_run_char(character):
                word.append(character)
                continue
            if word:
                tokens.append("".join(word))
                word = []
            if not character.isspace():
                tokens.append(character)
        if word:
            tokens.append("".join(word))
        return tokens

    def normalize(self, text: str) -> list[str]:
        """Canonicalize and tokenize raw text."""

        return self.tokenize(self.canonicalize(text))

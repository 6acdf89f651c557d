"""Deterministic key helpers for static clip lookup.

Responsibilities:
- Map word tokens to the slug keys used by the static word clip catalog.
- Fold punctuation variants onto the keys of the punctuation clip catalog.
"""

from __future__ import annotations

import re

_PUNCTUATION_VARIANTS = {
    "\u201c": '"',
    "\u201d": '"',
    "\u2018": "'",
    "\u2019": "'",
    "\u2013": "-",
    "\u2014": "-",
}


def slugify_token(token: str) -> str:
    """Return the word clip key: every character outside `[a-z0-9]` becomes `_`."""

    return re.sub(r"[^a-z0-9]", "_", token)


def canonical_punctuation(token: str) -> str:
    """Return the catalog key for a punctuation token."""

    return _PUNCTUATION_VARIANTS.get(token, token)

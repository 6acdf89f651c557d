"""Greedy longest-phrase matching over normalized tokens.

Responsibilities:
- Find non-overlapping phrase matches left to right, longest phrase first.
- Keep punctuation out of phrases; punctuation is never covered by a match.
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models.datatypes import Manifest, Match
from ..text.normalizer import is_punctuation

DEFAULT_MAX_PHRASE_LENGTH = 10


class PhraseMatcher:
    """Match token runs against phrases that have at least one clip."""

    def __init__(self, manifest: Manifest, max_phrase_length: int = DEFAULT_MAX_PHRASE_LENGTH) -> None:
        """Bind the phrase catalog and the phrase length bound."""

        if max_phrase_length <= 0:
            raise ValueError("`max_phrase_length` must be a positive integer.")
        self._manifest = manifest
        self._max_phrase_length = max_phrase_length

    def match(self, tokens: Sequence[str]) -> list[Match]:
        """Return ordered, non-overlapping phrase matches for a token sequence."""

        matches: list[Match] = []
        index = 0
        while index < len(tokens):
            if is_punctuation(tokens[index]):
                index += 1
                continue

            found = self._longest_match_at(tokens, index)
            if found is None:
                index += 1
                continue
            matches.append(found)
            index = found.end
        return matches

    def _longest_match_at(self, tokens: Sequence[str], start: int) -> Match | None:
        """Return the longest matchable phrase starting at `start`, if any."""

        max_length = min(self._max_phrase_length, len(tokens) - start)
        for length in range(max_length, 0, -1):
            candidate_tokens = self._word_run(tokens, start, length)
            if len(candidate_tokens) != length:
                continue
            candidate = " ".join(candidate_tokens)
            if self._manifest.has_phrase(candidate):
                return Match(phrase=candidate, start=start, end=start + length)
        return None

    @staticmethod
    def _word_run(tokens: Sequence[str], start: int, length: int) -> list[str]:
        """Collect up to `length` word tokens from `start`, stopping at punctuation."""

        run: list[str] = []
        for token in tokens[start : start + length]:
            if is_punctuation(token):
                break
            run.append(token)
        return run

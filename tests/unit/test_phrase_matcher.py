"""Unit tests for greedy longest-phrase matching."""

from __future__ import annotations

import pytest

from hlsweave.models.datatypes import Manifest, Match
from hlsweave.pipeline.matcher import PhraseMatcher


def test_longest_phrase_wins_over_shorter_suffix(sample_manifest: Manifest) -> None:
    """`good morning` must be one match, never `good` + `morning`."""

    matches = PhraseMatcher(sample_manifest).match(["good", "morning"])

    assert matches == [Match(phrase="good morning", start=0, end=2)]


def test_shorter_phrase_matches_when_longer_is_absent(sample_manifest: Manifest) -> None:
    """A shorter phrase should match when no longer phrase exists."""

    matches = PhraseMatcher(sample_manifest).match(["morning", "good", "foo"])

    assert matches == [Match(phrase="morning", start=0, end=1)]


def test_punctuation_interrupts_phrase_candidates(sample_manifest: Manifest) -> None:
    """A phrase may not span punctuation, and punctuation is never covered."""

    matches = PhraseMatcher(sample_manifest).match(["hello", ",", "world", "hello", "world", "."])

    assert matches == [Match(phrase="hello world", start=3, end=5)]


def test_phrase_without_clips_is_not_matchable(sample_manifest: Manifest) -> None:
    """Dictionary membership alone is not enough; the clip pool must be non-empty."""

    assert PhraseMatcher(sample_manifest).match(["orphan", "phrase"]) == []


def test_phrase_missing_from_phrase_map_is_not_matchable(sample_manifest: Manifest) -> None:
    """Clips alone are not enough; the phrase must be known."""

    assert PhraseMatcher(sample_manifest).match(["unlisted"]) == []


def test_max_phrase_length_caps_candidates(sample_manifest: Manifest) -> None:
    """Phrases longer than the configured cap should not match."""

    matches = PhraseMatcher(sample_manifest, max_phrase_length=1).match(["good", "morning"])

    assert matches == [Match(phrase="morning", start=1, end=2)]


def test_matches_are_sorted_and_non_overlapping(sample_manifest: Manifest) -> None:
    """Matches should be ordered by start and never overlap."""

    tokens = [
        "good", "morning", "morning", ",", "hello", "world", "foo",
        "good", "morning", "hello", "world", "!", "morning",
    ]

    matches = PhraseMatcher(sample_manifest).match(tokens)

    assert [match.phrase for match in matches] == [
        "good morning",
        "morning",
        "hello world",
        "good morning",
        "hello world",
        "morning",
    ]
    for previous, current in zip(matches, matches[1:]):
        assert previous.end <= current.start
    assert all(match.end > match.start for match in matches)


def test_empty_tokens_produce_no_matches(sample_manifest: Manifest) -> None:
    """No tokens should produce no matches."""

    assert PhraseMatcher(sample_manifest).match([]) == []


def test_rejects_non_positive_max_phrase_length(sample_manifest: Manifest) -> None:
    """A zero phrase length cap should raise `ValueError`."""

    with pytest.raises(ValueError, match="max_phrase_length"):
        PhraseMatcher(sample_manifest, max_phrase_length=0)

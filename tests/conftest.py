"""Shared pytest fixtures for the full hlsweave test suite."""

from __future__ import annotations

from datetime import datetime, timezone
import json
from pathlib import Path

import pytest

from hlsweave.io.manifest_loader import manifest_from_payload
from hlsweave.models.datatypes import Manifest

FIXED_GENERATION_TIME = datetime(2024, 5, 1, 12, 30, 0, 250000, tzinfo=timezone.utc)


def _clip(filename: str, duration: float) -> dict[str, object]:
    return {"filename": filename, "duration": duration}


@pytest.fixture
def sample_manifest_payload() -> dict[str, object]:
    """Provide a small manifest payload covering phrase, word, and punctuation pools."""

    return {
        "phraseMap": {
            "hello world": True,
            "good morning": True,
            "morning": True,
            "orphan phrase": True,
            "unlisted": False,
        },
        "phraseClips": {
            "hello world": [_clip("hw.ts", 2.0)],
            "good morning": [_clip("gm_1.ts", 1.5), _clip("gm_2.ts", 1.6)],
            "morning": [_clip("m.ts", 0.9)],
            "orphan phrase": [],
            "unlisted": [_clip("unlisted.ts", 1.0)],
        },
        "staticClips": {
            "words": {
                "foo": _clip("foo.ts", 0.5),
                "good": _clip("good.ts", 0.4),
                "cafe_s": _clip("cafe_s.ts", 0.6),
            },
            "punctuation": {
                ".": _clip("period.ts", 0.15),
                ",": _clip("comma.ts", 0.1),
                '"': _clip("quote.ts", 0.1),
            },
        },
        "fixedTokens": ["hello", "world", "foo", "."],
        "fixedText": "Hello world foo.",
    }


@pytest.fixture
def sample_manifest(sample_manifest_payload: dict[str, object]) -> Manifest:
    """Provide the sample payload as a parsed `Manifest`."""

    return manifest_from_payload(sample_manifest_payload)


@pytest.fixture
def manifest_file(tmp_path: Path, sample_manifest_payload: dict[str, object]) -> Path:
    """Write the sample manifest to a temporary JSON file."""

    path = tmp_path / "clips-manifest.json"
    path.write_text(json.dumps(sample_manifest_payload), encoding="utf-8")
    return path


@pytest.fixture
def fixed_clock():
    """Provide a clock returning a constant UTC generation time."""

    return lambda: FIXED_GENERATION_TIME

"""Clip manifest loading.

Responsibilities:
- Read the manifest JSON file once and convert it into an immutable `Manifest`.
- Map missing, unreadable, and malformed manifests to `manifest` stage errors.

Expected payload keys (all optional except the clip catalogs being mappings):
`phraseMap`, `phraseClips`, `staticClips.words`, `staticClips.punctuation`,
`fixedTokens`, `fixedText`.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ..errors import ManifestError
from ..models.datatypes import CLIP_TYPE_PHRASE, CLIP_TYPE_STATIC, Clip, Manifest
from ..telemetry.logger import RunLogger


def _invalid(detail: str) -> ManifestError:
    return ManifestError(detail)


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    """Return `value` when it is a JSON object, treating `null` as empty."""

    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _invalid(f"Manifest field `{label}` must be an object.")
    return value


def _parse_clip(entry: Any, label: str, clip_type: str) -> Clip:
    """Parse one `{filename, duration}` clip entry."""

    if not isinstance(entry, Mapping):
        raise _invalid(f"Manifest clip `{label}` must be an object.")

    filename = entry.get("filename")
    if not isinstance(filename, str) or not filename.strip():
        raise _invalid(f"Manifest clip `{label}` requires a non-empty `filename`.")

    duration = entry.get("duration")
    if isinstance(duration, bool) or not isinstance(duration, int | float):
        raise _invalid(f"Manifest clip `{label}` requires a numeric `duration`.")
    if duration < 0 or not math.isfinite(duration):
        raise _invalid(f"Manifest clip `{label}` has an invalid duration `{duration}`.")

    return Clip(filename=filename, duration=float(duration), type=clip_type)


def _parse_static_pool(payload: Mapping[str, Any], label: str) -> Mapping[str, Clip]:
    return MappingProxyType(
        {
            str(key): _parse_clip(entry, f"{label}.{key}", CLIP_TYPE_STATIC)
            for key, entry in payload.items()
        }
    )


def _parse_tokens(value: Any) -> tuple[str, ...] | None:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(token, str) for token in value):
        raise _invalid("Manifest field `fixedTokens` must be a list of strings.")
    return tuple(value)


def manifest_from_payload(payload: Any) -> Manifest:
    """Convert a decoded manifest JSON payload into a `Manifest`."""

    if not isinstance(payload, Mapping):
        raise _invalid("Manifest root must be a JSON object.")

    phrase_map = _require_mapping(payload.get("phraseMap"), "phraseMap")
    phrase_clip_payload = _require_mapping(payload.get("phraseClips"), "phraseClips")
    static_payload = _require_mapping(payload.get("staticClips"), "staticClips")

    phrase_clips: dict[str, tuple[Clip, ...]] = {}
    for phrase, entries in phrase_clip_payload.items():
        if not isinstance(entries, list):
            raise _invalid(f"Manifest field `phraseClips.{phrase}` must be a list.")
        phrase_clips[str(phrase)] = tuple(
            _parse_clip(entry, f"phraseClips.{phrase}[{position}]", CLIP_TYPE_PHRASE)
            for position, entry in enumerate(entries)
        )

    fixed_text = payload.get("fixedText")
    if fixed_text is not None and not isinstance(fixed_text, str):
        raise _invalid("Manifest field `fixedText` must be a string.")

    return Manifest(
        phrase_map=frozenset(str(phrase) for phrase, known in phrase_map.items() if known),
        phrase_clips=MappingProxyType(phrase_clips),
        word_clips=_parse_static_pool(
            _require_mapping(static_payload.get("words"), "staticClips.words"),
            "staticClips.words",
        ),
        punctuation_clips=_parse_static_pool(
            _require_mapping(static_payload.get("punctuation"), "staticClips.punctuation"),
            "staticClips.punctuation",
        ),
        fixed_tokens=_parse_tokens(payload.get("fixedTokens")),
        fixed_text=fixed_text,
    )


def load_manifest(path: Path, run_logger: RunLogger | None = None) -> Manifest:
    """Load and validate the manifest file at `path`, logging catalog counts."""

    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise _invalid(f"Manifest file not found: `{path}`.") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise _invalid(f"Failed to read manifest `{path}`: {exc}") from exc

    try:
        payload = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        raise _invalid(f"Manifest `{path}` is not valid JSON: {exc}") from exc

    manifest = manifest_from_payload(payload)
    if run_logger is not None:
        run_logger.log_event("manifest", "loaded", path=path, **manifest.counts())
        if manifest.fixed_tokens is None and manifest.fixed_text is None:
            run_logger.log_warning("manifest", "missing_fixed_tokens", path=path)
    return manifest

"""Artifact storage for generated sessions.

Responsibilities:
- Persist one session's playlist and script under deterministic file names.
- Keep JSON artifacts stable (sorted keys, UTF-8) for diffing between runs.
"""

from __future__ import annotations

from dataclasses import asdict
import json
from pathlib import Path

from ..models.datatypes import GenerationResult


class ArtifactStore:
    """Filesystem-backed store for `<session>.m3u8` and `<session>.script.json`."""

    def __init__(self, root: Path) -> None:
        """Initialize the store with a root output directory."""

        self.root = root

    def playlist_path(self, session_id: str) -> Path:
        return self.root / f"{session_id}.m3u8"

    def script_path(self, session_id: str) -> Path:
        return self.root / f"{session_id}.script.json"

    def save_result(self, result: GenerationResult) -> tuple[Path, Path]:
        """Write playlist text and script JSON, returning both paths."""

        self.root.mkdir(parents=True, exist_ok=True)

        playlist_path = self.playlist_path(result.session_id)
        playlist_path.write_text(result.playlist, encoding="utf-8")

        script_path = self.script_path(result.session_id)
        script_path.write_text(
            json.dumps(script_payload(result), ensure_ascii=False, indent=2, sort_keys=True),
            encoding="utf-8",
        )
        return playlist_path, script_path


def script_payload(result: GenerationResult) -> dict[str, object]:
    """Serialize a generation result's script, matches, and stats."""

    return {
        "sessionId": result.session_id,
        "stats": result.stats.as_dict(),
        "script": [asdict(item) for item in result.script],
        "matches": [asdict(match) for match in result.matches],
        "droppedTokens": [asdict(dropped) for dropped in result.dropped_tokens],
    }

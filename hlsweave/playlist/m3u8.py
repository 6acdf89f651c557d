"""M3U8 (HLS VOD) playlist serialization.

Responsibilities:
- Render a script into a finite VOD playlist with one discontinuity per segment.
- Resolve clip URLs as site-relative paths or under a remote base URL.

Every segment, the opener included, is preceded by `#EXT-X-DISCONTINUITY`
because clips are cut from unrelated sources with unrelated timestamps.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from ..models.datatypes import CLIP_TYPE_PHRASE, CLIP_TYPE_STATIC, ScriptItem

_PHRASE_CLIP_DIR = "trimmed"
_STATIC_CLIP_DIR = "static"


def clip_url(filename: str, clip_type: str, base_url: str | None = None) -> str:
    """Return the playback URL for a clip file of the given type."""

    directory = _PHRASE_CLIP_DIR if clip_type == CLIP_TYPE_PHRASE else _STATIC_CLIP_DIR
    path = f"/hls_clips/{directory}/{filename}"
    if base_url:
        return f"{base_url.rstrip('/')}{path}"
    return path


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    """Format a timestamp as UTC ISO-8601 with milliseconds and a `Z` suffix."""

    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PlaylistSerializer:
    """Render scripts into HLS playlist text."""

    def __init__(
        self,
        *,
        opener_filename: str = "opener.ts",
        opener_duration: float = 8.08,
        target_duration: int = 10,
        base_url: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Configure the opener segment, URL base, and generation clock."""

        self._opener_filename = opener_filename
        self._opener_duration = opener_duration
        self._target_duration = target_duration
        self._base_url = base_url
        self._clock = clock

    def serialize(self, script: Sequence[ScriptItem], session_id: str) -> str:
        """Return playlist text for a script, opener first."""

        lines = [
            "#EXTM3U",
            "#EXT-X-VERSION:3",
            f"#EXT-X-TARGETDURATION:{self._target_duration}",
            "#EXT-X-PLAYLIST-TYPE:VOD",
            f"# Session: {session_id}",
            f"# Generated: {_iso_timestamp(self._clock())}",
            f"# Clips: {len(script) + 1}",
        ]

        lines.extend(
            self._segment(
                self._opener_duration,
                clip_url(self._opener_filename, CLIP_TYPE_STATIC, self._base_url),
            )
        )
        total_duration = self._opener_duration

        for item in script:
            lines.extend(
                self._segment(item.duration, clip_url(item.filename, item.type, self._base_url))
            )
            total_duration += item.duration

        lines.append(f"# Total duration: {total_duration:.1f}s")
        lines.append("#EXT-X-ENDLIST")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _segment(duration: float, url: str) -> list[str]:
        return ["#EXT-X-DISCONTINUITY", f"#EXTINF:{duration:.3f},", url]

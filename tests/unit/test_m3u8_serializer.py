"""Unit tests for HLS playlist serialization."""

from __future__ import annotations

from hlsweave.models.datatypes import ScriptItem
from hlsweave.playlist.m3u8 import PlaylistSerializer, clip_url

SCRIPT = [
    ScriptItem(text="hello world", filename="hw.ts", duration=2.0, type="phrase"),
    ScriptItem(text="foo", filename="foo.ts", duration=0.5, type="static"),
]


def _lines(playlist: str) -> list[str]:
    return playlist.rstrip("\n").split("\n")


def test_playlist_header_comments_and_trailer(fixed_clock) -> None:
    """The playlist should open with HLS headers and end with `#EXT-X-ENDLIST`."""

    playlist = PlaylistSerializer(clock=fixed_clock).serialize(SCRIPT, "abc123")
    lines = _lines(playlist)

    assert lines[:7] == [
        "#EXTM3U",
        "#EXT-X-VERSION:3",
        "#EXT-X-TARGETDURATION:10",
        "#EXT-X-PLAYLIST-TYPE:VOD",
        "# Session: abc123",
        "# Generated: 2024-05-01T12:30:00.250Z",
        "# Clips: 3",
    ]
    assert lines[-2:] == ["# Total duration: 10.6s", "#EXT-X-ENDLIST"]
    assert playlist.endswith("#EXT-X-ENDLIST\n")


def test_opener_precedes_script_segments_with_relative_urls(fixed_clock) -> None:
    """The opener segment should come first, using site-relative URLs."""

    lines = _lines(PlaylistSerializer(clock=fixed_clock).serialize(SCRIPT, "abc123"))

    assert lines[7:16] == [
        "#EXT-X-DISCONTINUITY",
        "#EXTINF:8.080,",
        "/hls_clips/static/opener.ts",
        "#EXT-X-DISCONTINUITY",
        "#EXTINF:2.000,",
        "/hls_clips/trimmed/hw.ts",
        "#EXT-X-DISCONTINUITY",
        "#EXTINF:0.500,",
        "/hls_clips/static/foo.ts",
    ]


def test_every_extinf_is_wrapped_by_discontinuity_and_url(fixed_clock) -> None:
    """Each `#EXTINF` should follow a discontinuity and precede its URL."""

    lines = _lines(PlaylistSerializer(clock=fixed_clock).serialize(SCRIPT * 3, "s"))

    extinf_positions = [index for index, line in enumerate(lines) if line.startswith("#EXTINF:")]
    assert len(extinf_positions) == len(SCRIPT) * 3 + 1
    for position in extinf_positions:
        assert lines[position - 1] == "#EXT-X-DISCONTINUITY"
        assert lines[position + 1].startswith("/hls_clips/")


def test_empty_script_still_plays_the_opener(fixed_clock) -> None:
    """An empty script should still render the opener segment."""

    lines = _lines(PlaylistSerializer(clock=fixed_clock).serialize([], "s"))

    assert "# Clips: 1" in lines
    assert sum(1 for line in lines if line.startswith("#EXTINF:")) == 1
    assert lines[-2:] == ["# Total duration: 8.1s", "#EXT-X-ENDLIST"]


def test_base_url_produces_absolute_urls(fixed_clock) -> None:
    """A configured base URL should prefix every segment URL."""

    serializer = PlaylistSerializer(
        base_url="https://cdn.example.com",
        opener_filename="intro.ts",
        opener_duration=4.0,
        target_duration=6,
        clock=fixed_clock,
    )

    lines = _lines(serializer.serialize(SCRIPT, "s"))

    assert "#EXT-X-TARGETDURATION:6" in lines
    assert "https://cdn.example.com/hls_clips/static/intro.ts" in lines
    assert "https://cdn.example.com/hls_clips/trimmed/hw.ts" in lines
    assert "https://cdn.example.com/hls_clips/static/foo.ts" in lines


def test_clip_url_strips_trailing_base_slash() -> None:
    """Clip URLs should not contain a doubled slash after the base."""

    assert clip_url("x.ts", "phrase", "https://cdn.example.com/") == (
        "https://cdn.example.com/hls_clips/trimmed/x.ts"
    )
    assert clip_url("x.ts", "static") == "/hls_clips/static/x.ts"

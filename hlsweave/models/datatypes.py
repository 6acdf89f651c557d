"""Core datatypes shared across hlsweave modules.

Responsibilities:
- Represent immutable records exchanged between generation stages.
- Provide explicit typing for reproducibility and JSON serialization.

Key types:
- `Clip`, `Manifest`, `Match`, `ScriptItem`, `DroppedToken`,
  `GenerationStats`, `GenerationResult`, and `Session`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

CLIP_TYPE_PHRASE = "phrase"
CLIP_TYPE_STATIC = "static"


@dataclass(frozen=True, slots=True)
class Clip:
    """A pre-cut video segment available for playback.

    Attributes:
        filename: File name of the segment inside its clip directory.
        duration: Segment duration in seconds.
        type: `phrase` for phrase clips, `static` for word/punctuation fallbacks.
    """

    filename: str
    duration: float
    type: str = CLIP_TYPE_STATIC


@dataclass(frozen=True, slots=True)
class Manifest:
    """Read-only clip catalog loaded once per process.

    Attributes:
        phrase_map: Known phrase strings.
        phrase_clips: Clip pools keyed by phrase string.
        word_clips: Static word clips keyed by slugified word.
        punctuation_clips: Static punctuation clips keyed by the literal character.
        fixed_tokens: Optional precomputed token sequence for the served text.
        fixed_text: Optional raw source text.
    """

    phrase_map: frozenset[str]
    phrase_clips: Mapping[str, tuple[Clip, ...]]
    word_clips: Mapping[str, Clip]
    punctuation_clips: Mapping[str, Clip]
    fixed_tokens: tuple[str, ...] | None = None
    fixed_text: str | None = None

    def has_phrase(self, phrase: str) -> bool:
        """Return whether a phrase is known and has at least one clip."""

        return phrase in self.phrase_map and bool(self.phrase_clips.get(phrase))

    def clips_for(self, phrase: str) -> tuple[Clip, ...]:
        """Return the clip pool for a phrase, empty when unknown."""

        return self.phrase_clips.get(phrase, ())

    def counts(self) -> dict[str, int]:
        """Return catalog size counters for startup logging and inspection."""

        return {
            "phrases": len(self.phrase_map),
            "phrases_with_clips": sum(1 for pool in self.phrase_clips.values() if pool),
            "word_clips": len(self.word_clips),
            "punctuation_clips": len(self.punctuation_clips),
            "fixed_tokens": len(self.fixed_tokens) if self.fixed_tokens is not None else 0,
        }


@dataclass(frozen=True, slots=True)
class Match:
    """Phrase match over the half-open token range `[start, end)`."""

    phrase: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError("Match `end` must be greater than `start`.")


@dataclass(frozen=True, slots=True)
class ScriptItem:
    """One emitted clip reference on the playback timeline."""

    text: str
    filename: str
    duration: float
    type: str


@dataclass(frozen=True, slots=True)
class DroppedToken:
    """Token left out of the script because no clip could be resolved."""

    index: int
    token: str


@dataclass(frozen=True, slots=True)
class GenerationStats:
    """Summary counters for one generated script.

    Attributes:
        total_tokens: Number of input tokens.
        matched_phrases: Number of phrase matches.
        total_clips: Number of script items.
        phrase_clips: Number of `phrase` script items.
        static_clips: Number of `static` script items.
        total_duration: Sum of script item durations, opener excluded.
        dropped_tokens: Tokens or matches that produced no script item.
    """

    total_tokens: int
    matched_phrases: int
    total_clips: int
    phrase_clips: int
    static_clips: int
    total_duration: float
    dropped_tokens: int = 0

    @classmethod
    def from_script(
        cls,
        tokens: tuple[str, ...],
        matches: tuple[Match, ...],
        script: tuple[ScriptItem, ...],
        dropped_tokens: int = 0,
    ) -> GenerationStats:
        """Reduce a script into summary counters."""

        return cls(
            total_tokens=len(tokens),
            matched_phrases=len(matches),
            total_clips=len(script),
            phrase_clips=sum(1 for item in script if item.type == CLIP_TYPE_PHRASE),
            static_clips=sum(1 for item in script if item.type == CLIP_TYPE_STATIC),
            total_duration=sum(item.duration for item in script),
            dropped_tokens=dropped_tokens,
        )

    def as_dict(self) -> dict[str, object]:
        """Return camelCase counters for JSON responses and artifacts."""

        return {
            "totalTokens": self.total_tokens,
            "matchedPhrases": self.matched_phrases,
            "totalClips": self.total_clips,
            "phraseClips": self.phrase_clips,
            "staticClips": self.static_clips,
            "totalDuration": self.total_duration,
            "droppedTokens": self.dropped_tokens,
        }


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Output of one playlist generation call."""

    session_id: str
    playlist: str
    script: tuple[ScriptItem, ...]
    tokens: tuple[str, ...]
    matches: tuple[Match, ...]
    stats: GenerationStats
    dropped_tokens: tuple[DroppedToken, ...] = field(default_factory=tuple)


@dataclass(slots=True)
class Session:
    """Stored generation output keyed by session id.

    Attributes:
        session_id: Random session identifier, also the generation seed.
        created: Creation time in epoch seconds.
        playlist: Serialized M3U8 playlist text.
        script: Ordered clip references.
        tokens: Input tokens.
        matches: Phrase matches.
        last_accessed: Epoch seconds of the last playlist read, if any.
    """

    session_id: str
    created: float
    playlist: str
    script: tuple[ScriptItem, ...]
    tokens: tuple[str, ...]
    matches: tuple[Match, ...]
    last_accessed: float | None = None

    @classmethod
    def from_result(cls, result: GenerationResult, created: float) -> Session:
        """Create a session record from a generation result."""

        return cls(
            session_id=result.session_id,
            created=created,
            playlist=result.playlist,
            script=result.script,
            tokens=result.tokens,
            matches=result.matches,
        )

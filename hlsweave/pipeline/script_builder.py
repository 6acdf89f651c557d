"""Script assembly from phrase matches and static fallbacks.

Responsibilities:
- Walk tokens in order, emitting one phrase clip per match start.
- Resolve word and punctuation fallbacks for tokens outside every match.
- Report tokens that cannot be resolved instead of failing the build.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..models.datatypes import (
    CLIP_TYPE_PHRASE,
    CLIP_TYPE_STATIC,
    Clip,
    Manifest,
    Match,
    ScriptItem,
)
from ..text.normalizer import is_punctuation
from ..text.slug import canonical_punctuation, slugify_token
from .selector import ClipSelector

_DEFAULT_PUNCTUATION_KEY = "."

MissCallback = Callable[[int, str], None]


class ScriptBuilder:
    """Build the ordered clip script for one seed."""

    def __init__(self, manifest: Manifest) -> None:
        """Bind the clip catalog used for phrase pools and static fallbacks."""

        self._manifest = manifest

    def build(
        self,
        tokens: Sequence[str],
        matches: Sequence[Match],
        seed: str,
        on_miss: MissCallback | None = None,
    ) -> list[ScriptItem]:
        """Return script items covering every token at most once.

        Args:
            tokens: Normalized token sequence.
            matches: Non-overlapping phrase matches over `tokens`.
            seed: Session seed; phrase picks use `seed + phrase`.
            on_miss: Called with `(index, text)` for every token or match that
                produced no script item.
        """

        selector = ClipSelector()
        matches_by_start = {match.start: match for match in matches}
        covered = {
            position
            for match in matches
            for position in range(match.start, match.end)
        }

        script: list[ScriptItem] = []
        index = 0
        while index < len(tokens):
            match = matches_by_start.get(index)
            if match is not None:
                clip = selector.select(self._manifest.clips_for(match.phrase), seed + match.phrase)
                if clip is not None:
                    script.append(self._item(match.phrase, clip, CLIP_TYPE_PHRASE))
                elif on_miss is not None:
                    on_miss(index, match.phrase)
                index = match.end
                continue

            if index not in covered:
                token = tokens[index]
                clip = self.resolve_static_clip(token)
                if clip is not None:
                    script.append(self._item(token, clip, CLIP_TYPE_STATIC))
                elif on_miss is not None:
                    on_miss(index, token)
            index += 1
        return script

    def resolve_static_clip(self, token: str) -> Clip | None:
        """Return the word or punctuation fallback clip for one token."""

        if is_punctuation(token):
            punctuation = self._manifest.punctuation_clips
            return punctuation.get(canonical_punctuation(token)) or punctuation.get(
                _DEFAULT_PUNCTUATION_KEY
            )
        return self._manifest.word_clips.get(slugify_token(token))

    @staticmethod
    def _item(text: str, clip: Clip, clip_type: str) -> ScriptItem:
        return ScriptItem(
            text=text,
            filename=clip.filename,
            duration=clip.duration,
            type=clip_type,
        )

"""Playlist generation orchestration.

Responsibilities:
- Resolve the input token sequence for a generation call.
- Run match, script, and serialize stages for one session seed.
- Collect dropped tokens and summary statistics for the caller.

Key types:
- `PlaylistGenerator`: generation facade bound to one manifest and config.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime

from ..config import GeneratorConfig
from ..errors import PipelineStageError
from ..models.datatypes import (
    DroppedToken,
    GenerationResult,
    GenerationStats,
    Manifest,
    Match,
    ScriptItem,
)
from ..playlist.m3u8 import PlaylistSerializer
from ..telemetry.logger import RunLogger
from ..text.normalizer import TextNormalizer
from ..text.slug import slugify_token
from .matcher import PhraseMatcher
from .script_builder import ScriptBuilder
from .telemetry import PipelineTelemetryMixin


class PlaylistGenerator(PipelineTelemetryMixin):
    """Generate per-session playlists from a read-only manifest.

    The generator holds no per-session state: each `generate` call builds its
    own clip selector, so concurrent calls for different seeds are independent.
    """

    def __init__(
        self,
        manifest: Manifest,
        config: GeneratorConfig | None = None,
        run_logger: RunLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Bind manifest, settings, optional logger, and optional playlist clock."""

        self._manifest = manifest
        self._config = config or GeneratorConfig()
        self._config.validate()
        self._run_logger = run_logger
        self._normalizer = TextNormalizer()
        self._matcher = PhraseMatcher(manifest, self._config.max_phrase_length)
        self._builder = ScriptBuilder(manifest)
        serializer_options: dict[str, object] = {
            "opener_filename": self._config.opener_filename,
            "opener_duration": self._config.opener_duration,
            "target_duration": self._config.target_duration,
            "base_url": self._config.base_url,
        }
        if clock is not None:
            serializer_options["clock"] = clock
        self._serializer = PlaylistSerializer(**serializer_options)

    def generate(
        self,
        session_id: str,
        *,
        tokens: Sequence[str] | None = None,
        text: str | None = None,
    ) -> GenerationResult:
        """Generate one playlist seeded by `session_id`.

        Token source precedence: explicit `tokens`, explicit `text`, the
        manifest's `fixedTokens`, then the manifest's `fixedText`.

        Raises:
            PipelineStageError: If no token source is available.
        """

        context = {"session": session_id}
        resolved_tokens = self._run_stage(
            "tokenize",
            lambda: self._resolve_tokens(tokens, text),
            lambda result: {"tokens": len(result)},
            context,
        )
        matches = self._run_stage(
            "match",
            lambda: tuple(self._matcher.match(resolved_tokens)),
            lambda result: {"matches": len(result)},
            context,
        )
        dropped: list[DroppedToken] = []
        script = self._run_stage(
            "script",
            lambda: self._build_script(resolved_tokens, matches, session_id, dropped, context),
            lambda result: {"clips": len(result), "dropped": len(dropped)},
            context,
        )
        playlist = self._run_stage(
            "serialize",
            lambda: self._serializer.serialize(script, session_id),
            context=context,
        )

        stats = GenerationStats.from_script(
            resolved_tokens, matches, script, dropped_tokens=len(dropped)
        )
        return GenerationResult(
            session_id=session_id,
            playlist=playlist,
            script=script,
            tokens=resolved_tokens,
            matches=matches,
            stats=stats,
            dropped_tokens=tuple(dropped),
        )

    def _resolve_tokens(
        self, tokens: Sequence[str] | None, text: str | None
    ) -> tuple[str, ...]:
        """Pick the token sequence for this call."""

        if tokens is not None:
            return tuple(tokens)
        if text is not None:
            return tuple(self._normalizer.normalize(text))
        if self._manifest.fixed_tokens is not None:
            return self._manifest.fixed_tokens
        if self._manifest.fixed_text is not None:
            return tuple(self._normalizer.normalize(self._manifest.fixed_text))
        raise PipelineStageError(
            stage="tokenize",
            detail="No fixed text available in manifest and no input text supplied.",
            hint="Add `fixedTokens` or `fixedText` to the manifest, or pass `--text`.",
        )

    def _build_script(
        self,
        tokens: tuple[str, ...],
        matches: tuple[Match, ...],
        seed: str,
        dropped: list[DroppedToken],
        context: Mapping[str, object],
    ) -> tuple[ScriptItem, ...]:
        def record_miss(index: int, token: str) -> None:
            dropped.append(DroppedToken(index=index, token=token))
            if self._run_logger is not None:
                self._run_logger.log_warning(
                    "script",
                    "token_dropped",
                    index=index,
                    token=token,
                    slug=slugify_token(token),
                    **context,
                )

        return tuple(self._builder.build(tokens, matches, seed, on_miss=record_miss))

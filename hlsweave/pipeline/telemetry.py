"""Stage telemetry helper methods for the generation pipeline.

Responsibilities:
- Attach `step=<index>/<total>` metadata to known stage start events.
- Emit stage start/complete/failure events.
- Wrap stage actions with consistent telemetry hooks.

Context (for example `session=<id>`) is passed per call so that concurrent
generations sharing one instance never see each other's context.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeVar

from ..telemetry.logger import RunLogger

_StageResult = TypeVar("_StageResult")


class PipelineTelemetryMixin:
    """Provide stage-telemetry helper methods."""

    _PHASE_SEQUENCE = ("tokenize", "match", "script", "serialize")

    _run_logger: RunLogger | None

    def _stage_position(self, stage_name: str) -> tuple[int, int] | None:
        """Return 1-based stage index and total stage count for known stages."""

        try:
            index = self._PHASE_SEQUENCE.index(stage_name) + 1
        except ValueError:
            return None
        return index, len(self._PHASE_SEQUENCE)

    def _on_stage_start(self, stage_name: str, context: Mapping[str, object]) -> None:
        if self._run_logger is None:
            return
        start_context = dict(context)
        stage_position = self._stage_position(stage_name)
        if stage_position is not None:
            start_context["step"] = f"{stage_position[0]}/{stage_position[1]}"
        self._run_logger.log_stage_start(stage_name, **start_context)

    def _on_stage_complete(
        self, stage_name: str, context: Mapping[str, object], **summary: object
    ) -> None:
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage_name, **context, **summary)

    def _on_stage_failure(
        self, stage_name: str, exc: Exception, context: Mapping[str, object]
    ) -> None:
        """Emit stage-failure event with sanitized exception metadata."""

        if self._run_logger is not None:
            self._run_logger.log_stage_failure(
                stage_name, type(exc).__name__, **context
            )

    def _run_stage(
        self,
        stage_name: str,
        action: Callable[[], _StageResult],
        summarize: Callable[[_StageResult], dict[str, object]] | None = None,
        context: Mapping[str, object] | None = None,
    ) -> _StageResult:
        """Run one named stage and emit start/complete/failure telemetry events."""

        stage_context = context or {}
        self._on_stage_start(stage_name, stage_context)
        try:
            result = action()
        except Exception as exc:
            self._on_stage_failure(stage_name, exc, stage_context)
            raise
        self._on_stage_complete(
            stage_name, stage_context, **(summarize(result) if summarize else {})
        )
        return result

"""Domain exceptions for playlist generation and CLI diagnostics."""

from __future__ import annotations

_MANIFEST_HINT = (
    "Regenerate the clip manifest or point the `MANIFEST` argument/"
    "`HLSWEAVE_MANIFEST_PATH` at a valid file."
)


class PipelineStageError(RuntimeError):
    """Raised when one named generation stage cannot produce its output.

    Attributes:
        stage: Stage name (`config`, `manifest`, `tokenize`, `match`, `script`, `serialize`).
        detail: Human-readable failure description.
        hint: Optional remediation shown by the CLI.
    """

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class ManifestError(PipelineStageError):
    """Raised when the clip manifest is missing, unreadable, or malformed."""

    def __init__(self, detail: str, hint: str | None = _MANIFEST_HINT) -> None:
        super().__init__(stage="manifest", detail=detail, hint=hint)

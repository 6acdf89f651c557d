"""Unit tests for deterministic phase log lines."""

from __future__ import annotations

import io

from hlsweave.telemetry.logger import RunLogger


def test_stage_events_use_sorted_sanitized_context() -> None:
    """Log lines should carry sorted, shell-safe context values."""

    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.log_stage_start("match", session="abc", tokens=3)
    logger.log_warning("script", "token_dropped", token="don't stop", index=4)
    logger.log_stage_failure("serialize", "ValueError")

    assert sink.getvalue().splitlines() == [
        "[phase] level=INFO stage=match event=start session=abc tokens=3",
        "[phase] level=WARNING stage=script event=token_dropped index=4 token=don_t_stop",
        "[phase] level=ERROR stage=serialize event=failure error_type=ValueError",
    ]


def test_blank_context_values_render_as_none() -> None:
    """Blank context values should render as `none`."""

    sink = io.StringIO()

    RunLogger(sink=sink).log_event("manifest", "loaded", path="  ")

    assert sink.getvalue().strip() == "[phase] level=INFO stage=manifest event=loaded path=none"

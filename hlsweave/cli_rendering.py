"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
generation statistics, and manifest inspection.
"""

from __future__ import annotations

from typing import NoReturn

import typer

from .errors import PipelineStageError
from .models.datatypes import DroppedToken, GenerationStats


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, PipelineStageError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_generation_stats(stats: GenerationStats, *, err: bool = False) -> None:
    """Print script-level clip counters and duration."""

    typer.echo(f"Tokens: {stats.total_tokens}", err=err)
    typer.echo(f"Matched phrases: {stats.matched_phrases}", err=err)
    typer.echo(
        f"Clips: {stats.total_clips} (phrase {stats.phrase_clips}, static {stats.static_clips})",
        err=err,
    )
    typer.echo(f"Duration (s): {stats.total_duration:.1f}", err=err)
    typer.echo(f"Dropped tokens: {stats.dropped_tokens}", err=err)


def echo_dropped_tokens(dropped: tuple[DroppedToken, ...], *, err: bool = False) -> None:
    """Print one warning line per token missing from the script."""

    for entry in dropped:
        typer.secho(
            f"Dropped token #{entry.index}: {entry.token!r}",
            fg=typer.colors.YELLOW,
            err=err,
        )


def echo_manifest_counts(counts: dict[str, int]) -> None:
    """Print manifest catalog counters in a fixed order."""

    typer.echo(f"Phrases: {counts['phrases']}")
    typer.echo(f"Phrases with clips: {counts['phrases_with_clips']}")
    typer.echo(f"Word clips: {counts['word_clips']}")
    typer.echo(f"Punctuation clips: {counts['punctuation_clips']}")
    typer.echo(f"Fixed tokens: {counts['fixed_tokens']}")

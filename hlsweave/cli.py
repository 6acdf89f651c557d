"""Command-line interface for hlsweave.

Responsibilities:
- Expose user-facing commands for playlist generation and manifest inspection.
- Convert CLI arguments into `GeneratorConfig` and run the generator.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

import json
from pathlib import Path
import sys
from typing import Annotated

import typer

from .cli_rendering import (
    echo_dropped_tokens,
    echo_generation_stats,
    echo_manifest_counts,
    exit_with_command_error,
)
from .config import ConfigLoader, GeneratorConfig
from .errors import PipelineStageError
from .io.manifest_loader import load_manifest
from .io.storage import ArtifactStore
from .pipeline import PlaylistGenerator
from .sessions.store import new_session_id
from .telemetry.logger import RunLogger
from .text.normalizer import TextNormalizer

app = typer.Typer(
    name="hlsweave",
    no_args_is_help=True,
    help="hlsweave CLI.",
)


def _load_base_config(config_path: Path | None) -> GeneratorConfig:
    """Load YAML config when requested, else environment defaults."""

    try:
        if config_path is None:
            return ConfigLoader.from_env()
        return ConfigLoader.from_yaml(config_path)
    except FileNotFoundError as exc:
        raise PipelineStageError(
            stage="config",
            detail=f"Config file not found: `{config_path}`.",
            hint="Provide an existing path via `--config <path.yaml>`.",
        ) from exc
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=str(exc),
            hint="Fix config schema/values and rerun.",
        ) from exc


def _resolve_config(
    config_path: Path | None,
    manifest: Path | None,
    base_url: str | None,
    max_phrase_length: int | None,
) -> GeneratorConfig:
    """Apply explicit CLI overrides on top of the loaded config."""

    loaded = _load_base_config(config_path)
    config = GeneratorConfig(
        manifest_path=manifest if manifest is not None else loaded.manifest_path,
        max_phrase_length=(
            max_phrase_length if max_phrase_length is not None else loaded.max_phrase_length
        ),
        base_url=base_url if base_url is not None else loaded.base_url,
        opener_filename=loaded.opener_filename,
        opener_duration=loaded.opener_duration,
        target_duration=loaded.target_duration,
        session_ttl_seconds=loaded.session_ttl_seconds,
    )
    try:
        config.validate()
    except ValueError as exc:
        raise PipelineStageError(
            stage="config",
            detail=str(exc),
            hint="Check command-line overrides.",
        ) from exc
    return config


def _read_input_text(text: str | None, text_file: Path | None) -> str | None:
    """Return inline text or the contents of `--text-file`."""

    if text is not None and text_file is not None:
        raise PipelineStageError(
            stage="tokenize",
            detail="`--text` and `--text-file` cannot be used together.",
            hint="Pass the source text one way.",
        )
    if text_file is None:
        return text
    try:
        return text_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise PipelineStageError(
            stage="tokenize",
            detail=f"Failed to read text file `{text_file}`: {exc}",
            hint="Verify the file exists and is readable.",
        ) from exc


@app.command("generate")
def generate_command(
    manifest: Annotated[
        Path | None,
        typer.Argument(help="Path to clip manifest JSON (overrides config value)."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to YAML config file with generator defaults."),
    ] = None,
    seed: Annotated[
        str | None,
        typer.Option("--seed", help="Session seed; a random session id is used when omitted."),
    ] = None,
    text: Annotated[
        str | None,
        typer.Option("--text", help="Source text to use instead of the manifest's fixed text."),
    ] = None,
    text_file: Annotated[
        Path | None,
        typer.Option("--text-file", help="Read source text from a UTF-8 file."),
    ] = None,
    out: Annotated[
        Path | None,
        typer.Option(
            "--out",
            help="Write `<session>.m3u8` and `<session>.script.json` here instead of stdout.",
        ),
    ] = None,
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", help="Remote storage prefix for absolute clip URLs."),
    ] = None,
    max_phrase_length: Annotated[
        int | None,
        typer.Option("--max-phrase-length", help="Longest phrase, in tokens, to match."),
    ] = None,
) -> None:
    """Generate one session playlist."""

    try:
        config = _resolve_config(config_file, manifest, base_url, max_phrase_length)
        source_text = _read_input_text(text, text_file)
        run_logger = RunLogger(sink=sys.stderr)
        loaded_manifest = load_manifest(config.manifest_path, run_logger=run_logger)
        generator = PlaylistGenerator(loaded_manifest, config, run_logger=run_logger)
        session_id = seed if seed is not None else new_session_id()
        result = generator.generate(session_id, text=source_text)
        written = ArtifactStore(out).save_result(result) if out is not None else None
    except Exception as exc:
        exit_with_command_error("generate", exc)

    if written is None:
        typer.echo(result.playlist, nl=False)
        typer.echo(f"Session: {result.session_id}", err=True)
        echo_generation_stats(result.stats, err=True)
        echo_dropped_tokens(result.dropped_tokens, err=True)
        return

    playlist_path, script_path = written
    typer.echo(f"Session: {result.session_id}")
    typer.echo(f"Playlist: {playlist_path}")
    typer.echo(f"Script: {script_path}")
    echo_generation_stats(result.stats)
    echo_dropped_tokens(result.dropped_tokens)


@app.command("tokenize")
def tokenize_command(
    text: Annotated[str, typer.Argument(help="Raw text to normalize.")],
) -> None:
    """Print normalized tokens as a JSON array."""

    tokens = TextNormalizer().normalize(text)
    typer.echo(json.dumps(tokens, ensure_ascii=False))


@app.command("inspect")
def inspect_command(
    manifest: Annotated[Path, typer.Argument(help="Path to clip manifest JSON.")],
) -> None:
    """Print clip catalog counts for a manifest."""

    try:
        loaded_manifest = load_manifest(manifest)
    except Exception as exc:
        exit_with_command_error("inspect", exc)

    echo_manifest_counts(loaded_manifest.counts())


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()

"""Configuration model and loaders for hlsweave.

Responsibilities:
- Define generation settings as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.

Key types:
- `GeneratorConfig`: normalized settings for playlist generation.
- `ConfigLoader`: static construction helpers for `GeneratorConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    normalize_optional_string,
    parse_positive_float,
    parse_positive_int,
)

_DEFAULT_MANIFEST_PATH = Path("clips-manifest.json")
_DEFAULT_MAX_PHRASE_LENGTH = 10
_DEFAULT_OPENER_FILENAME = "opener.ts"
_DEFAULT_OPENER_DURATION = 8.08
_DEFAULT_TARGET_DURATION = 10
_DEFAULT_SESSION_TTL_SECONDS = 3600


@dataclass(slots=True)
class GeneratorConfig:
    """Settings for manifest loading, matching, and playlist rendering.

    Attributes:
        manifest_path: Path to the clip manifest JSON file.
        max_phrase_length: Longest phrase, in tokens, the matcher will try.
        base_url: Optional remote storage prefix for absolute clip URLs.
        opener_filename: Static clip played before every script.
        opener_duration: Opener duration in seconds.
        target_duration: Value of the `#EXT-X-TARGETDURATION` tag.
        session_ttl_seconds: Lifetime of stored sessions.
    """

    manifest_path: Path = _DEFAULT_MANIFEST_PATH
    max_phrase_length: int = _DEFAULT_MAX_PHRASE_LENGTH
    base_url: str | None = None
    opener_filename: str = _DEFAULT_OPENER_FILENAME
    opener_duration: float = _DEFAULT_OPENER_DURATION
    target_duration: int = _DEFAULT_TARGET_DURATION
    session_ttl_seconds: int = _DEFAULT_SESSION_TTL_SECONDS

    def __post_init__(self) -> None:
        self.base_url = self._normalize_base_url(self.base_url)

    def validate(self) -> None:
        """Validate configuration values before generation."""

        if self.max_phrase_length <= 0:
            raise ValueError("`max_phrase_length` must be a positive integer.")
        if self.target_duration <= 0:
            raise ValueError("`target_duration` must be a positive integer.")
        if self.session_ttl_seconds <= 0:
            raise ValueError("`session_ttl_seconds` must be a positive integer.")
        if self.opener_duration <= 0:
            raise ValueError("`opener_duration` must be a positive number.")
        if not isinstance(self.opener_filename, str) or not self.opener_filename.strip():
            raise ValueError("`opener_filename` must be a non-empty string.")

    @staticmethod
    def _normalize_base_url(value: str | None) -> str | None:
        """Strip whitespace and trailing slashes; blank values disable absolute URLs."""

        normalized = normalize_optional_string(value)
        if normalized is None:
            return None
        return normalized.rstrip("/") or None


class ConfigLoader:
    """Factory methods for creating `GeneratorConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "manifest_path",
            "max_phrase_length",
            "base_url",
            "opener_filename",
            "opener_duration",
            "target_duration",
            "session_ttl_seconds",
        }
    )
    _ENV_KEYS = {
        "manifest_path": "HLSWEAVE_MANIFEST_PATH",
        "max_phrase_length": "HLSWEAVE_MAX_PHRASE_LENGTH",
        "base_url": "HLSWEAVE_BASE_URL",
        "opener_filename": "HLSWEAVE_OPENER_FILENAME",
        "opener_duration": "HLSWEAVE_OPENER_DURATION",
        "target_duration": "HLSWEAVE_TARGET_DURATION",
        "session_ttl_seconds": "HLSWEAVE_SESSION_TTL_SECONDS",
    }

    @staticmethod
    def from_yaml(path: Path) -> GeneratorConfig:
        """Create a validated config from a YAML file."""

        raw_text = path.read_text(encoding="utf-8")
        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")

        source_label = f"YAML `{path}`"
        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(str(key) for key in unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        return ConfigLoader._build_config(payload, source_label)

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> GeneratorConfig:
        """Create a validated config from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload = {
            key: env_map[env_key]
            for key, env_key in ConfigLoader._ENV_KEYS.items()
            if normalize_optional_string(env_map.get(env_key)) is not None
        }
        return ConfigLoader._build_config(payload, "Environment")

    @staticmethod
    def _build_config(payload: Mapping[str, Any], source_label: str) -> GeneratorConfig:
        """Build a validated config from a normalized mapping payload."""

        try:
            manifest_path = normalize_optional_string(payload.get("manifest_path"))
            opener_filename = normalize_optional_string(payload.get("opener_filename"))
            config = GeneratorConfig(
                manifest_path=(
                    Path(manifest_path) if manifest_path is not None else _DEFAULT_MANIFEST_PATH
                ),
                max_phrase_length=ConfigLoader._optional_int(
                    payload, "max_phrase_length", _DEFAULT_MAX_PHRASE_LENGTH
                ),
                base_url=normalize_optional_string(payload.get("base_url")),
                opener_filename=opener_filename or _DEFAULT_OPENER_FILENAME,
                opener_duration=ConfigLoader._optional_float(
                    payload, "opener_duration", _DEFAULT_OPENER_DURATION
                ),
                target_duration=ConfigLoader._optional_int(
                    payload, "target_duration", _DEFAULT_TARGET_DURATION
                ),
                session_ttl_seconds=ConfigLoader._optional_int(
                    payload, "session_ttl_seconds", _DEFAULT_SESSION_TTL_SECONDS
                ),
            )
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{source_label} config is invalid: {exc}") from exc
        return config

    @staticmethod
    def _optional_int(payload: Mapping[str, Any], key: str, default: int) -> int:
        """Read an optional positive integer field."""

        if payload.get(key) is None:
            return default
        return parse_positive_int(payload[key], key)

    @staticmethod
    def _optional_float(payload: Mapping[str, Any], key: str, default: float) -> float:
        """Read an optional positive number field."""

        if payload.get(key) is None:
            return default
        return parse_positive_float(payload[key], key)

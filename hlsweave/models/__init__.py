"""Shared typed data models for hlsweave.

This package contains dataclasses exchanged between the normalizer, matcher,
script builder, serializer, and the session layer.
"""

from .datatypes import (
    Clip,
    DroppedToken,
    GenerationResult,
    GenerationStats,
    Manifest,
    Match,
    ScriptItem,
    Session,
)

__all__ = [
    "Clip",
    "DroppedToken",
    "GenerationResult",
    "GenerationStats",
    "Manifest",
    "Match",
    "ScriptItem",
    "Session",
]

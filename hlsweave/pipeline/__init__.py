"""hlsweave generation pipeline.

This package contains the phrase matcher, clip selector, script builder, and
the orchestration facade that runs them for one session seed.
"""

from .matcher import PhraseMatcher
from .orchestrator import PlaylistGenerator
from .script_builder import ScriptBuilder
from .selector import ClipSelector, seeded_index

__all__ = [
    "ClipSelector",
    "PhraseMatcher",
    "PlaylistGenerator",
    "ScriptBuilder",
    "seeded_index",
]

"""Top-level package for hlsweave.

This package maps a fixed source text onto a library of pre-cut video clips
and renders each session's clip sequence as an HLS VOD playlist. The main
entry point is `PlaylistGenerator`.
"""

from .pipeline import PlaylistGenerator

__all__ = ["PlaylistGenerator", "__version__"]

__version__ = "0.1.0"

"""Seeded clip selection with per-session reuse avoidance.

Responsibilities:
- Pick one clip from a pool deterministically for a given seed.
- Prefer clips not yet used in the current generation, reusing once exhausted.
"""

from __future__ import annotations

from collections.abc import Sequence
from hashlib import md5

from ..models.datatypes import Clip


def seeded_index(seed: str, size: int) -> int:
    """Map a seed string onto `[0, size)` via the first 32 bits of its MD5 digest."""

    if size <= 0:
        raise ValueError("`size` must be a positive integer.")
    digest = md5(seed.encode("utf-8"), usedforsecurity=False).hexdigest()
    return int(digest[:8], 16) % size


class ClipSelector:
    """Select clips for one generation call while tracking used filenames."""

    def __init__(self, used_filenames: set[str] | None = None) -> None:
        """Initialize selector state, optionally seeded with used filenames."""

        self.used_filenames: set[str] = used_filenames if used_filenames is not None else set()

    def select(self, pool: Sequence[Clip], seed: str) -> Clip | None:
        """Return a seeded pick from unused clips, or from the full pool when exhausted."""

        if not pool:
            return None

        unused = [clip for clip in pool if clip.filename not in self.used_filenames]
        candidates = unused or list(pool)
        selected = candidates[seeded_index(seed, len(candidates))]
        self.used_filenames.add(selected.filename)
        return selected

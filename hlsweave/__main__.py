"""Module entrypoint for running hlsweave as ``python -m hlsweave``."""

from __future__ import annotations

from hlsweave.cli import main


if __name__ == "__main__":
    main()

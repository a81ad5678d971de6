"""Upward directory search for the project env file."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

ENV_FILENAME = "firstup.env"

# /home/user is the shallowest directory checked; / and /home never are.
DEFAULT_MIN_DEPTH = 2


def _depth(directory: Path) -> int:
    return str(directory).count(os.sep)


def iter_env_candidates(
    start: Path | str,
    filename: str = ENV_FILENAME,
    *,
    min_depth: int = DEFAULT_MIN_DEPTH,
    boundary: Path | str | None = None,
) -> Iterator[Path]:
    """Yield every existing env file from *start* upward, nearest first.

    The walk stops before a directory shallower than *min_depth* path
    separators, and after checking *boundary* when one is given.
    """
    directory = Path(start).absolute()
    stop = Path(boundary).absolute() if boundary is not None else None

    while _depth(directory) >= min_depth:
        candidate = directory / filename
        if candidate.is_file():
            yield candidate

        if directory == stop or directory.parent == directory:
            return
        directory = directory.parent


def find_env_file(
    start: Path | str,
    filename: str = ENV_FILENAME,
    *,
    min_depth: int = DEFAULT_MIN_DEPTH,
    boundary: Path | str | None = None,
) -> Path | None:
    """Return the nearest env file at or above *start*, or ``None``."""
    return next(
        iter_env_candidates(start, filename, min_depth=min_depth, boundary=boundary),
        None,
    )

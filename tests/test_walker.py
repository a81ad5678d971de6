"""Tests for the upward directory walker."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from firstupdotenv.walker import ENV_FILENAME, find_env_file, iter_env_candidates


def _depth(path: Path) -> int:
    return str(path).count(os.sep)


def test_finds_file_in_start_directory(tmp_path: Path) -> None:
    env_file = tmp_path / ENV_FILENAME
    env_file.write_text("FOO=1\n", encoding="utf-8")

    assert find_env_file(tmp_path, boundary=tmp_path) == env_file


@pytest.mark.parametrize("relative", ["a", "a/b", "a/b/c/d"])
def test_finds_file_from_any_descendant(tmp_path: Path, relative: str) -> None:
    env_file = tmp_path / ENV_FILENAME
    env_file.write_text("FOO=1\n", encoding="utf-8")
    start = tmp_path / relative
    start.mkdir(parents=True)

    assert find_env_file(start, boundary=tmp_path) == env_file


def test_nearest_file_wins(tmp_path: Path) -> None:
    (tmp_path / ENV_FILENAME).write_text("FOO=outer\n", encoding="utf-8")
    inner = tmp_path / "project"
    inner.mkdir()
    (inner / ENV_FILENAME).write_text("FOO=inner\n", encoding="utf-8")

    assert find_env_file(inner, boundary=tmp_path) == inner / ENV_FILENAME
    assert list(iter_env_candidates(inner, boundary=tmp_path)) == [
        inner / ENV_FILENAME,
        tmp_path / ENV_FILENAME,
    ]


def test_returns_none_when_nothing_found(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)

    assert find_env_file(start, boundary=tmp_path) is None


def test_directory_named_like_env_file_is_ignored(tmp_path: Path) -> None:
    (tmp_path / ENV_FILENAME).mkdir()

    assert find_env_file(tmp_path, boundary=tmp_path) is None


def test_stops_before_the_depth_floor(tmp_path: Path) -> None:
    (tmp_path / ENV_FILENAME).write_text("FOO=1\n", encoding="utf-8")
    start = tmp_path / "child"
    start.mkdir()

    # tmp_path itself sits one level above the floor and is never checked.
    assert find_env_file(start, min_depth=_depth(tmp_path) + 1) is None
    assert find_env_file(start, min_depth=_depth(tmp_path)) == tmp_path / ENV_FILENAME


def test_root_level_directories_are_never_checked() -> None:
    assert list(iter_env_candidates("/")) == []


def test_custom_filename(tmp_path: Path) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("FOO=1\n", encoding="utf-8")

    assert find_env_file(tmp_path, "custom.env", boundary=tmp_path) == env_file

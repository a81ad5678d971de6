"""Tests for content fingerprints and the change detector."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from firstupdotenv.fingerprint import ChangeDetector, read_env_file, sha256_bytes
from firstupdotenv.session import SessionState


@pytest.fixture
def env_path(tmp_path: Path) -> Path:
    path = tmp_path / "firstup.env"
    path.write_bytes(b"FOO=value1\nBAR=value2\n")
    return path


def test_sha256_bytes_matches_hashlib() -> None:
    assert sha256_bytes(b"FOO=1\n") == hashlib.sha256(b"FOO=1\n").hexdigest()


def test_read_env_file_fingerprints_raw_bytes(env_path: Path) -> None:
    env_file = read_env_file(env_path)

    assert env_file.path == env_path
    assert env_file.content == b"FOO=value1\nBAR=value2\n"
    assert env_file.fingerprint == sha256_bytes(env_file.content)


def test_fingerprint_changes_with_content(env_path: Path) -> None:
    before = read_env_file(env_path).fingerprint
    env_path.write_bytes(b"FOO=value1\nBAR=changed\n")

    assert read_env_file(env_path).fingerprint != before


def test_read_env_file_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_env_file(tmp_path / "firstup.env")


class TestChangeDetector:
    """Short-circuit decisions against the previous session."""

    def test_unchanged_when_hash_and_path_match(self, env_path: Path) -> None:
        env_file = read_env_file(env_path)
        previous = SessionState(
            current_keys=("FOO", "BAR"),
            file_path=str(env_path),
            file_hash=env_file.fingerprint,
        )

        assert ChangeDetector().is_unchanged(env_file, previous)

    def test_unchanged_when_only_hash_recorded(self, env_path: Path) -> None:
        env_file = read_env_file(env_path)
        previous = SessionState(file_hash=env_file.fingerprint)

        assert ChangeDetector().is_unchanged(env_file, previous)

    def test_changed_without_previous_hash(self, env_path: Path) -> None:
        assert not ChangeDetector().is_unchanged(read_env_file(env_path), SessionState.empty())

    def test_changed_when_hash_differs(self, env_path: Path) -> None:
        previous = SessionState(file_path=str(env_path), file_hash=sha256_bytes(b"other"))

        assert not ChangeDetector().is_unchanged(read_env_file(env_path), previous)

    def test_changed_when_same_content_lives_elsewhere(self, env_path: Path) -> None:
        env_file = read_env_file(env_path)
        previous = SessionState(
            file_path=str(env_path.parent / "elsewhere" / "firstup.env"),
            file_hash=env_file.fingerprint,
        )

        assert not ChangeDetector().is_unchanged(env_file, previous)

    def test_disabled_detector_never_short_circuits(self, env_path: Path) -> None:
        env_file = read_env_file(env_path)
        previous = SessionState(file_path=str(env_path), file_hash=env_file.fingerprint)

        assert not ChangeDetector(enabled=False).is_unchanged(env_file, previous)

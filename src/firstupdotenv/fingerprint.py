"""Content fingerprints and the change detector built on them."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from firstupdotenv.models import EnvFile
from firstupdotenv.session import SessionState

logger = logging.getLogger(__name__)


def sha256_bytes(content: bytes) -> str:
    """Compute lowercase hex SHA-256 of raw bytes."""
    return hashlib.sha256(content).hexdigest()


def read_env_file(path: Path | str) -> EnvFile:
    """Read *path* and fingerprint its bytes.

    ``OSError`` propagates: a file that exists but cannot be read is fatal.
    """
    resolved = Path(path).absolute()
    with resolved.open("rb") as f:
        content = f.read()
    return EnvFile(path=resolved, content=content, fingerprint=sha256_bytes(content))


class ChangeDetector:
    """
    Decides whether a discovered file is the one the previous run loaded.
    A match lets the loader skip parsing, resolving and emitting entirely.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def is_unchanged(self, env_file: EnvFile, previous: SessionState) -> bool:
        if not self.enabled or not previous.file_hash:
            return False

        if previous.file_hash != env_file.fingerprint:
            return False

        # Identical content in another directory still needs FIRSTUPDOTENV_FILE updated.
        if previous.file_path and Path(previous.file_path) != env_file.path:
            logger.debug(
                "Fingerprint matches but path moved from %s to %s",
                previous.file_path,
                env_file.path,
            )
            return False

        return True

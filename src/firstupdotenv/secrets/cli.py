"""
Per-reference resolution through the 1Password CLI.

Each reference costs one ``op read`` process. The referenced field is
expected to hold newline-separated ``KEY=value`` entries.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from firstupdotenv.errors import SecretResolutionError
from firstupdotenv.parser import parse_key_values

logger = logging.getLogger(__name__)


class OpCliSecretResolver:
    """Resolve references one at a time with ``<command> read <reference>``."""

    def __init__(self, command: str = "op") -> None:
        self.command = command

    def read(self, reference: str) -> str:
        """Return the raw stdout of ``op read`` for *reference*."""
        argv = [self.command, "read", reference]
        logger.debug("Running %s read for %s", self.command, reference)
        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as err:
            raise SecretResolutionError(reference, f"cannot run {self.command}: {err}") from err

        if completed.returncode != 0:
            raise SecretResolutionError(
                reference,
                f"{self.command} read exited with status {completed.returncode}: "
                f"{completed.stderr.strip()}",
            )
        return completed.stdout

    def resolve(self, references: Sequence[str]) -> dict[str, str]:
        env: dict[str, str] = {}
        for reference in references:
            env.update(parse_key_values(self.read(reference)))
        return env

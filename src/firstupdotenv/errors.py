"""Error taxonomy for the load pipeline.

Unreadable files and a missing working directory surface as the builtin
``OSError`` (``IOError``). Everything else fatal derives from
``FirstUpDotEnvError`` so the CLI can report it with a single handler.
"""

from __future__ import annotations


class FirstUpDotEnvError(Exception):
    """Base class for fatal, non-I/O failures."""


class ConfigurationError(FirstUpDotEnvError):
    """Raised when required configuration is missing or invalid."""


class SecretResolutionError(FirstUpDotEnvError):
    """Raised when a secret reference cannot be resolved.

    No partial environment is ever exported after this error.
    """

    def __init__(self, reference: str, detail: str) -> None:
        self.reference = reference
        self.detail = detail.strip()
        message = f"resolve {reference}"
        if self.detail:
            message += f": {self.detail}"
        super().__init__(message)

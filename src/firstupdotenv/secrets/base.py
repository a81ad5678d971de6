"""Capability interface shared by the secret resolution strategies."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class SecretResolver(Protocol):
    """Turns secret references into merged ``KEY=value`` pairs.

    Implementations raise ``SecretResolutionError`` on any failed reference
    and never return a partial mapping.
    """

    def resolve(self, references: Sequence[str]) -> dict[str, str]: ...

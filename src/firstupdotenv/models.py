"""Pydantic models shared across the load pipeline."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class EnvFile(BaseModel):
    """A discovered ``firstup.env`` read fresh for this invocation."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Absolute path of the file")
    content: bytes = Field(description="Raw file bytes")
    fingerprint: str = Field(description="Lowercase hex SHA-256 of content")

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class ParsedEnvFile(BaseModel):
    """Plain assignments and unresolved secret references from one file."""

    assignments: dict[str, str] = Field(default_factory=dict)
    references: list[str] = Field(
        default_factory=list,
        description="Secret references in file order, verbatim",
    )

    @property
    def is_empty(self) -> bool:
        return not self.assignments and not self.references


class LoadStatus(str, Enum):
    """Outcome of one pipeline run."""

    loaded = "loaded"
    unchanged = "unchanged"
    not_found = "not_found"

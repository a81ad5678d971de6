"""
Shell script emitter.

Scripts are built as an ordered list of typed operations and rendered to
text only at the boundary. Every unset for the previous load precedes
every export for the new one, so a name present in both ends up exported.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Mapping
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from firstupdotenv.models import EnvFile
from firstupdotenv.parser import is_shell_identifier
from firstupdotenv.session import (
    BOOKKEEPING_VARS,
    CURRENT_SET_ENV_VAR,
    FILE_HASH_VAR,
    FILE_VAR,
    SessionState,
)

logger = logging.getLogger(__name__)


class UnsetOp(BaseModel):
    """Remove a variable from the parent shell."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unset"] = "unset"
    name: str

    def render(self) -> str:
        return f"unset {self.name}"


class ExportOp(BaseModel):
    """Export a variable into the parent shell."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["export"] = "export"
    name: str
    value: str

    def render(self) -> str:
        return f"export {self.name}={quote_value(self.value)}"


ScriptOp = Annotated[UnsetOp | ExportOp, Field(discriminator="kind")]


def quote_value(value: str) -> str:
    """Quote *value* for POSIX shells; plain words are left bare."""
    return shlex.quote(value)


class ShellScript(BaseModel):
    """An ordered sequence of shell mutations."""

    ops: list[ScriptOp] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.ops

    def unset_names(self) -> list[str]:
        return [op.name for op in self.ops if isinstance(op, UnsetOp)]

    def exported(self) -> dict[str, str]:
        return {op.name: op.value for op in self.ops if isinstance(op, ExportOp)}

    def render(self) -> str:
        if not self.ops:
            return ""
        return "\n".join(op.render() for op in self.ops) + "\n"


def _previous_unsets(previous: SessionState) -> list[ScriptOp]:
    ops: list[ScriptOp] = []
    for name in previous.current_keys:
        if not is_shell_identifier(name):
            logger.warning("Ignoring invalid variable name %r in session state", name)
            continue
        ops.append(UnsetOp(name=name))
    return ops


def build_load_script(
    previous: SessionState,
    environment: Mapping[str, str],
    env_file: EnvFile,
) -> ShellScript:
    """Replace the previous load with *environment* read from *env_file*."""
    ops = _previous_unsets(previous)
    ops.extend(ExportOp(name=key, value=value) for key, value in environment.items())

    current = SessionState.for_loaded(list(environment), env_file)
    ops.append(ExportOp(name=CURRENT_SET_ENV_VAR, value=current.encoded_keys()))
    ops.append(ExportOp(name=FILE_VAR, value=str(env_file.path)))
    ops.append(ExportOp(name=FILE_HASH_VAR, value=env_file.fingerprint))
    return ShellScript(ops=ops)


def build_cleanup_script(previous: SessionState) -> ShellScript:
    """Remove the previous load and all bookkeeping; export nothing."""
    ops = _previous_unsets(previous)
    ops.extend(UnsetOp(name=name) for name in BOOKKEEPING_VARS)
    return ShellScript(ops=ops)

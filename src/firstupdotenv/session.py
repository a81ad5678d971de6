"""Session state carried between invocations by the parent shell.

The shell keeps three bookkeeping variables alive between prompts. This
module is the only place that knows their names and encoding; the rest of
the pipeline passes ``SessionState`` values around.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from firstupdotenv.models import EnvFile

CURRENT_SET_ENV_VAR = "FIRSTUPDOTENV_CURRENT_SET_ENV"
FILE_VAR = "FIRSTUPDOTENV_FILE"
FILE_HASH_VAR = "FIRSTUPDOTENV_FILE_HASH"

BOOKKEEPING_VARS = (CURRENT_SET_ENV_VAR, FILE_VAR, FILE_HASH_VAR)

_KEY_SEPARATOR = ","


class SessionState(BaseModel):
    """What the previous run exported, as seen by the next one."""

    model_config = ConfigDict(frozen=True)

    current_keys: tuple[str, ...] = Field(
        default=(),
        description="Variable names exported by the previous load",
    )
    file_path: str | None = None
    file_hash: str | None = None

    @classmethod
    def empty(cls) -> SessionState:
        return cls()

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> SessionState:
        raw_keys = environ.get(CURRENT_SET_ENV_VAR, "")
        keys = tuple(key.strip() for key in raw_keys.split(_KEY_SEPARATOR) if key.strip())
        return cls(
            current_keys=keys,
            file_path=environ.get(FILE_VAR) or None,
            file_hash=environ.get(FILE_HASH_VAR) or None,
        )

    @classmethod
    def for_loaded(cls, keys: list[str], env_file: EnvFile) -> SessionState:
        return cls(
            current_keys=tuple(keys),
            file_path=str(env_file.path),
            file_hash=env_file.fingerprint,
        )

    def encoded_keys(self) -> str:
        return _KEY_SEPARATOR.join(self.current_keys)

"""Runtime configuration read from the invoking process environment."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from firstupdotenv.errors import ConfigurationError
from firstupdotenv.walker import DEFAULT_MIN_DEPTH, ENV_FILENAME

RESOLVER_VAR = "FIRSTUPDOTENV_RESOLVER"
OP_COMMAND_VAR = "FIRSTUPDOTENV_OP_COMMAND"
OP_ACCOUNT_VAR = "FIRSTUPDOTENV_OP_ACCOUNT"
OP_ACCOUNT_FALLBACK_VAR = "OP_ACCOUNT"
SERVICE_ACCOUNT_TOKEN_VAR = "OP_SERVICE_ACCOUNT_TOKEN"
DISABLE_CACHE_VAR = "FIRSTUPDOTENV_DISABLE_CACHE"
DEBUG_VAR = "FIRSTUPDOTENV_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


class ResolverKind(str, Enum):
    """How secret references are turned into values."""

    cli = "cli"  # one `op read` subprocess per reference
    sdk = "sdk"  # one bulk resolve_all round trip


class Settings(BaseModel):
    """Validated configuration for one invocation."""

    model_config = ConfigDict(frozen=True)

    env_filename: str = ENV_FILENAME
    min_depth: int = Field(default=DEFAULT_MIN_DEPTH, ge=1)
    resolver: ResolverKind = ResolverKind.cli
    op_command: str = Field(default="op", min_length=1)
    op_account: str | None = None
    service_account_token: str | None = Field(default=None, repr=False)
    use_cache: bool = True
    debug: bool = False

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> Settings:
        """Build settings from *environ*, raising ``ConfigurationError`` on bad values."""
        resolver = environ.get(RESOLVER_VAR, "").strip().lower() or ResolverKind.cli.value
        account = environ.get(OP_ACCOUNT_VAR) or environ.get(OP_ACCOUNT_FALLBACK_VAR)

        try:
            return cls(
                resolver=resolver,
                op_command=environ.get(OP_COMMAND_VAR, "").strip() or "op",
                op_account=account or None,
                service_account_token=environ.get(SERVICE_ACCOUNT_TOKEN_VAR) or None,
                use_cache=not _flag(environ, DISABLE_CACHE_VAR),
                debug=_flag(environ, DEBUG_VAR),
            )
        except ValidationError as err:
            raise ConfigurationError(f"invalid configuration: {err}") from err


def _flag(environ: Mapping[str, str], name: str) -> bool:
    raw = environ.get(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")

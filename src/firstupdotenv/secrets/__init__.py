"""Secret reference resolution strategies."""

from firstupdotenv.config import ResolverKind, Settings

from .base import SecretResolver
from .cli import OpCliSecretResolver
from .sdk import OnePasswordSdkResolver


def build_resolver(settings: Settings) -> SecretResolver:
    """Return the resolver selected by *settings*."""
    if settings.resolver == ResolverKind.sdk:
        return OnePasswordSdkResolver(
            account=settings.op_account,
            service_account_token=settings.service_account_token,
        )
    return OpCliSecretResolver(command=settings.op_command)


__all__ = [
    "OnePasswordSdkResolver",
    "OpCliSecretResolver",
    "SecretResolver",
    "build_resolver",
]

"""
Bulk resolution through the 1Password SDK.

All references of a file go out in one ``resolve_all`` request, so the
desktop-app or service-account session is established once per run. The
price is coarse failure: one bad reference fails the whole load.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from firstupdotenv import __version__
from firstupdotenv.errors import ConfigurationError, SecretResolutionError
from firstupdotenv.parser import parse_key_values

logger = logging.getLogger(__name__)

INTEGRATION_NAME = "firstupdotenv"

ClientFactory = Callable[[], Awaitable[Any]]


def _error_type(error: object) -> str:
    error_type = getattr(error, "type", error)
    label = str(getattr(error_type, "value", error_type))
    message = getattr(error, "message", None)
    return f"{label}: {message}" if message else label


class OnePasswordSdkResolver:
    """Resolve every reference in a single SDK round trip."""

    def __init__(
        self,
        account: str | None = None,
        service_account_token: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.account = account
        self.service_account_token = service_account_token
        self._client_factory = client_factory or self._authenticate

    async def _authenticate(self) -> Any:
        from onepassword import DesktopAuth
        from onepassword.client import Client

        auth: object
        if self.service_account_token:
            auth = self.service_account_token
        else:
            auth = DesktopAuth(account_name=self.account)
        return await Client.authenticate(
            auth=auth,
            integration_name=INTEGRATION_NAME,
            integration_version=__version__,
        )

    def _require_credentials(self) -> None:
        if not self.account and not self.service_account_token:
            raise ConfigurationError(
                "1Password account is not configured: set FIRSTUPDOTENV_OP_ACCOUNT "
                "(or OP_ACCOUNT) or OP_SERVICE_ACCOUNT_TOKEN"
            )

    async def _resolve_all(self, references: list[str]) -> dict[str, Any]:
        try:
            client = await self._client_factory()
            response = await client.secrets.resolve_all(references)
        except Exception as err:
            raise SecretResolutionError(
                ", ".join(references), f"1Password SDK request failed: {err}"
            ) from err
        return dict(response.individual_responses)

    def resolve(self, references: Sequence[str]) -> dict[str, str]:
        if not references:
            return {}
        self._require_credentials()

        unique = list(dict.fromkeys(references))
        logger.debug("Resolving %d secret references in one request", len(unique))
        responses = asyncio.run(self._resolve_all(unique))

        env: dict[str, str] = {}
        for reference in unique:
            response = responses.get(reference)
            if response is None:
                raise SecretResolutionError(reference, "no response returned")
            if response.error is not None:
                raise SecretResolutionError(reference, _error_type(response.error))
            env.update(parse_key_values(response.content.secret))
        return env

"""
Credential providers for the chat completion endpoint.

The completion client is written once against `CredentialProvider`;
configuration decides whether requests carry a static API key or a
bearer token acquired from Azure AD.
"""

import abc
import asyncio
import logging
import time
from typing import Dict, Optional

from azure.core.credentials import AccessToken
from azure.identity import DefaultAzureCredential

from claim_status.config import Settings

logger = logging.getLogger(__name__)

# Refresh tokens this many seconds before they expire
TOKEN_REFRESH_MARGIN = 300


class CredentialProvider(abc.ABC):
    """Produces the authorization header for one outbound request."""

    @abc.abstractmethod
    async def get_auth_header(self) -> Dict[str, str]:
        ...

    def close(self) -> None:
        pass


class ApiKeyCredentialProvider(CredentialProvider):
    def __init__(self, api_key: str):
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key

    async def get_auth_header(self) -> Dict[str, str]:
        return {"api-key": self._api_key}


class BearerTokenCredentialProvider(CredentialProvider):
    """
    Acquires bearer tokens for a fixed audience scope.

    `credential` is any azure-identity style object exposing
    `get_token(scope)`. The token is cached until it is within
    TOKEN_REFRESH_MARGIN seconds of expiry.
    """

    def __init__(self, credential, scope: str):
        self._credential = credential
        self._scope = scope
        self._token: Optional[AccessToken] = None

    async def get_auth_header(self) -> Dict[str, str]:
        token = await self._get_token()
        return {"Authorization": f"Bearer {token.token}"}

    async def _get_token(self) -> AccessToken:
        if self._token is not None and self._token.expires_on - TOKEN_REFRESH_MARGIN > time.time():
            return self._token

        # azure-identity's sync credentials block on their own HTTP calls
        self._token = await asyncio.to_thread(self._credential.get_token, self._scope)
        logger.debug("Acquired bearer token for scope %s (expires_on=%s)", self._scope, self._token.expires_on)
        return self._token

    def close(self) -> None:
        close = getattr(self._credential, "close", None)
        if close is not None:
            close()


def build_credential_provider(settings: Settings) -> CredentialProvider:
    """API key when one is configured, otherwise DefaultAzureCredential."""
    if settings.AZURE_OPENAI_API_KEY:
        logger.info("Using API key authentication for Azure OpenAI")
        return ApiKeyCredentialProvider(settings.AZURE_OPENAI_API_KEY)

    logger.info("Using bearer token authentication for Azure OpenAI (scope=%s)", settings.AZURE_OPENAI_SCOPE)
    return BearerTokenCredentialProvider(DefaultAzureCredential(), settings.AZURE_OPENAI_SCOPE)

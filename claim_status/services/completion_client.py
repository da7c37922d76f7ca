"""
Azure OpenAI chat completion client.

Sends exactly one request per call: a system message, a user message and
fixed generation parameters. Failures are reported as typed exceptions:

- CompletionFailure: the endpoint answered with a non-success status, or
  with a body that carries no completion message.
- TransportFailure: no response was obtained (network error, timeout,
  token acquisition error).

There is no retry loop. Cancelling the awaiting task aborts the request
and releases its connection back to httpx.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from azure.core.exceptions import AzureError

from claim_status.config import Settings
from claim_status.errors import CompletionFailure, ConfigurationError, TransportFailure
from claim_status.services.credentials import CredentialProvider, build_credential_provider

logger = logging.getLogger(__name__)

# Generation parameters; everything beyond temperature and max_tokens stays neutral
TEMPERATURE = 0.4
MAX_TOKENS = 400
TOP_P = 1.0
FREQUENCY_PENALTY = 0.0
PRESENCE_PENALTY = 0.0


class ChatCompletionClient:
    def __init__(
        self,
        endpoint: str,
        deployment: str,
        api_version: str,
        credential_provider: CredentialProvider,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.deployment = deployment
        self.api_version = api_version
        self.credential_provider = credential_provider
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return f"{self.endpoint}/openai/deployments/{self.deployment}/chat/completions"

    def build_payload(self, system_text: str, user_text: str) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": system_text},
                {"role": "user", "content": user_text},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
            "top_p": TOP_P,
            "frequency_penalty": FREQUENCY_PENALTY,
            "presence_penalty": PRESENCE_PENALTY,
        }

    async def complete(self, system_text: str, user_text: str) -> str:
        """
        Request a completion and return the text of the first choice.

        Raises CompletionFailure or TransportFailure; never retries.
        """
        payload = self.build_payload(system_text, user_text)

        try:
            headers = {"Content-Type": "application/json"}
            headers.update(await self.credential_provider.get_auth_header())

            logger.debug("Calling chat completion: deployment=%s", self.deployment)
            response = await self._http_client.post(
                self.url,
                params={"api-version": self.api_version},
                headers=headers,
                json=payload,
            )
        except (httpx.RequestError, AzureError) as e:
            raise TransportFailure(f"chat completion request failed: {e}", original_error=e) from e

        if not response.is_success:
            raise CompletionFailure(response.status_code, response.text)

        return _extract_content(response)

    async def aclose(self) -> None:
        await self._http_client.aclose()
        self.credential_provider.close()


def _extract_content(response: httpx.Response) -> str:
    try:
        data = response.json()
        message = data["choices"][0]["message"]
        content = message.get("content")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError):
        raise CompletionFailure(response.status_code, response.text)
    return content if isinstance(content, str) else ""


def build_completion_client(settings: Settings) -> ChatCompletionClient:
    """Instantiate the completion client from settings or raise when unconfigured."""
    if not settings.AZURE_OPENAI_ENDPOINT:
        raise ConfigurationError("AZURE_OPENAI_ENDPOINT must be set")
    if not settings.AZURE_OPENAI_DEPLOYMENT:
        raise ConfigurationError("AZURE_OPENAI_DEPLOYMENT must be set")

    return ChatCompletionClient(
        endpoint=settings.AZURE_OPENAI_ENDPOINT,
        deployment=settings.AZURE_OPENAI_DEPLOYMENT,
        api_version=settings.AZURE_OPENAI_API_VERSION,
        credential_provider=build_credential_provider(settings),
        timeout=settings.AZURE_OPENAI_TIMEOUT,
    )

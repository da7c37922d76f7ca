"""Service factories and lifespan hooks for the FastAPI app."""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Callable

from fastapi import Depends, FastAPI

from claim_status.config import get_settings
from claim_status.services.claim_repository import ClaimRepository
from claim_status.services.completion_client import ChatCompletionClient, build_completion_client
from claim_status.services.summarization_service import SummarizationService

logger = logging.getLogger(__name__)


@lru_cache
def get_claim_repository() -> ClaimRepository:
    settings = get_settings()
    return ClaimRepository(settings.CLAIMS_PATH, settings.NOTES_PATH)


@lru_cache
def get_completion_client() -> ChatCompletionClient:
    return build_completion_client(get_settings())


def get_completion_client_factory() -> Callable[[], ChatCompletionClient]:
    """
    Hands out the builder rather than the client itself, so a missing
    endpoint configuration surfaces only once a claim is known to exist.
    """
    return get_completion_client


def get_summarization_service(
    repository: ClaimRepository = Depends(get_claim_repository),
    client_factory: Callable[[], ChatCompletionClient] = Depends(get_completion_client_factory),
) -> SummarizationService:
    return SummarizationService(repository, client_factory)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the shared outbound HTTP client on shutdown."""
    yield
    if get_completion_client.cache_info().currsize:
        await get_completion_client().aclose()
        get_completion_client.cache_clear()
        logger.info("Chat completion client closed")

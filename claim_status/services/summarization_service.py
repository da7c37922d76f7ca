"""
Claim summarization orchestration.

Flow:
1. Look up the claim (unknown id -> ClaimNotFoundError) and its notes.
2. Render the prompt, resolve the completion client and call it once.
   The client is resolved only for known claims, so an unconfigured
   endpoint never masks a not-found.
3. Parse the completion into the four summary fields.

Provider failures never escape: they degrade to a placeholder summary.
A completion that is not the expected JSON is echoed back verbatim in
every summary field.
"""

import logging
from typing import Callable

from claim_status.errors import ClaimNotFoundError, CompletionFailure, TransportFailure
from claim_status.schemas import Claim, ClaimNoteSet, ClaimSummaryResponse
from claim_status.services.claim_repository import ClaimRepository
from claim_status.services.completion_client import ChatCompletionClient
from claim_status.services.prompt_builder import build_prompt
from claim_status.services.summary_parser import parse_summary

logger = logging.getLogger(__name__)

UNAVAILABLE_TEXT = "Summarization unavailable"
RETRY_LATER = "Retry later"
REVIEW_DETAILS = "Review details"


class SummarizationService:
    def __init__(self, repository: ClaimRepository, client_factory: Callable[[], ChatCompletionClient]):
        self.repository = repository
        self.client_factory = client_factory

    async def summarize(self, claim_id: int) -> ClaimSummaryResponse:
        claim = await self.repository.get_claim(claim_id)
        if claim is None:
            raise ClaimNotFoundError(claim_id)

        note_set = await self.repository.get_notes(claim_id)
        if note_set is None:
            note_set = ClaimNoteSet(id=claim_id)

        return await self.summarize_claim(claim, note_set)

    async def summarize_claim(self, claim: Claim, note_set: ClaimNoteSet) -> ClaimSummaryResponse:
        system_text, user_text = build_prompt(claim, note_set)
        client = self.client_factory()

        try:
            content = await client.complete(system_text, user_text)
        except CompletionFailure as e:
            logger.warning(
                "Summarization failed for claim %s: status=%s body=%s",
                claim.id,
                e.status_code,
                e.body,
            )
            return placeholder_summary(claim.id)
        except TransportFailure as e:
            logger.exception("Summarization request failed for claim %s: %s", claim.id, e)
            return placeholder_summary(claim.id)

        result = parse_summary(content, claim.id)
        if result is None:
            return ClaimSummaryResponse(
                claim_id=claim.id,
                summary=content,
                customer_summary=content,
                adjuster_summary=content,
                next_step=REVIEW_DETAILS,
            )

        logger.info("Summarized claim %s (next_step=%s)", claim.id, result.next_step or "<none>")
        return result


def placeholder_summary(claim_id: int) -> ClaimSummaryResponse:
    return ClaimSummaryResponse(
        claim_id=claim_id,
        summary=UNAVAILABLE_TEXT,
        customer_summary=UNAVAILABLE_TEXT,
        adjuster_summary=UNAVAILABLE_TEXT,
        next_step=RETRY_LATER,
    )

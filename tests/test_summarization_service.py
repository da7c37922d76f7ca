import asyncio
import json

import httpx
import pytest

from claim_status.errors import ClaimNotFoundError, CompletionFailure, ConfigurationError, TransportFailure
from claim_status.services.summarization_service import SummarizationService
from tests.conftest import FakeCompletionClient


def _summarize(repository, client, claim_id=1):
    return asyncio.run(SummarizationService(repository, lambda: client).summarize(claim_id))


def test_completion_failure_returns_placeholder(repository, caplog):
    client = FakeCompletionClient(error=CompletionFailure(429, "Too Many Requests"))

    result = _summarize(repository, client)

    assert result.claim_id == 1
    assert result.summary == "Summarization unavailable"
    assert result.customer_summary == "Summarization unavailable"
    assert result.adjuster_summary == "Summarization unavailable"
    assert result.next_step == "Retry later"

    warnings = [r for r in caplog.records if r.levelname == "WARNING"]
    assert any("429" in r.getMessage() and "Too Many Requests" in r.getMessage() for r in warnings)


def test_transport_failure_returns_placeholder(repository, caplog):
    cause = httpx.ConnectError("unreachable")
    client = FakeCompletionClient(error=TransportFailure("request failed", original_error=cause))

    result = _summarize(repository, client)

    assert result.summary == "Summarization unavailable"
    assert result.next_step == "Retry later"
    assert any(r.levelname == "ERROR" for r in caplog.records)


def test_raw_text_is_echoed_when_not_json(repository):
    result = _summarize(repository, FakeCompletionClient(content="not json"))

    assert result.summary == "not json"
    assert result.customer_summary == "not json"
    assert result.adjuster_summary == "not json"
    assert result.next_step == "Review details"


def test_structured_completion_maps_fields(repository):
    content = json.dumps(
        {"summary": "S", "customerSummary": "C", "adjusterSummary": "Adj", "nextStep": "Call customer"}
    )

    result = _summarize(repository, FakeCompletionClient(content=content))

    assert result.claim_id == 1
    assert result.summary == "S"
    assert result.customer_summary == "C"
    assert result.adjuster_summary == "Adj"
    assert result.next_step == "Call customer"


def test_partial_completion_uses_field_defaults(repository):
    result = _summarize(repository, FakeCompletionClient(content='{"summary":"A"}'))

    assert (result.summary, result.customer_summary, result.adjuster_summary, result.next_step) == (
        "A",
        "A",
        "A",
        "",
    )


def test_unknown_claim_raises_not_found(repository):
    client = FakeCompletionClient(content="unused")

    with pytest.raises(ClaimNotFoundError):
        _summarize(repository, client, claim_id=404)
    assert client.calls == []


def test_claim_without_notes_gets_empty_note_set(repository):
    client = FakeCompletionClient(content='{"summary":"A"}')

    _summarize(repository, client, claim_id=3)

    assert len(client.calls) == 1
    _, user_text = client.calls[0]
    assert user_text.startswith("Claim: 3 ")
    assert user_text.endswith("Notes:\n")


def test_notes_are_sent_in_order(repository):
    client = FakeCompletionClient(content='{"summary":"A"}')

    _summarize(repository, client, claim_id=1)

    _, user_text = client.calls[0]
    assert user_text.endswith(
        "Notes:\n- Intake: Rear-ended at a light.\n- Adjuster Kim: Estimate received, awaiting photos."
    )


def test_unknown_claim_never_resolves_client(repository):
    def unconfigured():
        raise ConfigurationError("AZURE_OPENAI_ENDPOINT must be set")

    service = SummarizationService(repository, unconfigured)

    with pytest.raises(ClaimNotFoundError):
        asyncio.run(service.summarize(404))


class SlowCompletionClient:
    """Never answers; stands in for a provider call that is still in flight."""

    def __init__(self):
        self.started = asyncio.Event()

    async def complete(self, system_text, user_text):
        self.started.set()
        await asyncio.sleep(30)
        return "too late"


def test_cancellation_is_not_swallowed(repository):
    """
    Cancelling an in-flight summarization (e.g. client disconnect) must
    propagate rather than degrade to the placeholder result.
    """
    slow = SlowCompletionClient()
    service = SummarizationService(repository, lambda: slow)

    async def cancel_mid_call():
        task = asyncio.create_task(service.summarize(1))
        await slow.started.wait()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            return "cancelled"
        return "completed"

    assert asyncio.run(cancel_mid_call()) == "cancelled"

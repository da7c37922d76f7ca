import json
from typing import List, Optional, Tuple

import pytest

from claim_status.services.claim_repository import ClaimRepository

SAMPLE_CLAIMS = [
    {
        "id": 1,
        "policyNumber": "POL-1",
        "type": "Auto",
        "status": "Open",
        "lossDate": "2025-03-14",
        "insuredName": "Maria Lopez",
        "amountClaimed": 8450.75,
        "amountReserved": 6000.10,
        "lastUpdated": "2025-03-20T14:32:00Z",
    },
    {
        "id": 2,
        "policyNumber": "POL-2",
        "type": "Property",
        "status": "Under Review",
        "lossDate": "2025-02-02",
        "insuredName": "Daniel Okafor",
        "amountClaimed": 23100,
        "amountReserved": 0.1,
        "lastUpdated": "2025-03-01T09:15:00+02:00",
    },
    {
        "id": 3,
        "policyNumber": "POL-3",
        "type": "Liability",
        "status": "Closed",
        "lossDate": "2024-11-27",
        "insuredName": "Priya Shah",
        "amountClaimed": 1250.10,
        "amountReserved": 0,
        "lastUpdated": "2024-12-18T16:45:00",
    },
]

SAMPLE_NOTES = [
    {
        "id": 1,
        "notes": [
            {"author": "Intake", "text": "Rear-ended at a light."},
            {"author": "Adjuster Kim", "text": "Estimate received, awaiting photos."},
        ],
    },
    {"id": 2, "notes": []},
]


@pytest.fixture
def write_datasets(tmp_path):
    """
    Writes claims/notes JSON into tmp_path and returns their paths.

    Either dataset may be replaced with raw text to simulate a broken file.
    """

    def _write(claims=SAMPLE_CLAIMS, notes=SAMPLE_NOTES) -> Tuple[str, str]:
        claims_path = tmp_path / "claims.json"
        notes_path = tmp_path / "notes.json"
        claims_path.write_text(claims if isinstance(claims, str) else json.dumps(claims), encoding="utf-8")
        notes_path.write_text(notes if isinstance(notes, str) else json.dumps(notes), encoding="utf-8")
        return str(claims_path), str(notes_path)

    return _write


@pytest.fixture
def repository(write_datasets) -> ClaimRepository:
    return ClaimRepository(*write_datasets())


class FakeCompletionClient:
    """Stands in for ChatCompletionClient; returns `content` or raises `error`."""

    def __init__(self, content: str = "", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def complete(self, system_text: str, user_text: str) -> str:
        self.calls.append((system_text, user_text))
        if self.error is not None:
            raise self.error
        return self.content

    async def aclose(self) -> None:
        pass

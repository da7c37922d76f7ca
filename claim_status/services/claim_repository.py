"""
Read-only claim store backed by two static JSON datasets.

Claims and note sets are loaded on first access and cached in memory
for the lifetime of the process. Loading is guarded by an asyncio lock
so that concurrent first requests collapse into a single load; after
that the cache is immutable and readers never touch the lock.

A failed load (missing file, malformed JSON, invalid records) is not
committed: the store returns to the unloaded state and the error
propagates to the request that triggered it.
"""

import asyncio
import enum
import json
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from claim_status.schemas import Claim, ClaimNoteSet

logger = logging.getLogger(__name__)


class LoadState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"


class ClaimRepository:
    def __init__(self, claims_path: str, notes_path: str):
        self.claims_path = claims_path
        self.notes_path = notes_path

        self._state = LoadState.UNLOADED
        self._lock = asyncio.Lock()
        self._claims: List[Claim] = []
        self._claims_by_id: Dict[int, Claim] = {}
        self._notes_by_id: Dict[int, ClaimNoteSet] = {}

        # Number of times the datasets were read from disk
        self.load_count = 0

    @property
    def state(self) -> LoadState:
        return self._state

    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        """Return the claim with the given id, or None if unknown."""
        await self._ensure_loaded()
        return self._claims_by_id.get(claim_id)

    async def get_all_claims(self) -> List[Claim]:
        """Return every claim in dataset order."""
        await self._ensure_loaded()
        return list(self._claims)

    async def get_notes(self, claim_id: int) -> Optional[ClaimNoteSet]:
        """Return the note set for a claim, or None if it has no notes."""
        await self._ensure_loaded()
        return self._notes_by_id.get(claim_id)

    async def _ensure_loaded(self) -> None:
        if self._state is LoadState.LOADED:
            return

        async with self._lock:
            # another caller may have finished the load while we waited
            if self._state is LoadState.LOADED:
                return

            self._state = LoadState.LOADING
            try:
                claims, notes_by_id = await asyncio.to_thread(self._read_datasets)
            except BaseException:
                self._state = LoadState.UNLOADED
                raise

            self._claims = claims
            self._claims_by_id = {c.id: c for c in claims}
            self._notes_by_id = notes_by_id
            self._state = LoadState.LOADED

    def _read_datasets(self) -> Tuple[List[Claim], Dict[int, ClaimNoteSet]]:
        """
        Read and validate both datasets from disk.

        Runs in a worker thread. Nothing is assigned to the cache here;
        the caller commits the result only if both datasets are valid.
        """
        self.load_count += 1
        try:
            raw_claims = _read_json_list(self.claims_path)
            raw_notes = _read_json_list(self.notes_path)

            claims = [Claim.model_validate(item) for item in raw_claims]
            seen = set()
            for claim in claims:
                if claim.id in seen:
                    raise ValueError(f"duplicate claim id {claim.id} in {self.claims_path}")
                seen.add(claim.id)

            notes_by_id: Dict[int, ClaimNoteSet] = {}
            for item in raw_notes:
                note_set = ClaimNoteSet.model_validate(item)
                if note_set.id in notes_by_id:
                    raise ValueError(f"duplicate note set id {note_set.id} in {self.notes_path}")
                notes_by_id[note_set.id] = note_set
        except Exception as e:
            logger.exception("Failed to load claim datasets: %s", e)
            raise

        logger.info(
            "Loaded claim datasets: claims=%d | note_sets=%d",
            len(claims),
            len(notes_by_id),
        )
        return claims, notes_by_id


def _read_json_list(path: str) -> list:
    # amounts must stay exact, so JSON numbers with a fraction become Decimal
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f, parse_float=Decimal)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array in {path}")
    return data

"""
Interpret a model completion as a structured claim summary.

Keys are matched case-insensitively. Missing customer/adjuster
summaries fall back to the general summary; a missing next step
becomes empty text. Anything that does not decode into a JSON object
of strings yields None instead of raising.
"""

import json
import logging
from typing import Dict, Optional

from claim_status.schemas import ClaimSummaryResponse

logger = logging.getLogger(__name__)

_FIELDS = ("summary", "customersummary", "adjustersummary", "nextstep")


def parse_summary(content: str, claim_id: int) -> Optional[ClaimSummaryResponse]:
    fields = _decode_fields(content)
    if fields is None:
        return None

    summary = fields.get("summary")
    customer = fields.get("customersummary")
    adjuster = fields.get("adjustersummary")
    next_step = fields.get("nextstep")

    return ClaimSummaryResponse(
        claim_id=claim_id,
        summary=summary or "",
        customer_summary=customer if customer is not None else (summary or ""),
        adjuster_summary=adjuster if adjuster is not None else (summary or ""),
        next_step=next_step or "",
    )


def _decode_fields(content: str) -> Optional[Dict[str, Optional[str]]]:
    try:
        data = json.loads(content)
    except (TypeError, ValueError) as e:
        logger.debug("Parsing model JSON failed; returning raw content: %s", e)
        return None

    if not isinstance(data, dict):
        logger.debug("Model JSON is not an object (got %s); returning raw content", type(data).__name__)
        return None

    fields: Dict[str, Optional[str]] = {}
    for key, value in data.items():
        name = key.lower()
        if name not in _FIELDS:
            continue
        if value is not None and not isinstance(value, str):
            logger.debug("Model JSON field %r is not text; returning raw content", key)
            return None
        fields[name] = value
    return fields

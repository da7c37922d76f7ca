from datetime import date, datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from claim_status.utils.date_parser import parse_date, to_utc


class ApiModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---- Claim records ----
class Claim(ApiModel):
    id: int = Field(gt=0)
    policy_number: str
    type: str
    status: str
    loss_date: date
    insured_name: str
    amount_claimed: Decimal = Field(ge=0)
    amount_reserved: Decimal = Field(ge=0)
    last_updated: datetime

    @field_validator("loss_date", mode="before")
    @classmethod
    def _parse_loss_date(cls, value):
        if isinstance(value, str):
            parsed = parse_date(value)
            if parsed is None:
                raise ValueError(f"loss date must be an ISO calendar date: {value!r}")
            return parsed
        return value

    @field_serializer("amount_claimed", "amount_reserved", when_used="json")
    def _amount_as_number(self, value: Decimal) -> float:
        # JSON numbers on the wire; the shortest float repr keeps 2-dp amounts exact
        return float(value)

    @field_validator("last_updated")
    @classmethod
    def _normalize_last_updated(cls, value: datetime) -> datetime:
        return to_utc(value)


# ---- Notes ----
class Note(ApiModel):
    author: str = ""
    text: str = ""


class ClaimNoteSet(ApiModel):
    id: int
    notes: List[Note] = Field(default_factory=list)


# ---- API models ----
class ClaimSummaryResponse(ApiModel):
    claim_id: int
    summary: str
    customer_summary: str
    adjuster_summary: str
    next_step: str

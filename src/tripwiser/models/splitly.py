import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CURRENCY_PATTERN = "^[A-Z]{3}$"


class LedgerModel(BaseModel):
    """Snake_case in Python, camelCase in the document store and on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Member(LedgerModel):
    id: str = Field(..., min_length=1)
    name: str
    email: str | None = None


class Participant(LedgerModel):
    member_id: str
    amount: float


class Expense(LedgerModel):
    id: str
    title: str
    amount: float
    currency: str = Field(..., pattern=CURRENCY_PATTERN)
    paid_by: str
    date: dt.date
    participants: list[Participant] = Field(..., min_length=1)
    split_type: Literal["equal", "custom"] = "equal"
    notes: str | None = None
    original_amount: float | None = None


class Settlement(LedgerModel):
    id: str
    paid_by: str
    paid_to: str
    amount: float = Field(..., gt=0)
    currency: str = Field(..., pattern=CURRENCY_PATTERN)
    date: dt.date
    notes: str | None = None


class Group(LedgerModel):
    id: str
    name: str
    base_currency: str = Field("USD", pattern=CURRENCY_PATTERN)
    members: list[Member] = []
    expenses: list[Expense] = []
    settlements: list[Settlement] = []


class Balance(LedgerModel):
    """A settling transfer: ``from_member`` owes ``to_member`` ``amount``."""

    from_member: str = Field(..., alias="from")
    to_member: str = Field(..., alias="to")
    amount: float = Field(..., gt=0)

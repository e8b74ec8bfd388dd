import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import Field, model_validator

from tripwiser.models.splitly import CURRENCY_PATTERN, LedgerModel

ExpenseCategory = Literal[
    "accommodation",
    "food",
    "transportation",
    "activities",
    "shopping",
    "entertainment",
    "health",
    "other",
]
TripStatus = Literal["planned", "ongoing", "completed", "cancelled"]
FundType = Literal["budget", "miscellaneous", "safety"]


class FundTier(str, Enum):
    """Fund being drawn from, in increasing order of severity."""

    BUDGET = "budget"
    MISCELLANEOUS = "miscellaneous"
    SAFETY = "safety"
    DEPLETED = "depleted"

    @property
    def severity(self) -> int:
        return list(FundTier).index(self)


class FundAllocation(LedgerModel):
    budget: float = Field(..., ge=0)
    miscellaneous_funds: float = Field(0.0, ge=0)
    safety_funds: float = Field(0.0, ge=0)


class TripExpense(LedgerModel):
    id: str
    name: str
    category: ExpenseCategory = "other"
    date: dt.date
    amount: float
    amount_in_home_currency: float
    fund_type: FundType = "budget"
    notes: str | None = None


class Trip(FundAllocation):
    id: str
    name: str
    destination: str
    start_date: dt.date
    end_date: dt.date
    status: TripStatus = "planned"
    home_currency: str = Field("USD", pattern=CURRENCY_PATTERN)
    trip_currency: str = Field("USD", pattern=CURRENCY_PATTERN)
    expenses: list[TripExpense] = []

    @model_validator(mode="after")
    def end_not_before_start(self) -> "Trip":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FundStatus(LedgerModel):
    budget_remaining: float = Field(..., ge=0)
    miscellaneous_remaining: float = Field(..., ge=0)
    safety_remaining: float = Field(..., ge=0)
    status: FundTier


class BudgetAlert(LedgerModel):
    title: str
    message: str
    severity: Literal["info", "warning", "critical"]
    tier: FundTier

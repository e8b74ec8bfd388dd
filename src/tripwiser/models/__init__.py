"""
Pydantic models for Tripwiser.
"""

from tripwiser.models.splitly import Balance, Expense, Group, Member, Participant, Settlement
from tripwiser.models.trip import BudgetAlert, FundAllocation, FundStatus, FundTier, Trip, TripExpense

__all__ = [
    "Balance",
    "BudgetAlert",
    "Expense",
    "FundAllocation",
    "FundStatus",
    "FundTier",
    "Group",
    "Member",
    "Participant",
    "Settlement",
    "Trip",
    "TripExpense",
]

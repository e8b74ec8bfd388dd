"""Trip fund depletion tracking.

Spending is drawn from the three fund tiers in a fixed order: the trip budget
first, then miscellaneous funds, then safety funds. Miscellaneous funds are
untouched until the budget is exhausted, and safety funds until both are.
"""

from typing import Sequence

from tripwiser.models import BudgetAlert, FundAllocation, FundStatus, FundTier, Trip, TripExpense
from tripwiser.models.trip import FundType

# Budget usage percentages that raise an alert, highest first.
USAGE_THRESHOLDS: list[tuple[int, str]] = [(90, "critical"), (75, "warning"), (50, "info")]


def calculate_total_spent(expenses: Sequence[TripExpense], fund_type: FundType | None = None) -> float:
    """Sum of expenses in home currency, optionally for one fund type only."""
    return sum(
        (e.amount_in_home_currency for e in expenses if fund_type is None or e.fund_type == fund_type),
        0.0,
    )


def compute_fund_status(allocation: FundAllocation, total_spent: float) -> FundStatus:
    spent = max(0.0, total_spent)
    budget = allocation.budget
    miscellaneous = allocation.miscellaneous_funds
    safety = allocation.safety_funds

    if spent <= budget:
        return FundStatus(
            budget_remaining=budget - spent,
            miscellaneous_remaining=miscellaneous,
            safety_remaining=safety,
            status=FundTier.BUDGET,
        )

    overflow = spent - budget
    if overflow <= miscellaneous:
        return FundStatus(
            budget_remaining=0.0,
            miscellaneous_remaining=miscellaneous - overflow,
            safety_remaining=safety,
            status=FundTier.MISCELLANEOUS,
        )

    overflow -= miscellaneous
    if overflow <= safety:
        return FundStatus(
            budget_remaining=0.0,
            miscellaneous_remaining=0.0,
            safety_remaining=safety - overflow,
            status=FundTier.SAFETY,
        )

    return FundStatus(
        budget_remaining=0.0,
        miscellaneous_remaining=0.0,
        safety_remaining=0.0,
        status=FundTier.DEPLETED,
    )


def compute_trip_fund_status(trip: Trip) -> FundStatus:
    return compute_fund_status(trip, calculate_total_spent(trip.expenses))


def budget_alerts(allocation: FundAllocation, fund_status: FundStatus, trip_name: str) -> list[BudgetAlert]:
    """Alerts for budget usage and for drawing on a lower fund tier."""
    alerts: list[BudgetAlert] = []

    if allocation.budget > 0:
        used_pct = (allocation.budget - fund_status.budget_remaining) / allocation.budget * 100
        for threshold, severity in USAGE_THRESHOLDS:
            if used_pct >= threshold:
                alerts.append(
                    BudgetAlert(
                        title="Budget Alert",
                        message=f"You've used {threshold}% of your budget for '{trip_name}'",
                        severity=severity,
                        tier=fund_status.status,
                    )
                )
                break

    if fund_status.status == FundTier.MISCELLANEOUS:
        alerts.append(
            BudgetAlert(
                title="Budget Depleted",
                message=(
                    f"Your budget for '{trip_name}' has been depleted. "
                    "Expenses are now being deducted from your miscellaneous funds."
                ),
                severity="critical",
                tier=fund_status.status,
            )
        )
    elif fund_status.status == FundTier.SAFETY:
        alerts.append(
            BudgetAlert(
                title="Miscellaneous Funds Depleted",
                message=(
                    f"Your budget and miscellaneous funds for '{trip_name}' have been depleted. "
                    "Expenses are now being deducted from your safety funds."
                ),
                severity="critical",
                tier=fund_status.status,
            )
        )
    elif fund_status.status == FundTier.DEPLETED:
        alerts.append(
            BudgetAlert(
                title="All Funds Depleted",
                message=(
                    f"All funds for '{trip_name}' have been depleted. "
                    "Please add more funds to continue tracking expenses."
                ),
                severity="critical",
                tier=fund_status.status,
            )
        )

    return alerts

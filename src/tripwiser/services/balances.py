"""Group balance computation and debt simplification.

Every call works on caller-supplied data only, so handlers can re-run it on
each change to a group without any shared state.
"""

import logging
from typing import Sequence

from tripwiser.errors import ErrorCode, ValidationError
from tripwiser.models import Balance, Expense, Group, Member, Settlement
from tripwiser.services.currency import RateTable, convert_currency

logger = logging.getLogger(__name__)

# Balances within half a minor unit of zero are settled.
DEFAULT_EPSILON = 0.005
DEFAULT_SHARE_TOLERANCE = 0.01


def _require_member(member_ids: set[str], member_id: str, context: str) -> None:
    if member_id not in member_ids:
        raise ValidationError(f"{context} references unknown member '{member_id}'", code=ErrorCode.UNKNOWN_MEMBER)


def _shares_total(expense: Expense, tolerance: float) -> float:
    """Sum of the listed shares, which must match the expense total within ``tolerance``."""
    shares = sum(p.amount for p in expense.participants)
    drift = round(abs(expense.amount - shares), 6)
    if drift > tolerance:
        raise ValidationError(
            f"Expense '{expense.id}' shares sum to {shares:.2f}, expected {expense.amount:.2f}",
            code=ErrorCode.SHARES_MISMATCH,
        )
    return shares


def compute_net_positions(
    members: Sequence[Member],
    expenses: Sequence[Expense],
    settlements: Sequence[Settlement],
    base_currency: str,
    *,
    rates: RateTable | None = None,
    share_tolerance: float = DEFAULT_SHARE_TOLERANCE,
) -> dict[str, float]:
    """Signed net per member in ``base_currency``: positive is owed, negative owes."""
    net = {m.id: 0.0 for m in members}
    if len(net) != len(members):
        raise ValidationError("Group has duplicate member ids")
    member_ids = set(net)

    for expense in expenses:
        _require_member(member_ids, expense.paid_by, f"Expense '{expense.id}' paid_by")
        for participant in expense.participants:
            _require_member(member_ids, participant.member_id, f"Expense '{expense.id}' participant")
        shares = _shares_total(expense, share_tolerance)

        # The payer is credited with the shares actually debited, absorbing accepted drift.
        net[expense.paid_by] += convert_currency(shares, expense.currency, base_currency, rates)
        for participant in expense.participants:
            net[participant.member_id] -= convert_currency(
                participant.amount, expense.currency, base_currency, rates
            )

    for settlement in settlements:
        _require_member(member_ids, settlement.paid_by, f"Settlement '{settlement.id}' paid_by")
        _require_member(member_ids, settlement.paid_to, f"Settlement '{settlement.id}' paid_to")
        if settlement.paid_by == settlement.paid_to:
            raise ValidationError(
                f"Settlement '{settlement.id}' pays member '{settlement.paid_by}' to themselves",
                code=ErrorCode.SELF_SETTLEMENT,
            )
        amount = convert_currency(settlement.amount, settlement.currency, base_currency, rates)
        # Paying reduces what paid_by owes and what paid_to is owed.
        net[settlement.paid_by] += amount
        net[settlement.paid_to] -= amount

    return net


def _largest(parties: dict[str, float], order: dict[str, int]) -> str:
    return max(parties, key=lambda member_id: (parties[member_id], -order[member_id]))


def settle_net_positions(
    net: dict[str, float],
    order: Sequence[str] | None = None,
    epsilon: float = DEFAULT_EPSILON,
) -> list[Balance]:
    """Greedy largest-debtor-to-largest-creditor settlement of net positions.

    Ties break by position in ``order`` (defaults to the iteration order of ``net``).
    """
    total = sum(net.values())
    if abs(total) > epsilon:
        raise ValidationError(f"Net positions sum to {total:.6f}, expected 0", code=ErrorCode.UNBALANCED_LEDGER)

    rank = {member_id: i for i, member_id in enumerate(order if order is not None else net)}
    creditors = {m: v for m, v in net.items() if v > epsilon}
    debtors = {m: -v for m, v in net.items() if v < -epsilon}

    transfers: list[Balance] = []
    while creditors and debtors:
        debtor = _largest(debtors, rank)
        creditor = _largest(creditors, rank)
        amount = min(debtors[debtor], creditors[creditor])
        transfers.append(Balance(from_member=debtor, to_member=creditor, amount=amount))

        debtors[debtor] -= amount
        creditors[creditor] -= amount
        if debtors[debtor] <= epsilon:
            del debtors[debtor]
        if creditors[creditor] <= epsilon:
            del creditors[creditor]

    leftover = sum(creditors.values()) + sum(debtors.values())
    if leftover > epsilon:
        raise ValidationError(f"{leftover:.6f} left unsettled", code=ErrorCode.UNBALANCED_LEDGER)

    return transfers


def compute_balances(
    members: Sequence[Member],
    expenses: Sequence[Expense],
    settlements: Sequence[Settlement],
    base_currency: str,
    *,
    rates: RateTable | None = None,
    epsilon: float = DEFAULT_EPSILON,
    share_tolerance: float = DEFAULT_SHARE_TOLERANCE,
) -> list[Balance]:
    """Minimal list of transfers that brings every member's net position to zero."""
    net = compute_net_positions(
        members, expenses, settlements, base_currency, rates=rates, share_tolerance=share_tolerance
    )
    transfers = settle_net_positions(net, order=[m.id for m in members], epsilon=epsilon)
    logger.debug(
        "Settled %d members with %d transfers (%d expenses, %d settlements)",
        len(members),
        len(transfers),
        len(expenses),
        len(settlements),
    )
    return transfers


def compute_group_balances(group: Group, **kwargs) -> list[Balance]:
    return compute_balances(group.members, group.expenses, group.settlements, group.base_currency, **kwargs)

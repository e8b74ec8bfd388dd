"""Expense split helpers and member reference checks."""

from typing import Sequence

from tripwiser.errors import ErrorCode, NotFoundError, ValidationError
from tripwiser.models import Expense, Group, Participant


def split_equally(amount: float, member_ids: Sequence[str]) -> list[Participant]:
    """Split ``amount`` into cent-exact shares; leftover cents go to the first members."""
    if not member_ids:
        raise ValidationError("Cannot split an expense between zero members")

    cents = round(amount * 100)
    base, remainder = divmod(cents, len(member_ids))
    return [
        Participant(member_id=member_id, amount=(base + (1 if i < remainder else 0)) / 100)
        for i, member_id in enumerate(member_ids)
    ]


def rescale_participants(expense: Expense, new_amount: float) -> list[Participant]:
    """Shares for ``expense`` after its total changes to ``new_amount``.

    Equal splits are re-split evenly, custom splits keep their proportions.
    """
    if expense.split_type == "equal":
        return split_equally(new_amount, [p.member_id for p in expense.participants])

    old_total = sum(p.amount for p in expense.participants)
    if old_total == 0:
        raise ValidationError(f"Expense '{expense.id}' has no shares to scale", code=ErrorCode.SHARES_MISMATCH)

    ratio = new_amount / old_total
    return [Participant(member_id=p.member_id, amount=p.amount * ratio) for p in expense.participants]


def member_references(group: Group, member_id: str) -> bool:
    """True if any expense or settlement in the group involves ``member_id``."""
    for expense in group.expenses:
        if expense.paid_by == member_id or any(p.member_id == member_id for p in expense.participants):
            return True
    return any(s.paid_by == member_id or s.paid_to == member_id for s in group.settlements)


def ensure_member_removable(group: Group, member_id: str) -> None:
    if not any(m.id == member_id for m in group.members):
        raise NotFoundError(
            f"Member '{member_id}' is not in group '{group.id}'", code=ErrorCode.MEMBER_NOT_FOUND
        )
    if member_references(group, member_id):
        raise ValidationError(
            f"Member '{member_id}' is referenced by expenses or settlements in group '{group.id}'",
            code=ErrorCode.MEMBER_IN_USE,
        )

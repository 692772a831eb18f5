"""Derivation of net balances from a group's expense ledger."""

import logging
from decimal import Decimal

from .currency import from_minor_units, to_minor_units
from .exceptions import (
    DuplicateParticipantError,
    EmptySplitError,
    InvariantViolationError,
    UnknownParticipantError,
)
from .models import BalanceEntry, Participant, RawExpenseRecord

logger = logging.getLogger(__name__)


def split_evenly(amount_minor: int, count: int) -> list[int]:
    """
    Split an integer amount into ``count`` shares that sum to it exactly.

    Every share gets the floor of the even split; the leftover minor units
    go one each to the leading shares.

    Args:
        amount_minor: Amount in minor units
        count: Number of shares

    Returns:
        List of shares in minor units, largest first

    Raises:
        EmptySplitError: If count is not positive
    """
    if count <= 0:
        raise EmptySplitError(f"Cannot split {amount_minor} minor units {count} ways")

    base_share, remainder = divmod(amount_minor, count)
    return [base_share + 1 if i < remainder else base_share for i in range(count)]


def derive_balances(
    roster: list[Participant],
    expenses: list[RawExpenseRecord],
) -> list[BalanceEntry]:
    """
    Compute each roster participant's net balance from raw expense records.

    Steps:
    1. Convert every amount to minor units
    2. Credit the payer with the full amount
    3. Debit each split member their share (remainder to the first members)
    4. Convert totals back to decimal, in roster order

    Args:
        roster: Everybody in the group, including people with no expenses
        expenses: Expense and settlement records

    Returns:
        One balance entry per roster participant

    Raises:
        DuplicateParticipantError: If the roster repeats a participant id
        UnknownParticipantError: If an expense names someone not on the roster
        EmptySplitError: If an expense has no split members
        InvalidAmountError: If an expense amount is not a finite number
    """
    totals: dict[str, int] = {}
    for participant in roster:
        if participant.participant_id in totals:
            raise DuplicateParticipantError(participant.participant_id)
        totals[participant.participant_id] = 0

    for index, expense in enumerate(expenses):
        if not expense.split_participant_ids:
            raise EmptySplitError(
                f"Expense #{index} ({expense.description or 'no description'}) "
                f"has no split participants"
            )

        for participant_id in (
            expense.paid_by_participant_id,
            *expense.split_participant_ids,
        ):
            if participant_id not in totals:
                raise UnknownParticipantError(participant_id)

        amount_minor = to_minor_units(expense.amount)
        totals[expense.paid_by_participant_id] += amount_minor

        shares = split_evenly(amount_minor, len(expense.split_participant_ids))
        for participant_id, share in zip(
            expense.split_participant_ids, shares, strict=True
        ):
            totals[participant_id] -= share

    residual = sum(totals.values())
    if residual != 0:
        raise InvariantViolationError(
            f"Derived balances do not sum to zero: residual {residual} minor units"
        )

    logger.debug(
        f"Derived balances for {len(roster)} participants "
        f"from {len(expenses)} expenses"
    )

    return [
        BalanceEntry(
            participant_id=p.participant_id,
            display_name=p.display_name,
            net_amount=from_minor_units(totals[p.participant_id]),
        )
        for p in roster
    ]


def balance_for(balances: list[BalanceEntry], participant_id: str) -> Decimal:
    """Get one participant's net amount, or zero if they are not listed."""
    for entry in balances:
        if entry.participant_id == participant_id:
            return entry.net_amount
    return Decimal("0.00")

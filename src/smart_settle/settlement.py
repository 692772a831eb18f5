"""Greedy minimum cash-flow settlement of group balances.

Debtors are matched against creditors largest-first. The result is not
guaranteed to be the fewest possible payments when several amounts tie
(the exact problem is NP-hard), but it never needs more than
``debtors + creditors - 1`` payments.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from .currency import from_minor_units, to_minor_units
from .exceptions import (
    DuplicateParticipantError,
    InvariantViolationError,
    UnknownParticipantError,
)
from .models import BalanceEntry, PaymentMode, RawExpenseRecord, SettlementTransaction

logger = logging.getLogger(__name__)

# Payments under one whole currency unit are not worth making over UPI or cash
DUST_THRESHOLD_MINOR_UNITS = 100

# Largest residual a participant may keep after a plan is applied.
# Kept separate from the dust threshold on purpose.
SETTLEMENT_TOLERANCE = Decimal("1.00")


@dataclass
class _Position:
    """Mutable running balance used while matching."""

    participant_id: str
    display_name: str
    amount: int  # minor units, signed


def _to_positions(balances: list[BalanceEntry]) -> list[_Position]:
    seen: set[str] = set()
    positions = []
    for entry in balances:
        if entry.participant_id in seen:
            raise DuplicateParticipantError(entry.participant_id)
        seen.add(entry.participant_id)
        positions.append(
            _Position(
                participant_id=entry.participant_id,
                display_name=entry.display_name,
                amount=to_minor_units(entry.net_amount),
            )
        )
    return positions


def compute_minimal_settlements(
    balances: list[BalanceEntry],
    dust_threshold_minor_units: int = DUST_THRESHOLD_MINOR_UNITS,
) -> list[SettlementTransaction]:
    """
    Compute the payments that clear a zero-sum set of balances.

    Steps:
    1. Convert balances to minor units
    2. Split into debtors (largest debt first) and creditors (largest credit first)
    3. Walk both lists, settling min(debt, credit) at each step
    4. Emit only payments of at least the dust threshold

    Args:
        balances: Net balances, expected to sum to zero
        dust_threshold_minor_units: Smallest payment worth emitting

    Returns:
        Suggested payments, in matching order

    Raises:
        DuplicateParticipantError: If a participant appears twice
        InvalidAmountError: If a net amount is not a finite number
    """
    positions = _to_positions(balances)

    # sorted() is stable, so equal amounts keep their input order
    debtors = sorted((p for p in positions if p.amount < 0), key=lambda p: p.amount)
    creditors = sorted(
        (p for p in positions if p.amount > 0), key=lambda p: p.amount, reverse=True
    )

    settlements: list[SettlementTransaction] = []
    suppressed = 0
    i = 0  # debtor pointer
    j = 0  # creditor pointer

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        transfer = min(-debtor.amount, creditor.amount)
        debtor.amount += transfer
        creditor.amount -= transfer

        if transfer >= dust_threshold_minor_units:
            settlements.append(
                SettlementTransaction(
                    from_participant_id=debtor.participant_id,
                    from_display_name=debtor.display_name,
                    to_participant_id=creditor.participant_id,
                    to_display_name=creditor.display_name,
                    amount=from_minor_units(transfer),
                )
            )
        else:
            suppressed += transfer

        if debtor.amount == 0:
            i += 1
        if creditor.amount == 0:
            j += 1

    leftover = sum(abs(p.amount) for p in debtors + creditors)
    if suppressed or leftover:
        logger.debug(
            f"Dropped dust: {suppressed} minor units below threshold, "
            f"{leftover} minor units unmatched"
        )

    logger.info(
        f"Settled {len(debtors)} debtors and {len(creditors)} creditors "
        f"with {len(settlements)} payments"
    )

    return settlements


def apply_settlements(
    balances: list[BalanceEntry],
    transactions: list[SettlementTransaction],
) -> list[BalanceEntry]:
    """
    Apply payments to balances and return the resulting balances.

    The payer's balance rises by the amount and the payee's falls by it.

    Raises:
        UnknownParticipantError: If a payment names someone not in the balances
    """
    totals = {p.participant_id: p.amount for p in _to_positions(balances)}

    for tx in transactions:
        for participant_id in (tx.from_participant_id, tx.to_participant_id):
            if participant_id not in totals:
                raise UnknownParticipantError(participant_id, context="balances")
        amount = to_minor_units(tx.amount)
        totals[tx.from_participant_id] += amount
        totals[tx.to_participant_id] -= amount

    return [
        entry.model_copy(
            update={"net_amount": from_minor_units(totals[entry.participant_id])}
        )
        for entry in balances
    ]


def verify_settlements(
    balances: list[BalanceEntry],
    transactions: list[SettlementTransaction],
    tolerance: Decimal = SETTLEMENT_TOLERANCE,
) -> None:
    """
    Check that a set of payments clears the given balances.

    Raises:
        InvariantViolationError: If a payment is a self-payment, names an
            unknown participant, or leaves a residual of at least ``tolerance``
    """
    for tx in transactions:
        if tx.from_participant_id == tx.to_participant_id:
            raise InvariantViolationError(
                f"Self-payment for participant {tx.from_participant_id!r}"
            )

    try:
        remaining = apply_settlements(balances, transactions)
    except UnknownParticipantError as e:
        raise InvariantViolationError(str(e)) from e

    for entry in remaining:
        if abs(entry.net_amount) >= tolerance:
            raise InvariantViolationError(
                f"Participant {entry.participant_id!r} left with "
                f"{entry.net_amount} after settlement (tolerance {tolerance})"
            )


def settlement_to_expense(
    transaction: SettlementTransaction,
    payment_mode: PaymentMode | None = None,
) -> RawExpenseRecord:
    """
    Build the ledger record for a completed payment.

    The payer fronts the amount and the payee is its only split member, so
    deriving balances again moves both of them toward zero.
    """
    return RawExpenseRecord(
        paid_by_participant_id=transaction.from_participant_id,
        amount=transaction.amount,
        split_participant_ids=[transaction.to_participant_id],
        description="Settlement",
        is_settlement=True,
        payment_mode=payment_mode,
    )

"""Service layer that composes balance derivation and settlement.

The functions it wraps are pure; the service only adds settings and
logging and never mutates the ledgers it is given.
"""

import logging

from .balances import derive_balances
from .config import Settings
from .exceptions import UnknownParticipantError
from .models import (
    BalanceEntry,
    GroupLedger,
    Participant,
    PaymentMode,
    RawExpenseRecord,
    SettlementPlan,
    SettlementTransaction,
)
from .settlement import (
    compute_minimal_settlements,
    settlement_to_expense,
    verify_settlements,
)

logger = logging.getLogger(__name__)


class SettlementService:
    """Service for turning a group's expenses into suggested payments."""

    def __init__(self, settings: Settings):
        """Initialize the settlement service."""
        self.settings = settings

    def settle_balances(
        self, balances: list[BalanceEntry]
    ) -> list[SettlementTransaction]:
        """
        Compute payments for balances supplied directly.

        Args:
            balances: Net balances, e.g. from a server-side aggregate

        Returns:
            Suggested payments
        """
        transactions = compute_minimal_settlements(
            balances,
            dust_threshold_minor_units=self.settings.dust_threshold_minor_units,
        )

        if self.settings.verify_plans:
            verify_settlements(
                balances, transactions, tolerance=self.settings.settlement_tolerance
            )

        return transactions

    def plan(
        self,
        roster: list[Participant],
        expenses: list[RawExpenseRecord],
    ) -> SettlementPlan:
        """
        Derive balances from expenses and compute the payments that clear them.

        Args:
            roster: Everybody in the group
            expenses: Expense and settlement records

        Returns:
            Plan with balances and suggested payments
        """
        balances = derive_balances(roster, expenses)
        transactions = self.settle_balances(balances)

        logger.info(
            f"Planned {len(transactions)} payments for {len(roster)} participants "
            f"across {len(expenses)} expenses"
        )

        return SettlementPlan(balances=balances, transactions=transactions)

    def plan_for_ledger(self, ledger: GroupLedger) -> SettlementPlan:
        """Compute the settlement plan for a whole ledger."""
        return self.plan(ledger.participants, ledger.expenses)

    def record_payment(
        self,
        ledger: GroupLedger,
        transaction: SettlementTransaction,
        payment_mode: PaymentMode | None = None,
    ) -> GroupLedger:
        """
        Return a copy of the ledger with a settle-up payment appended.

        Args:
            ledger: Current ledger (left unchanged)
            transaction: The payment that was made
            payment_mode: How it was paid

        Returns:
            New ledger including the payment record

        Raises:
            UnknownParticipantError: If payer or payee is not in the ledger
        """
        roster_ids = {p.participant_id for p in ledger.participants}
        for participant_id in (
            transaction.from_participant_id,
            transaction.to_participant_id,
        ):
            if participant_id not in roster_ids:
                raise UnknownParticipantError(participant_id)

        record = settlement_to_expense(transaction, payment_mode)

        logger.info(
            f"Recording payment of {transaction.amount} from "
            f"{transaction.from_display_name} to {transaction.to_display_name}"
        )

        return ledger.model_copy(update={"expenses": [*ledger.expenses, record]})

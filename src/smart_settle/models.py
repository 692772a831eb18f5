"""Pydantic domain models for Smart Settle."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PaymentMode = Literal["Cash", "UPI", "Card"]

# ============================================================================
# Group Models
# ============================================================================


class Participant(BaseModel):
    """A member of the group roster."""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    display_name: str


class RawExpenseRecord(BaseModel):
    """An expense as stored by the ledger.

    Settle-up payments are stored the same way: the payer fronts the money
    and the payee is the only split member.
    """

    paid_by_participant_id: str
    amount: Decimal = Field(gt=0)
    split_participant_ids: list[str]  # order decides who absorbs the remainder
    description: str = ""
    is_settlement: bool = False
    payment_mode: PaymentMode | None = None


class GroupLedger(BaseModel):
    """A group's roster and expense history, as read from a ledger file."""

    name: str
    currency: str | None = None  # falls back to Settings.currency
    participants: list[Participant]
    expenses: list[RawExpenseRecord] = Field(default_factory=list)


# ============================================================================
# Settlement Models
# ============================================================================


class BalanceEntry(BaseModel):
    """Net position of one participant.

    Negative means the participant owes the group, positive means the group
    owes them.
    """

    model_config = ConfigDict(frozen=True)

    participant_id: str
    display_name: str
    net_amount: Decimal


class SettlementTransaction(BaseModel):
    """One suggested payment from a debtor to a creditor."""

    model_config = ConfigDict(frozen=True)

    from_participant_id: str
    from_display_name: str
    to_participant_id: str
    to_display_name: str
    amount: Decimal = Field(gt=0, decimal_places=2)  # whole minor units only

    @model_validator(mode="after")
    def _check_distinct_parties(self) -> "SettlementTransaction":
        if self.from_participant_id == self.to_participant_id:
            raise ValueError(
                f"Participant {self.from_participant_id!r} cannot pay themselves"
            )
        return self


class SettlementPlan(BaseModel):
    """Balances for a group together with the payments that clear them."""

    balances: list[BalanceEntry]
    transactions: list[SettlementTransaction]

    @property
    def is_settled(self) -> bool:
        """True when nobody needs to pay anybody."""
        return not self.transactions

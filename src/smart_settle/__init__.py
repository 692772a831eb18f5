"""Smart Settle - Minimal debt settlement for shared group expenses."""

__version__ = "0.1.0"

from .balances import balance_for, derive_balances, split_evenly
from .config import Settings, load_settings
from .currency import from_minor_units, to_minor_units
from .models import (
    BalanceEntry,
    GroupLedger,
    Participant,
    RawExpenseRecord,
    SettlementPlan,
    SettlementTransaction,
)
from .service import SettlementService
from .settlement import (
    DUST_THRESHOLD_MINOR_UNITS,
    SETTLEMENT_TOLERANCE,
    apply_settlements,
    compute_minimal_settlements,
    settlement_to_expense,
    verify_settlements,
)

__all__ = [
    "Settings",
    "load_settings",
    "BalanceEntry",
    "GroupLedger",
    "Participant",
    "RawExpenseRecord",
    "SettlementPlan",
    "SettlementTransaction",
    "balance_for",
    "derive_balances",
    "split_evenly",
    "from_minor_units",
    "to_minor_units",
    "DUST_THRESHOLD_MINOR_UNITS",
    "SETTLEMENT_TOLERANCE",
    "apply_settlements",
    "compute_minimal_settlements",
    "settlement_to_expense",
    "verify_settlements",
    "SettlementService",
]

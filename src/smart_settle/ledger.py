"""Reading and writing group ledger files."""

import logging
from pathlib import Path

from pydantic import ValidationError

from .exceptions import LedgerError
from .models import GroupLedger

logger = logging.getLogger(__name__)


def load_ledger(path: Path) -> GroupLedger:
    """
    Load a group ledger from a JSON file.

    Args:
        path: Path to the ledger file

    Returns:
        The parsed ledger

    Raises:
        LedgerError: If the file is missing or not a valid ledger
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LedgerError(f"Cannot read ledger {path}: {e}") from e

    try:
        ledger = GroupLedger.model_validate_json(raw)
    except ValidationError as e:
        raise LedgerError(f"Invalid ledger {path}:\n{e}") from e

    logger.info(
        f"Loaded ledger '{ledger.name}': {len(ledger.participants)} participants, "
        f"{len(ledger.expenses)} expenses"
    )
    return ledger


def dump_ledger(ledger: GroupLedger, path: Path) -> None:
    """Write a group ledger to a JSON file."""
    try:
        path.write_text(ledger.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise LedgerError(f"Cannot write ledger {path}: {e}") from e

    logger.info(f"Wrote ledger '{ledger.name}' to {path}")

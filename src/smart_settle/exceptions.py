"""Custom exceptions for Smart Settle."""


class SmartSettleError(Exception):
    """Base exception for all Smart Settle errors."""

    pass


class ConfigurationError(SmartSettleError):
    """Raised when configuration is invalid or missing."""

    pass


class LedgerError(SmartSettleError):
    """Raised when a ledger file cannot be read or written."""

    pass


class ValidationError(SmartSettleError, ValueError):
    """Base class for rejected monetary input."""

    pass


class InvalidAmountError(ValidationError):
    """Raised when an amount is missing, non-numeric or non-finite."""

    def __init__(self, amount: object, message: str | None = None):
        self.amount = amount
        super().__init__(message or f"Invalid currency amount: {amount!r}")


class EmptySplitError(ValidationError):
    """Raised when an expense has nobody to split its cost with."""

    pass


class DuplicateParticipantError(ValidationError):
    """Raised when the same participant id appears twice in one input list."""

    def __init__(self, participant_id: str):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id!r} appears more than once")


class UnknownParticipantError(ValidationError):
    """Raised when an expense or payment names someone outside the roster."""

    def __init__(self, participant_id: str, context: str = "roster"):
        self.participant_id = participant_id
        super().__init__(f"Participant {participant_id!r} is not in the {context}")


class InvariantViolationError(SmartSettleError):
    """Raised when a computed result breaks a ledger invariant.

    This points at a defect in the engine itself, not at bad input.
    """

    pass

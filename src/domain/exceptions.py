"""Typed errors raised by the closing engine."""

from decimal import Decimal


class ClosingEngineError(Exception):
    """Base class for closing engine failures."""


class LedgerStorageError(ClosingEngineError):
    """Raised when the ledger store cannot be read or written."""


class NumberingUnavailableError(LedgerStorageError):
    """Raised when no document number can be allocated."""


class ClosingRunConflictError(ClosingEngineError):
    """Raised when a closing step was already claimed for a period."""


class UnbalancedEntryError(ClosingEngineError):
    """Raised when closing lines do not balance debits against credits."""

    def __init__(self, total_debit: Decimal, total_credit: Decimal) -> None:
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Unbalanced entry: debit={total_debit}, credit={total_credit}"
        )


__all__ = [
    "ClosingEngineError",
    "LedgerStorageError",
    "NumberingUnavailableError",
    "ClosingRunConflictError",
    "UnbalancedEntryError",
]

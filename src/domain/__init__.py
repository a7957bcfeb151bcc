"""Domain package for business rules and core models."""

from .constants import (
    BALANCE_SHEET_CLASSES,
    CLOSING_BALANCE_ACCOUNT,
    EXPENSE_CLASS,
    OPENING_BALANCE_ACCOUNT,
    PROFIT_LOSS_ACCOUNT,
    REVENUE_CLASS,
)
from .exceptions import (
    ClosingEngineError,
    ClosingRunConflictError,
    LedgerStorageError,
    NumberingUnavailableError,
    UnbalancedEntryError,
)
from .models import (
    AccountBalance,
    ClosingResult,
    ClosingStep,
)
from .policies import matches_code_prefix
from .services import (
    aggregate_account_balances,
    build_expense_close_plan,
    build_opening_balance_plan,
    build_profit_loss_plan,
    build_revenue_close_plan,
    ensure_balanced,
)

__all__ = [
    "BALANCE_SHEET_CLASSES",
    "CLOSING_BALANCE_ACCOUNT",
    "EXPENSE_CLASS",
    "OPENING_BALANCE_ACCOUNT",
    "PROFIT_LOSS_ACCOUNT",
    "REVENUE_CLASS",
    "ClosingEngineError",
    "ClosingRunConflictError",
    "LedgerStorageError",
    "NumberingUnavailableError",
    "UnbalancedEntryError",
    "AccountBalance",
    "ClosingResult",
    "ClosingStep",
    "matches_code_prefix",
    "aggregate_account_balances",
    "build_expense_close_plan",
    "build_opening_balance_plan",
    "build_profit_loss_plan",
    "build_revenue_close_plan",
    "ensure_balanced",
]

"""Application use cases package."""

from .close_expense_accounts import CloseExpenseAccountsUseCase
from .close_profit_loss_account import CloseProfitLossAccountUseCase
from .close_revenue_accounts import CloseRevenueAccountsUseCase
from .closing_step import ClosingStepError, ClosingStepUseCase
from .create_closing_entry import CreateClosingEntryUseCase
from .generate_opening_balances import GenerateOpeningBalancesUseCase
from .get_account_balances import GetAccountBalancesUseCase
from .get_closing_status import GetClosingStatusUseCase
from .preview_opening_balances import PreviewOpeningBalancesUseCase
from .resolve_control_account import ResolveControlAccountUseCase
from .run_closing_operation import RunClosingOperationUseCase

__all__ = [
    "CloseExpenseAccountsUseCase",
    "CloseProfitLossAccountUseCase",
    "CloseRevenueAccountsUseCase",
    "ClosingStepError",
    "ClosingStepUseCase",
    "CreateClosingEntryUseCase",
    "GenerateOpeningBalancesUseCase",
    "GetAccountBalancesUseCase",
    "GetClosingStatusUseCase",
    "PreviewOpeningBalancesUseCase",
    "ResolveControlAccountUseCase",
    "RunClosingOperationUseCase",
]

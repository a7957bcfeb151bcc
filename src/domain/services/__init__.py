"""Domain services package."""

from .aggregation import aggregate_account_balances
from .balancing import (
    build_expense_close_plan,
    build_opening_balance_plan,
    build_profit_loss_plan,
    build_revenue_close_plan,
    period_result,
)
from .validation import abnormal_balance_warning, ensure_balanced, sum_sides

__all__ = [
    "aggregate_account_balances",
    "build_expense_close_plan",
    "build_opening_balance_plan",
    "build_profit_loss_plan",
    "build_revenue_close_plan",
    "period_result",
    "abnormal_balance_warning",
    "ensure_balanced",
    "sum_sides",
]

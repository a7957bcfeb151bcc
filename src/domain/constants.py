"""Domain constants for period-close operations."""

from decimal import Decimal

from src.domain.models.accounts import ControlAccount


NATURE_PASSIVE = "passive"

STATUS_POSTED = "posted"

RUN_STATUS_RUNNING = "running"
RUN_STATUS_COMPLETED = "completed"

REVENUE_CLASS = "6"
EXPENSE_CLASS = "5"
BALANCE_SHEET_CLASSES = ("0", "1", "2", "3", "4")

AMOUNT_TOLERANCE = Decimal("0.01")

PROFIT_LOSS_ACCOUNT = ControlAccount(
    code="710",
    name="Profit and loss account",
    nature=NATURE_PASSIVE,
)
CLOSING_BALANCE_ACCOUNT = ControlAccount(
    code="702",
    name="Closing balance sheet account",
    nature=NATURE_PASSIVE,
)
OPENING_BALANCE_ACCOUNT = ControlAccount(
    code="701",
    name="Opening balance sheet account",
    nature=NATURE_PASSIVE,
)


__all__ = [
    "NATURE_PASSIVE",
    "STATUS_POSTED",
    "RUN_STATUS_RUNNING",
    "RUN_STATUS_COMPLETED",
    "REVENUE_CLASS",
    "EXPENSE_CLASS",
    "BALANCE_SHEET_CLASSES",
    "AMOUNT_TOLERANCE",
    "PROFIT_LOSS_ACCOUNT",
    "CLOSING_BALANCE_ACCOUNT",
    "OPENING_BALANCE_ACCOUNT",
]

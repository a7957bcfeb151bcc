"""Domain validation helpers."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import AMOUNT_TOLERANCE
from src.domain.exceptions import UnbalancedEntryError
from src.domain.models import AccountBalance, ClosingLine, LineSide


def sum_sides(lines: Iterable[ClosingLine]) -> tuple[Decimal, Decimal]:
    """Return the debit and credit totals of closing lines.

    Args:
        lines: Lines of a single journal entry.

    Returns:
        tuple[Decimal, Decimal]: Total debit and total credit.
    """
    total_debit = Decimal("0.00")
    total_credit = Decimal("0.00")
    for line in lines:
        if line.side == LineSide.DEBIT:
            total_debit += line.amount
        else:
            total_credit += line.amount
    return total_debit, total_credit


def ensure_balanced(lines: Iterable[ClosingLine]) -> None:
    """Raise when debits and credits of the lines disagree.

    Args:
        lines: Lines of a single journal entry.

    Raises:
        UnbalancedEntryError: If the sides differ by one cent or more.
    """
    total_debit, total_credit = sum_sides(lines)
    if abs(total_debit - total_credit) >= AMOUNT_TOLERANCE:
        raise UnbalancedEntryError(total_debit, total_credit)


def abnormal_balance_warning(
    balance: AccountBalance,
    normal_side: LineSide,
) -> str:
    """Describe an account whose balance sits on its abnormal side.

    Args:
        balance: Aggregated balance of the account.
        normal_side: Side on which the account class normally carries
            its balance.

    Returns:
        str: Human readable warning.
    """
    heavy_side = (
        LineSide.CREDIT if normal_side == LineSide.DEBIT else LineSide.DEBIT
    )
    return (
        f"Account {balance.code} ({balance.name}) has a {heavy_side.value} "
        f"balance of {abs(balance.net_balance)}; expected a "
        f"{normal_side.value} balance"
    )


__all__ = ["sum_sides", "ensure_balanced", "abnormal_balance_warning"]

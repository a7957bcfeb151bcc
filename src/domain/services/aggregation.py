"""Aggregation of posted journal lines into account balances."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.models import Account, AccountBalance, LineSide, PostedLineRow
from src.utils.decimal_utils import coerce_decimal


def aggregate_account_balances(
    accounts: Iterable[Account],
    lines: Iterable[PostedLineRow],
) -> list[AccountBalance]:
    """Sum posted line amounts per account and side.

    Args:
        accounts: Accounts the balances are computed for.
        lines: Posted lines already restricted to the period.

    Returns:
        list[AccountBalance]: One balance per account with activity,
        ordered by account code. Accounts whose debit and credit totals
        are both zero are left out.
    """
    totals: dict[str, list[Decimal]] = {}
    for line in lines:
        bucket = totals.setdefault(
            line.account_id,
            [Decimal("0"), Decimal("0")],
        )
        amount = coerce_decimal(line.amount)
        if line.side == LineSide.DEBIT:
            bucket[0] += amount
        else:
            bucket[1] += amount

    balances = []
    for account in accounts:
        bucket = totals.get(account.id)
        if bucket is None:
            continue
        total_debit, total_credit = bucket
        if total_debit == 0 and total_credit == 0:
            continue
        balances.append(
            AccountBalance(
                account_id=account.id,
                code=account.code,
                name=account.name,
                total_debit=total_debit,
                total_credit=total_credit,
            )
        )
    return sorted(balances, key=lambda item: (item.code, item.account_id))


__all__ = ["aggregate_account_balances"]

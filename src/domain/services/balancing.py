"""Balancing entry builder for closing postings.

Each builder turns aggregated account balances into a ``BalancingPlan``:
one posting per account that moves its balance away, followed by the
counter-posting(s) on a control account. Amounts are rounded to cents
before the lines are built and the counter-postings are summed from the
rounded amounts, so every plan balances exactly.
"""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import AMOUNT_TOLERANCE
from src.domain.models import (
    AccountBalance,
    BalancingPlan,
    ClosingLine,
    LineSide,
)
from src.domain.services.validation import (
    abnormal_balance_warning,
    ensure_balanced,
)
from src.utils.decimal_utils import round_money


def _opposite(side: LineSide) -> LineSide:
    if side == LineSide.DEBIT:
        return LineSide.CREDIT
    return LineSide.DEBIT


def _excess_on(balance: AccountBalance, side: LineSide) -> Decimal:
    """Return how much heavier the given side is than the other one."""
    if side == LineSide.DEBIT:
        return balance.total_debit - balance.total_credit
    return balance.total_credit - balance.total_debit


def _build_class_close_plan(
    balances: Iterable[AccountBalance],
    control_account_id: str,
    *,
    normal_side: LineSide,
    account_label: str,
    control_description: str,
) -> BalancingPlan:
    lines: list[ClosingLine] = []
    warnings: list[str] = []
    net_total = Decimal("0.00")

    for balance in balances:
        excess = _excess_on(balance, normal_side)
        if abs(excess) < AMOUNT_TOLERANCE:
            continue
        amount = round_money(abs(excess))
        if excess > 0:
            side = _opposite(normal_side)
            net_total += amount
        else:
            side = normal_side
            net_total -= amount
            warnings.append(abnormal_balance_warning(balance, normal_side))
        lines.append(
            ClosingLine(
                account_id=balance.account_id,
                side=side,
                amount=amount,
                description=(
                    f"Closing of {account_label} account "
                    f"{balance.code} - {balance.name}"
                ),
            )
        )

    if not lines:
        return BalancingPlan()

    accounts_count = len(lines)
    if net_total > 0:
        control_side = normal_side
    else:
        control_side = _opposite(normal_side)
    if net_total != 0:
        lines.append(
            ClosingLine(
                account_id=control_account_id,
                side=control_side,
                amount=abs(net_total),
                description=control_description,
            )
        )

    ensure_balanced(lines)
    return BalancingPlan(
        lines=lines,
        total_amount=abs(net_total),
        accounts_count=accounts_count,
        warnings=tuple(warnings),
    )


def build_revenue_close_plan(
    balances: Iterable[AccountBalance],
    profit_loss_account_id: str,
) -> BalancingPlan:
    """Close revenue accounts against the profit and loss account.

    Revenue accounts normally carry a credit balance and are closed by a
    debit; the profit and loss account takes the net as a credit.

    Args:
        balances: Balances of class 6 accounts for the period.
        profit_loss_account_id: Identifier of account 710.

    Returns:
        BalancingPlan: Lines to post, empty when nothing has to move.
    """
    return _build_class_close_plan(
        balances,
        profit_loss_account_id,
        normal_side=LineSide.CREDIT,
        account_label="revenue",
        control_description="Transfer of revenues to the profit and loss account",
    )


def build_expense_close_plan(
    balances: Iterable[AccountBalance],
    profit_loss_account_id: str,
) -> BalancingPlan:
    """Close expense accounts against the profit and loss account.

    Args:
        balances: Balances of class 5 accounts for the period.
        profit_loss_account_id: Identifier of account 710.

    Returns:
        BalancingPlan: Lines to post, empty when nothing has to move.
    """
    return _build_class_close_plan(
        balances,
        profit_loss_account_id,
        normal_side=LineSide.DEBIT,
        account_label="expense",
        control_description="Transfer of expenses to the profit and loss account",
    )


def period_result(balance: AccountBalance | None) -> Decimal:
    """Return the period result held on the profit and loss account.

    A positive value is a profit, a negative value a loss.
    """
    if balance is None:
        return Decimal("0.00")
    return balance.total_credit - balance.total_debit


def build_profit_loss_plan(
    balance: AccountBalance | None,
    profit_loss_account_id: str,
    closing_account_id: str,
) -> BalancingPlan:
    """Move the profit and loss balance to the closing balance sheet account.

    Args:
        balance: Period balance of account 710.
        profit_loss_account_id: Identifier of account 710.
        closing_account_id: Identifier of account 702.

    Returns:
        BalancingPlan: Two lines for a profit or a loss, empty otherwise.
    """
    result = period_result(balance)
    if abs(result) < AMOUNT_TOLERANCE:
        return BalancingPlan()
    amount = round_money(abs(result))
    if result > 0:
        lines = [
            ClosingLine(
                account_id=profit_loss_account_id,
                side=LineSide.DEBIT,
                amount=amount,
                description="Closing of the profit and loss account - profit",
            ),
            ClosingLine(
                account_id=closing_account_id,
                side=LineSide.CREDIT,
                amount=amount,
                description=(
                    "Transfer of the profit to the closing balance sheet account"
                ),
            ),
        ]
    else:
        lines = [
            ClosingLine(
                account_id=profit_loss_account_id,
                side=LineSide.CREDIT,
                amount=amount,
                description="Closing of the profit and loss account - loss",
            ),
            ClosingLine(
                account_id=closing_account_id,
                side=LineSide.DEBIT,
                amount=amount,
                description=(
                    "Transfer of the loss to the closing balance sheet account"
                ),
            ),
        ]
    ensure_balanced(lines)
    return BalancingPlan(lines=lines, total_amount=amount, accounts_count=1)


def build_opening_balance_plan(
    balances: Iterable[AccountBalance],
    opening_account_id: str,
) -> BalancingPlan:
    """Reinstate balance-sheet balances against the opening account.

    Debit-heavy accounts are debited and credit-heavy accounts credited.
    The opening balance sheet account receives exactly one credit summing
    the debit-heavy side and one debit summing the credit-heavy side.

    Args:
        balances: Balances of class 0 to 4 accounts for the closed period.
        opening_account_id: Identifier of account 701.

    Returns:
        BalancingPlan: Lines to post, empty when nothing has to move.
    """
    lines: list[ClosingLine] = []
    active_total = Decimal("0.00")
    passive_total = Decimal("0.00")

    for balance in balances:
        net = balance.net_balance
        if abs(net) < AMOUNT_TOLERANCE:
            continue
        amount = round_money(abs(net))
        if net > 0:
            side = LineSide.DEBIT
            active_total += amount
        else:
            side = LineSide.CREDIT
            passive_total += amount
        lines.append(
            ClosingLine(
                account_id=balance.account_id,
                side=side,
                amount=amount,
                description=(
                    f"Opening balance of account {balance.code} - {balance.name}"
                ),
            )
        )

    if not lines:
        return BalancingPlan()

    accounts_count = len(lines)
    if active_total > 0:
        lines.append(
            ClosingLine(
                account_id=opening_account_id,
                side=LineSide.CREDIT,
                amount=active_total,
                description="Opening balance sheet account - debit balances",
            )
        )
    if passive_total > 0:
        lines.append(
            ClosingLine(
                account_id=opening_account_id,
                side=LineSide.DEBIT,
                amount=passive_total,
                description="Opening balance sheet account - credit balances",
            )
        )

    ensure_balanced(lines)
    return BalancingPlan(
        lines=lines,
        total_amount=active_total + passive_total,
        accounts_count=accounts_count,
    )


__all__ = [
    "build_revenue_close_plan",
    "build_expense_close_plan",
    "build_profit_loss_plan",
    "build_opening_balance_plan",
    "period_result",
]

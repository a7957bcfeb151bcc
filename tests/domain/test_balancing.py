"""Tests for the closing balancing builders."""

from decimal import Decimal

import pytest

from src.domain.exceptions import UnbalancedEntryError
from src.domain.models import AccountBalance, ClosingLine, LineSide
from src.domain.services import (
    build_expense_close_plan,
    build_opening_balance_plan,
    build_profit_loss_plan,
    build_revenue_close_plan,
    ensure_balanced,
    sum_sides,
)


def _balance(code: str, debit: str, credit: str) -> AccountBalance:
    return AccountBalance(
        account_id=f"acc-{code}",
        code=code,
        name=f"Account {code}",
        total_debit=Decimal(debit),
        total_credit=Decimal(credit),
    )


def _sides(plan) -> list[tuple[str, LineSide, Decimal]]:
    return [(line.account_id, line.side, line.amount) for line in plan.lines]


def test_revenue_close_debits_revenue_and_credits_profit_loss() -> None:
    """A single credit-heavy revenue account moves to 710 in full."""
    plan = build_revenue_close_plan([_balance("601", "0", "1000")], "pl")

    assert _sides(plan) == [
        ("acc-601", LineSide.DEBIT, Decimal("1000.00")),
        ("pl", LineSide.CREDIT, Decimal("1000.00")),
    ]
    assert plan.accounts_count == 1
    assert plan.total_amount == Decimal("1000.00")
    assert plan.warnings == ()


def test_revenue_close_counter_posting_equals_moved_amount() -> None:
    """The 710 line conserves the amount moved out of class 6."""
    plan = build_revenue_close_plan(
        [
            _balance("601", "50", "800.10"),
            _balance("602", "0", "199.905"),
        ],
        "pl",
    )

    moved = sum(line.amount for line in plan.lines[:-1])
    assert plan.lines[-1].account_id == "pl"
    assert plan.lines[-1].side == LineSide.CREDIT
    assert plan.lines[-1].amount == moved == Decimal("950.01")
    assert sum_sides(plan.lines) == (Decimal("950.01"), Decimal("950.01"))


def test_revenue_close_flags_abnormal_debit_balance() -> None:
    """A debit-heavy revenue account is credited and reported."""
    plan = build_revenue_close_plan(
        [
            _balance("601", "0", "1000"),
            _balance("609", "150", "0"),
        ],
        "pl",
    )

    assert _sides(plan) == [
        ("acc-601", LineSide.DEBIT, Decimal("1000.00")),
        ("acc-609", LineSide.CREDIT, Decimal("150.00")),
        ("pl", LineSide.CREDIT, Decimal("850.00")),
    ]
    assert plan.total_amount == Decimal("850.00")
    assert len(plan.warnings) == 1
    assert "609" in plan.warnings[0]


def test_revenue_close_with_net_debit_posts_control_on_debit() -> None:
    """When abnormal balances dominate, 710 is debited."""
    plan = build_revenue_close_plan([_balance("609", "40", "0")], "pl")

    assert _sides(plan) == [
        ("acc-609", LineSide.CREDIT, Decimal("40.00")),
        ("pl", LineSide.DEBIT, Decimal("40.00")),
    ]


def test_revenue_close_drops_sub_cent_adjustments() -> None:
    """An adjustment of 0.004 is below the tolerance and produces nothing."""
    plan = build_revenue_close_plan([_balance("601", "0", "0.004")], "pl")

    assert plan.is_empty
    assert plan.accounts_count == 0
    assert plan.total_amount == Decimal("0.00")


def test_revenue_close_with_offsetting_accounts_skips_control_line() -> None:
    """Balanced account lines need no counter-posting."""
    plan = build_revenue_close_plan(
        [
            _balance("601", "0", "100"),
            _balance("609", "100", "0"),
        ],
        "pl",
    )

    assert [line.account_id for line in plan.lines] == ["acc-601", "acc-609"]
    assert plan.total_amount == Decimal("0.00")
    assert plan.accounts_count == 2


def test_expense_close_credits_expenses_and_debits_profit_loss() -> None:
    """Debit-heavy expense accounts are credited against 710."""
    plan = build_expense_close_plan(
        [
            _balance("511", "250", "0"),
            _balance("512", "150.50", "0.50"),
        ],
        "pl",
    )

    assert _sides(plan) == [
        ("acc-511", LineSide.CREDIT, Decimal("250.00")),
        ("acc-512", LineSide.CREDIT, Decimal("150.00")),
        ("pl", LineSide.DEBIT, Decimal("400.00")),
    ]
    assert plan.accounts_count == 2
    assert plan.total_amount == Decimal("400.00")


def test_profit_loss_plan_for_profit() -> None:
    """A credit result of 600 is moved from 710 to 702 as a profit."""
    plan = build_profit_loss_plan(
        _balance("710", "400", "1000"),
        "pl",
        "closing",
    )

    assert _sides(plan) == [
        ("pl", LineSide.DEBIT, Decimal("600.00")),
        ("closing", LineSide.CREDIT, Decimal("600.00")),
    ]
    assert plan.total_amount == Decimal("600.00")
    assert plan.accounts_count == 1


def test_profit_loss_plan_for_loss() -> None:
    """A debit result is moved as a loss."""
    plan = build_profit_loss_plan(
        _balance("710", "900", "300"),
        "pl",
        "closing",
    )

    assert _sides(plan) == [
        ("pl", LineSide.CREDIT, Decimal("600.00")),
        ("closing", LineSide.DEBIT, Decimal("600.00")),
    ]


def test_profit_loss_plan_without_result_is_empty() -> None:
    """A missing or zero 710 balance produces no lines."""
    assert build_profit_loss_plan(None, "pl", "closing").is_empty
    assert build_profit_loss_plan(
        _balance("710", "100", "100"),
        "pl",
        "closing",
    ).is_empty


def test_opening_balance_plan_posts_two_counter_lines() -> None:
    """Active and passive sides each get one 701 counter-posting."""
    plan = build_opening_balance_plan(
        [
            _balance("211", "5000", "1200"),
            _balance("401", "0", "2000"),
            _balance("702", "0", "0"),
        ],
        "opening",
    )

    assert _sides(plan) == [
        ("acc-211", LineSide.DEBIT, Decimal("3800.00")),
        ("acc-401", LineSide.CREDIT, Decimal("2000.00")),
        ("opening", LineSide.CREDIT, Decimal("3800.00")),
        ("opening", LineSide.DEBIT, Decimal("2000.00")),
    ]
    assert plan.accounts_count == 2
    assert plan.total_amount == Decimal("5800.00")


def test_opening_balance_plan_with_only_active_accounts() -> None:
    """Only the nonzero counter-posting is added."""
    plan = build_opening_balance_plan([_balance("101", "75", "0")], "opening")

    assert _sides(plan) == [
        ("acc-101", LineSide.DEBIT, Decimal("75.00")),
        ("opening", LineSide.CREDIT, Decimal("75.00")),
    ]


def test_opening_balance_plan_without_balances_is_empty() -> None:
    assert build_opening_balance_plan([], "opening").is_empty


def test_ensure_balanced_raises_for_unbalanced_lines() -> None:
    """Lines that differ by a cent or more are rejected."""
    lines = [
        ClosingLine("a", LineSide.DEBIT, Decimal("10.00")),
        ClosingLine("b", LineSide.CREDIT, Decimal("9.99")),
    ]

    with pytest.raises(UnbalancedEntryError) as excinfo:
        ensure_balanced(lines)

    assert excinfo.value.total_debit == Decimal("10.00")
    assert excinfo.value.total_credit == Decimal("9.99")

"""Tests for the four closing step use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.application.use_cases import (
    CloseExpenseAccountsUseCase,
    CloseProfitLossAccountUseCase,
    CloseRevenueAccountsUseCase,
    ClosingStepUseCase,
    GenerateOpeningBalancesUseCase,
)
from src.domain.models import (
    AccountBalance,
    AccountBalancesResult,
    ClosingStep,
    LineSide,
)

START = date(2024, 1, 1)
END = date(2024, 12, 31)


def _balance(code: str, debit: str, credit: str) -> AccountBalance:
    return AccountBalance(
        account_id=f"acc-{code}",
        code=code,
        name=f"Account {code}",
        total_debit=Decimal(debit),
        total_credit=Decimal(credit),
    )


def _collaborators(balances_by_prefix: dict[str, list[AccountBalance]]):
    balances = MagicMock()
    balances.execute.side_effect = (
        lambda company_id, start, end, prefix: AccountBalancesResult(
            balances=balances_by_prefix.get(prefix, [])
        )
    )
    resolver = MagicMock()
    resolver.resolve.side_effect = lambda company_id, control: f"id-{control.code}"
    writer = MagicMock()
    writer.execute.return_value = "entry-1"
    return balances, resolver, writer


def _written_lines(writer: MagicMock):
    return [
        (line.account_id, line.side, line.amount)
        for line in writer.execute.call_args.args[4]
    ]


def test_revenue_close_posts_entry_dated_period_end() -> None:
    balances, resolver, writer = _collaborators(
        {"6": [_balance("601", "0", "1000")]}
    )
    step = CloseRevenueAccountsUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert result.success
    assert result.step == ClosingStep.REVENUE_CLOSE
    assert result.journal_entry_id == "entry-1"
    assert result.total_amount == Decimal("1000.00")
    assert result.accounts_count == 1
    company_id, actor_id, entry_date, _, _ = writer.execute.call_args.args
    assert (company_id, actor_id, entry_date) == ("c1", "user-1", END)
    assert _written_lines(writer) == [
        ("acc-601", LineSide.DEBIT, Decimal("1000.00")),
        ("id-710", LineSide.CREDIT, Decimal("1000.00")),
    ]


def test_revenue_close_without_activity_succeeds_without_entry() -> None:
    """Zero activity closes cleanly and writes nothing."""
    balances, resolver, writer = _collaborators({})
    step = CloseRevenueAccountsUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert result.success
    assert result.journal_entry_id is None
    assert result.accounts_count == 0
    assert result.total_amount == Decimal("0.00")
    writer.execute.assert_not_called()
    resolver.resolve.assert_not_called()


def test_expense_close_surfaces_abnormal_balances() -> None:
    balances, resolver, writer = _collaborators(
        {"5": [_balance("511", "400", "0"), _balance("519", "0", "25")]}
    )
    logger = MagicMock()
    step = CloseExpenseAccountsUseCase(balances, resolver, writer, logger=logger)

    result = step.execute("c1", START, END, "user-1")

    assert result.success
    assert result.total_amount == Decimal("375.00")
    assert result.accounts_count == 2
    assert len(result.warnings) == 1
    assert "519" in result.warnings[0]
    logger.warning.assert_called_once()


def test_step_fails_when_balances_cannot_be_read() -> None:
    balances, resolver, writer = _collaborators({})
    balances.execute.side_effect = None
    balances.execute.return_value = AccountBalancesResult.failed("db down")
    step = CloseExpenseAccountsUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert not result.success
    assert "db down" in result.error
    writer.execute.assert_not_called()


def test_step_fails_when_control_account_cannot_be_resolved() -> None:
    """A provisioning failure aborts the step before anything is written."""
    balances, resolver, writer = _collaborators(
        {"6": [_balance("601", "0", "10")]}
    )
    resolver.resolve.side_effect = None
    resolver.resolve.return_value = None
    step = CloseRevenueAccountsUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert not result.success
    assert "710" in result.error
    writer.execute.assert_not_called()


def test_step_fails_when_entry_is_not_written() -> None:
    balances, resolver, writer = _collaborators(
        {"6": [_balance("601", "0", "10")]}
    )
    writer.execute.return_value = None
    step = CloseRevenueAccountsUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert not result.success
    assert result.journal_entry_id is None


def test_step_converts_unexpected_exceptions() -> None:
    """Nothing escapes a step; errors come back on the result."""
    balances, resolver, writer = _collaborators({})
    balances.execute.side_effect = ZeroDivisionError("unexpected")
    logger = MagicMock()
    step = CloseRevenueAccountsUseCase(balances, resolver, writer, logger=logger)

    result = step.execute("c1", START, END, "user-1")

    assert not result.success
    assert result.error == "unexpected"
    logger.exception.assert_called_once()


def test_step_base_class_requires_a_run_implementation() -> None:
    balances, resolver, writer = _collaborators({})

    with pytest.raises(TypeError):
        ClosingStepUseCase(balances, resolver, writer, logger=MagicMock())


def test_profit_loss_close_moves_result_to_closing_account() -> None:
    balances, resolver, writer = _collaborators(
        {"710": [_balance("710", "400", "1000"), _balance("7101", "5", "0")]}
    )
    step = CloseProfitLossAccountUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert result.success
    assert result.total_amount == Decimal("600.00")
    assert result.accounts_count == 1
    assert _written_lines(writer) == [
        ("id-710", LineSide.DEBIT, Decimal("600.00")),
        ("id-702", LineSide.CREDIT, Decimal("600.00")),
    ]


def test_profit_loss_close_without_result_does_nothing() -> None:
    balances, resolver, writer = _collaborators({"710": []})
    step = CloseProfitLossAccountUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    assert result.success
    assert result.accounts_count == 0
    resolver.resolve.assert_not_called()
    writer.execute.assert_not_called()


def test_opening_balances_read_all_balance_sheet_classes() -> None:
    """Classes 0 to 4 are rolled forward in an entry dated the next day."""
    balances, resolver, writer = _collaborators(
        {
            "2": [_balance("211", "5000", "1200")],
            "4": [_balance("401", "0", "2000")],
        }
    )
    step = GenerateOpeningBalancesUseCase(
        balances,
        resolver,
        writer,
        logger=MagicMock(),
    )

    result = step.execute("c1", START, END, "user-1")

    prefixes = [call.args[3] for call in balances.execute.call_args_list]
    assert prefixes == ["0", "1", "2", "3", "4"]
    assert result.success
    assert result.step == ClosingStep.BALANCE_CLOSE
    assert result.accounts_count == 2
    assert result.total_amount == Decimal("5800.00")
    assert writer.execute.call_args.args[2] == date(2025, 1, 1)
    assert _written_lines(writer)[-2:] == [
        ("id-701", LineSide.CREDIT, Decimal("3800.00")),
        ("id-701", LineSide.DEBIT, Decimal("2000.00")),
    ]

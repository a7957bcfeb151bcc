"""Tests for the RunClosingOperationUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.run_closing_operation import (
    RunClosingOperationUseCase,
)
from src.domain.exceptions import ClosingRunConflictError, LedgerStorageError
from src.domain.models import (
    ClosingErrorKind,
    ClosingRequest,
    ClosingResult,
    ClosingRun,
    ClosingStep,
)

START = date(2024, 1, 1)
END = date(2024, 12, 31)


def _request(step: ClosingStep, start: date = START) -> ClosingRequest:
    return ClosingRequest(
        step=step,
        company_id="c1",
        period_start=start,
        period_end=END,
        actor_id="user-1",
    )


def _run(step: ClosingStep, status: str = "completed") -> ClosingRun:
    return ClosingRun(
        id=f"run-{step.value}",
        company_id="c1",
        period_start=START,
        period_end=END,
        step=step,
        status=status,
        created_by="user-1",
    )


def _runner(runs: list[ClosingRun], step_result: ClosingResult | None = None):
    step_use_case = MagicMock()
    step_use_case.execute.return_value = step_result or ClosingResult(
        success=True,
        journal_entry_id="entry-1",
        total_amount=Decimal("600.00"),
        accounts_count=1,
    )
    steps = {step: step_use_case for step in ClosingStep}
    repository = MagicMock()
    repository.fetch_runs.return_value = runs
    audit_logger = MagicMock()
    runner = RunClosingOperationUseCase(
        steps,
        repository,
        logger=MagicMock(),
        audit_logger=audit_logger,
    )
    return runner, step_use_case, repository, audit_logger


def test_execute_claims_runs_and_completes_step() -> None:
    runner, step_use_case, repository, audit_logger = _runner([])

    result = runner.execute(_request(ClosingStep.REVENUE_CLOSE))

    assert result.success
    step_use_case.execute.assert_called_once_with("c1", START, END, "user-1")
    claimed = repository.claim_run.call_args.args[0]
    assert claimed.step == ClosingStep.REVENUE_CLOSE
    assert claimed.status == "running"
    assert claimed.created_by == "user-1"
    repository.complete_run.assert_called_once_with(claimed.id, result)
    repository.release_run.assert_not_called()
    audit_logger.info.assert_called_once()
    assert "step=revenue_close" in audit_logger.info.call_args.args[0]


def test_execute_refuses_duplicate_step() -> None:
    runner, step_use_case, repository, audit_logger = _runner(
        [_run(ClosingStep.REVENUE_CLOSE)]
    )

    result = runner.execute(_request(ClosingStep.REVENUE_CLOSE))

    assert not result.success
    assert result.error_kind == ClosingErrorKind.ALREADY_EXECUTED
    step_use_case.execute.assert_not_called()
    repository.claim_run.assert_not_called()
    audit_logger.info.assert_not_called()


def test_execute_refuses_step_with_running_claim() -> None:
    runner, step_use_case, _, _ = _runner(
        [_run(ClosingStep.EXPENSE_CLOSE, status="running")]
    )

    result = runner.execute(_request(ClosingStep.EXPENSE_CLOSE))

    assert result.error_kind == ClosingErrorKind.ALREADY_EXECUTED
    step_use_case.execute.assert_not_called()


def test_execute_refuses_profit_loss_before_revenue_and_expense() -> None:
    """Profit/loss close needs both class closes completed first."""
    runner, step_use_case, _, _ = _runner([_run(ClosingStep.REVENUE_CLOSE)])

    result = runner.execute(_request(ClosingStep.PROFIT_LOSS_CLOSE))

    assert not result.success
    assert result.error_kind == ClosingErrorKind.PRECONDITION_FAILED
    assert "expense_close" in result.error
    assert "revenue_close" not in result.error
    step_use_case.execute.assert_not_called()


def test_execute_refuses_balance_close_before_profit_loss() -> None:
    runner, _, _, _ = _runner(
        [_run(ClosingStep.REVENUE_CLOSE), _run(ClosingStep.EXPENSE_CLOSE)]
    )

    result = runner.execute(_request(ClosingStep.BALANCE_CLOSE))

    assert result.error_kind == ClosingErrorKind.PRECONDITION_FAILED


def test_execute_allows_balance_close_after_profit_loss() -> None:
    runner, step_use_case, _, _ = _runner(
        [
            _run(ClosingStep.REVENUE_CLOSE),
            _run(ClosingStep.EXPENSE_CLOSE),
            _run(ClosingStep.PROFIT_LOSS_CLOSE),
        ]
    )

    result = runner.execute(_request(ClosingStep.BALANCE_CLOSE))

    assert result.success
    step_use_case.execute.assert_called_once()


def test_execute_rejects_inverted_period() -> None:
    runner, _, repository, _ = _runner([])

    result = runner.execute(
        _request(ClosingStep.REVENUE_CLOSE, start=date(2025, 1, 1))
    )

    assert result.error_kind == ClosingErrorKind.INVALID_REQUEST
    repository.fetch_runs.assert_not_called()


def test_execute_reports_concurrent_claim_as_duplicate() -> None:
    """A unique-key conflict while claiming means another run won."""
    runner, step_use_case, repository, _ = _runner([])
    repository.claim_run.side_effect = ClosingRunConflictError("taken")

    result = runner.execute(_request(ClosingStep.REVENUE_CLOSE))

    assert result.error_kind == ClosingErrorKind.ALREADY_EXECUTED
    step_use_case.execute.assert_not_called()


def test_execute_releases_claim_when_step_fails() -> None:
    failure = ClosingResult.failure(ClosingStep.EXPENSE_CLOSE, "write failed")
    runner, _, repository, audit_logger = _runner([], step_result=failure)

    result = runner.execute(_request(ClosingStep.EXPENSE_CLOSE))

    assert result is failure
    claimed = repository.claim_run.call_args.args[0]
    repository.release_run.assert_called_once_with(claimed.id)
    repository.complete_run.assert_not_called()
    assert "success=False" in audit_logger.info.call_args.args[0]


def test_execute_reports_unreadable_run_ledger() -> None:
    runner, step_use_case, repository, _ = _runner([])
    repository.fetch_runs.side_effect = LedgerStorageError("db down")

    result = runner.execute(_request(ClosingStep.REVENUE_CLOSE))

    assert result.error_kind == ClosingErrorKind.STEP_FAILED
    step_use_case.execute.assert_not_called()

"""Shared behaviour of the closing step use cases."""

from abc import ABC, abstractmethod
from datetime import date

from src.application.use_cases.create_closing_entry import (
    CreateClosingEntryUseCase,
)
from src.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from src.application.use_cases.resolve_control_account import (
    ResolveControlAccountUseCase,
)
from src.domain.models import (
    AccountBalancesResult,
    BalancingPlan,
    ClosingResult,
    ClosingStep,
    ControlAccount,
)
from src.infrastructure.logging.logger import get_app_logger


class ClosingStepError(Exception):
    """Raised inside a step to abort it with a readable message."""


class ClosingStepUseCase(ABC):
    """Base class for the four closing steps.

    Subclasses implement ``_run``. Any exception escaping it is logged and
    turned into a failed ``ClosingResult``, so callers never see a raise.
    """

    step: ClosingStep

    def __init__(
        self,
        balances: GetAccountBalancesUseCase,
        resolver: ResolveControlAccountUseCase,
        writer: CreateClosingEntryUseCase,
        logger=None,
    ) -> None:
        """Initialize the step.

        Args:
            balances: Use case aggregating account balances.
            resolver: Use case resolving control accounts.
            writer: Use case persisting the closing entry.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._balances = balances
        self._resolver = resolver
        self._writer = writer
        self._logger = logger or get_app_logger()

    def execute(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        actor_id: str,
    ) -> ClosingResult:
        """Run the step for a company and fiscal period.

        Args:
            company_id: Company whose ledger is closed.
            period_start: First day of the fiscal period.
            period_end: Last day of the fiscal period.
            actor_id: User recorded on the created entry.

        Returns:
            ClosingResult: Outcome of the step.
        """
        try:
            return self._run(company_id, period_start, period_end, actor_id)
        except ClosingStepError as exc:
            self._logger.error(f"{self.step.value} failed: {exc}")
            return ClosingResult.failure(self.step, str(exc))
        except Exception as exc:
            self._logger.exception(f"{self.step.value} failed unexpectedly")
            return ClosingResult.failure(self.step, str(exc))

    @abstractmethod
    def _run(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        actor_id: str,
    ) -> ClosingResult:
        """Compute and post the step's entry."""

    def _read_balances(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        code_prefix: str,
    ) -> AccountBalancesResult:
        result = self._balances.execute(
            company_id,
            period_start,
            period_end,
            code_prefix,
        )
        if not result.ok:
            raise ClosingStepError(
                f"Could not read balances for class {code_prefix}: "
                f"{result.error}"
            )
        return result

    def _resolve(self, company_id: str, control: ControlAccount) -> str:
        account_id = self._resolver.resolve(company_id, control)
        if account_id is None:
            raise ClosingStepError(
                f"Could not resolve control account {control.code}"
            )
        return account_id

    def _post_plan(
        self,
        plan: BalancingPlan,
        company_id: str,
        actor_id: str,
        entry_date: date,
        description: str,
    ) -> ClosingResult:
        if plan.is_empty:
            self._logger.info(f"{self.step.value}: nothing to close")
            return ClosingResult.nothing_to_do(self.step)
        for warning in plan.warnings:
            self._logger.warning(f"{self.step.value}: {warning}")
        entry_id = self._writer.execute(
            company_id,
            actor_id,
            entry_date,
            description,
            plan.lines,
        )
        if entry_id is None:
            raise ClosingStepError("Failed to create the closing journal entry")
        self._logger.info(
            f"{self.step.value}: entry {entry_id} moved {plan.total_amount} "
            f"over {plan.accounts_count} accounts"
        )
        return ClosingResult(
            success=True,
            step=self.step,
            journal_entry_id=entry_id,
            total_amount=plan.total_amount,
            accounts_count=plan.accounts_count,
            warnings=plan.warnings,
        )


__all__ = ["ClosingStepUseCase", "ClosingStepError"]

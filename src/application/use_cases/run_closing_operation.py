"""Use case running one closing step under order and duplicate guards."""

from collections.abc import Mapping
from datetime import datetime, timezone
from uuid import uuid4

from src.application.ports.closing_runs import ClosingRunRepositoryPort
from src.application.use_cases.closing_step import ClosingStepUseCase
from src.domain.constants import RUN_STATUS_COMPLETED, RUN_STATUS_RUNNING
from src.domain.exceptions import ClosingRunConflictError, LedgerStorageError
from src.domain.models import (
    STEP_PREREQUISITES,
    ClosingErrorKind,
    ClosingRequest,
    ClosingResult,
    ClosingRun,
)
from src.infrastructure.logging.logger import get_app_logger, get_audit_logger


class RunClosingOperationUseCase:
    """Dispatch a closing request to its step.

    Every step runs at most once per company and fiscal year: a run whose
    period overlaps the requested one counts as already executed. A step is
    claimed in the closing-run ledger before it posts anything; the claim is
    completed on success and released on failure so the step can be retried.
    """

    def __init__(
        self,
        steps: Mapping,
        run_repository: ClosingRunRepositoryPort,
        logger=None,
        audit_logger=None,
    ) -> None:
        """Initialize the runner.

        Args:
            steps: Mapping of ClosingStep to its step use case.
            run_repository: Port persisting closing runs.
            logger: Optional logger compatible with logging.Logger-like API.
            audit_logger: Optional logger receiving one line per executed
                operation.
        """
        self._steps = steps
        self._run_repository = run_repository
        self._logger = logger or get_app_logger()
        self._audit_logger = audit_logger or get_audit_logger()

    def execute(self, request: ClosingRequest) -> ClosingResult:
        """Run the requested step if it is allowed.

        Args:
            request: Step, company, fiscal period, and actor.

        Returns:
            ClosingResult: Step outcome, or a failure whose ``error_kind``
            tells why the step was refused.
        """
        step = request.step
        if request.period_start > request.period_end:
            return self._refuse(
                request,
                "Fiscal period start is after its end",
                ClosingErrorKind.INVALID_REQUEST,
            )
        step_use_case: ClosingStepUseCase | None = self._steps.get(step)
        if step_use_case is None:
            return self._refuse(
                request,
                f"Unsupported closing step {step.value}",
                ClosingErrorKind.INVALID_REQUEST,
            )

        try:
            runs = self._run_repository.fetch_runs(
                request.company_id,
                request.period_start,
                request.period_end,
            )
        except LedgerStorageError as exc:
            return self._refuse(request, str(exc), ClosingErrorKind.STEP_FAILED)

        if any(run.step == step for run in runs):
            return self._refuse(
                request,
                f"Closing step {step.value} was already executed "
                "for this fiscal year",
                ClosingErrorKind.ALREADY_EXECUTED,
            )
        completed = {
            run.step for run in runs if run.status == RUN_STATUS_COMPLETED
        }
        missing = [
            required.value
            for required in STEP_PREREQUISITES[step]
            if required not in completed
        ]
        if missing:
            return self._refuse(
                request,
                f"Closing step {step.value} requires {', '.join(missing)} first",
                ClosingErrorKind.PRECONDITION_FAILED,
            )

        run = ClosingRun(
            id=str(uuid4()),
            company_id=request.company_id,
            period_start=request.period_start,
            period_end=request.period_end,
            step=step,
            status=RUN_STATUS_RUNNING,
            created_by=request.actor_id,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self._run_repository.claim_run(run)
        except ClosingRunConflictError as exc:
            return self._refuse(
                request,
                str(exc),
                ClosingErrorKind.ALREADY_EXECUTED,
            )
        except LedgerStorageError as exc:
            return self._refuse(request, str(exc), ClosingErrorKind.STEP_FAILED)

        result = step_use_case.execute(
            request.company_id,
            request.period_start,
            request.period_end,
            request.actor_id,
        )
        self._settle_run(run, result)
        self._audit(request, result)
        return result

    def _settle_run(self, run: ClosingRun, result: ClosingResult) -> None:
        try:
            if result.success:
                self._run_repository.complete_run(run.id, result)
            else:
                self._run_repository.release_run(run.id)
        except LedgerStorageError as exc:
            self._logger.error(
                f"Closing run {run.id} for {run.step.value} left as "
                f"{RUN_STATUS_RUNNING}: {exc}"
            )

    def _refuse(
        self,
        request: ClosingRequest,
        error: str,
        kind: ClosingErrorKind,
    ) -> ClosingResult:
        self._logger.warning(
            f"Refused {request.step.value} for company {request.company_id}: {error}"
        )
        return ClosingResult.failure(request.step, error, kind)

    def _audit(self, request: ClosingRequest, result: ClosingResult) -> None:
        self._audit_logger.info(
            f"company={request.company_id} step={request.step.value} "
            f"period={request.period_start}..{request.period_end} "
            f"actor={request.actor_id} success={result.success} "
            f"entry={result.journal_entry_id} amount={result.total_amount} "
            f"accounts={result.accounts_count} error={result.error}"
        )


__all__ = ["RunClosingOperationUseCase"]

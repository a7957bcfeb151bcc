"""Use case reporting closing progress for a company and period."""

from datetime import date

from src.application.ports.closing_runs import ClosingRunRepositoryPort
from src.domain.constants import RUN_STATUS_COMPLETED
from src.domain.models import CLOSING_PIPELINE, STEP_PREREQUISITES, ClosingStatus


class GetClosingStatusUseCase:
    """Read the closing-run ledger of a period."""

    def __init__(self, run_repository: ClosingRunRepositoryPort) -> None:
        self._run_repository = run_repository

    def execute(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
    ) -> ClosingStatus:
        """Return completed steps, recorded runs, and the next runnable step.

        Raises:
            LedgerStorageError: If the runs cannot be read.
        """
        runs = self._run_repository.fetch_runs(
            company_id,
            period_start,
            period_end,
        )
        recorded = {run.step for run in runs}
        completed = {
            run.step for run in runs if run.status == RUN_STATUS_COMPLETED
        }
        next_step = None
        for step in CLOSING_PIPELINE:
            if step in recorded:
                continue
            if all(required in completed for required in STEP_PREREQUISITES[step]):
                next_step = step
                break
        return ClosingStatus(
            completed_steps=tuple(
                step for step in CLOSING_PIPELINE if step in completed
            ),
            runs=runs,
            next_step=next_step,
        )


__all__ = ["GetClosingStatusUseCase"]

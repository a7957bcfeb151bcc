"""Port for the persisted ledger of executed closing steps."""

from datetime import date
from typing import Protocol

from src.domain.models import ClosingResult, ClosingRun


class ClosingRunRepositoryPort(Protocol):
    """Port exposing closing runs keyed by company, fiscal year, and step."""

    def fetch_runs(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
    ) -> list[ClosingRun]:
        """Return the runs of a company whose period overlaps the given one."""

    def claim_run(self, run: ClosingRun) -> None:
        """Insert a running claim for the step.

        Raises:
            ClosingRunConflictError: If the step is already claimed.
        """

    def complete_run(self, run_id: str, result: ClosingResult) -> None:
        """Mark a claimed run as completed with the step result."""

    def release_run(self, run_id: str) -> None:
        """Remove a claim whose step failed."""


__all__ = ["ClosingRunRepositoryPort"]

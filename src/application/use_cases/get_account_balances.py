"""Use case to aggregate posted lines into account balances."""

from datetime import date

from src.application.ports.chart_of_accounts import ChartOfAccountsPort
from src.application.ports.journal_repository import JournalRepositoryPort
from src.domain.exceptions import LedgerStorageError
from src.domain.models import AccountBalancesResult
from src.domain.services import aggregate_account_balances
from src.infrastructure.logging.logger import get_app_logger


class GetAccountBalancesUseCase:
    """Compute per-account debit and credit totals over a period."""

    def __init__(
        self,
        chart_repository: ChartOfAccountsPort,
        journal_repository: JournalRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            chart_repository: Port reading the chart of accounts.
            journal_repository: Port reading posted journal lines.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._chart_repository = chart_repository
        self._journal_repository = journal_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        code_prefix: str,
    ) -> AccountBalancesResult:
        """Return balances of accounts whose code starts with a prefix.

        Only lines of posted entries dated within the inclusive period are
        summed. Read failures are logged and returned as a failed result
        instead of being raised.

        Args:
            company_id: Company whose ledger is read.
            period_start: First day of the period.
            period_end: Last day of the period.
            code_prefix: Account code prefix such as ``6`` or ``710``.

        Returns:
            AccountBalancesResult: Balances ordered by code, or an error.
        """
        try:
            accounts = self._chart_repository.fetch_accounts_by_prefix(
                company_id,
                code_prefix,
            )
            if not accounts:
                self._logger.info(
                    f"No accounts with prefix {code_prefix} for company "
                    f"{company_id}"
                )
                return AccountBalancesResult()
            lines = self._journal_repository.fetch_posted_lines(
                company_id,
                period_start,
                period_end,
                [account.id for account in accounts],
            )
        except LedgerStorageError as exc:
            self._logger.error(
                f"Failed to aggregate balances for prefix {code_prefix}: {exc}"
            )
            return AccountBalancesResult.failed(str(exc))

        balances = aggregate_account_balances(accounts, lines)
        self._logger.info(
            f"Aggregated {len(balances)} balances for prefix {code_prefix} "
            f"({period_start} to {period_end})"
        )
        return AccountBalancesResult(balances=balances)


__all__ = ["GetAccountBalancesUseCase"]

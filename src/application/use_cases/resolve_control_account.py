"""Use case to find or create a well-known control account."""

from src.application.ports.chart_of_accounts import ChartOfAccountsPort
from src.domain.exceptions import LedgerStorageError
from src.domain.models import ControlAccount
from src.infrastructure.logging.logger import get_app_logger


class ResolveControlAccountUseCase:
    """Idempotent lookup of control accounts such as 710, 701, and 702."""

    def __init__(self, chart_repository: ChartOfAccountsPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            chart_repository: Port reading and writing the chart of accounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._chart_repository = chart_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        company_id: str,
        code: str,
        name: str,
        nature: str,
    ) -> str | None:
        """Return the id of the account with the given code.

        The account is created when it does not exist yet. The insert
        ignores unique conflicts and the id is read back afterwards, so
        concurrent callers end up with the same row.

        Args:
            company_id: Company owning the account.
            code: Exact account code.
            name: Name used when the account is created.
            nature: Nature used when the account is created.

        Returns:
            str | None: Account id, or None if the store failed.
        """
        try:
            account_id = self._chart_repository.find_account_id(company_id, code)
            if account_id is not None:
                return account_id
            self._chart_repository.insert_account(company_id, code, name, nature)
            account_id = self._chart_repository.find_account_id(company_id, code)
        except LedgerStorageError as exc:
            self._logger.error(f"Failed to resolve account {code}: {exc}")
            return None
        if account_id is None:
            self._logger.error(f"Account {code} missing after creation")
            return None
        self._logger.info(f"Created control account {code} for {company_id}")
        return account_id

    def resolve(self, company_id: str, control: ControlAccount) -> str | None:
        """Resolve one of the predefined control accounts."""
        return self.execute(company_id, control.code, control.name, control.nature)


__all__ = ["ResolveControlAccountUseCase"]

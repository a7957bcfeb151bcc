"""Port for reading and provisioning chart-of-accounts entries."""

from typing import Protocol

from src.domain.models import Account


class ChartOfAccountsPort(Protocol):
    """Port exposing company-scoped access to the chart of accounts."""

    def fetch_accounts_by_prefix(
        self,
        company_id: str,
        code_prefix: str,
    ) -> list[Account]:
        """Return non-deleted accounts whose code starts with the prefix."""

    def find_account_id(self, company_id: str, code: str) -> str | None:
        """Return the id of the non-deleted account with this exact code."""

    def insert_account(
        self,
        company_id: str,
        code: str,
        name: str,
        nature: str,
    ) -> None:
        """Insert an active account, ignoring a concurrent duplicate."""


__all__ = ["ChartOfAccountsPort"]

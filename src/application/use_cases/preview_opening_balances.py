"""Use case previewing the opening balances of the next fiscal year."""

from datetime import date
from decimal import Decimal

from src.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from src.domain.constants import AMOUNT_TOLERANCE, BALANCE_SHEET_CLASSES
from src.domain.exceptions import LedgerStorageError
from src.domain.models import OpeningBalancePreview, OpeningBalancePreviewRow
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import round_money


class PreviewOpeningBalancesUseCase:
    """Show what the opening balance generation would post, without posting."""

    def __init__(self, balances: GetAccountBalancesUseCase, logger=None) -> None:
        """Initialize the use case.

        Args:
            balances: Use case aggregating account balances.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._balances = balances
        self._logger = logger or get_app_logger()

    def execute(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
    ) -> OpeningBalancePreview:
        """Return balance-sheet accounts with their opening side.

        Args:
            company_id: Company whose ledger is read.
            period_start: First day of the closed period.
            period_end: Last day of the closed period.

        Returns:
            OpeningBalancePreview: Rows ordered by code and their totals.

        Raises:
            LedgerStorageError: If the balances cannot be read.
        """
        rows: list[OpeningBalancePreviewRow] = []
        for account_class in BALANCE_SHEET_CLASSES:
            result = self._balances.execute(
                company_id,
                period_start,
                period_end,
                account_class,
            )
            if not result.ok:
                raise LedgerStorageError(result.error)
            for balance in result.balances:
                net = balance.net_balance
                if abs(net) < AMOUNT_TOLERANCE:
                    continue
                net = round_money(net)
                rows.append(
                    OpeningBalancePreviewRow(
                        account_id=balance.account_id,
                        code=balance.code,
                        name=balance.name,
                        total_debit=round_money(balance.total_debit),
                        total_credit=round_money(balance.total_credit),
                        net_balance=net,
                        opening_debit=net if net > 0 else Decimal("0.00"),
                        opening_credit=-net if net < 0 else Decimal("0.00"),
                    )
                )

        rows = sorted(rows, key=lambda row: (row.code, row.account_id))
        preview = OpeningBalancePreview(
            rows=rows,
            total_opening_debit=sum(
                (row.opening_debit for row in rows),
                Decimal("0.00"),
            ),
            total_opening_credit=sum(
                (row.opening_credit for row in rows),
                Decimal("0.00"),
            ),
        )
        if not preview.is_balanced:
            self._logger.warning(
                f"Opening balances for {company_id} do not balance: "
                f"debit={preview.total_opening_debit}, "
                f"credit={preview.total_opening_credit}"
            )
        return preview


__all__ = ["PreviewOpeningBalancesUseCase"]

"""Use case rolling balance-sheet balances into the next fiscal year."""

from datetime import date, timedelta

from src.application.use_cases.closing_step import ClosingStepUseCase
from src.domain.constants import BALANCE_SHEET_CLASSES, OPENING_BALANCE_ACCOUNT
from src.domain.models import AccountBalance, ClosingResult, ClosingStep
from src.domain.services import build_opening_balance_plan


class GenerateOpeningBalancesUseCase(ClosingStepUseCase):
    """Post the opening entry of the next year against account 701.

    The entry is dated the day after the closed period ends.
    """

    step = ClosingStep.BALANCE_CLOSE

    def _run(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        actor_id: str,
    ) -> ClosingResult:
        balances = self._read_balance_sheet(company_id, period_start, period_end)
        if not balances:
            return ClosingResult.nothing_to_do(self.step)
        opening_id = self._resolve(company_id, OPENING_BALANCE_ACCOUNT)
        plan = build_opening_balance_plan(balances, opening_id)
        opening_date = period_end + timedelta(days=1)
        return self._post_plan(
            plan,
            company_id,
            actor_id,
            opening_date,
            f"Opening balances {opening_date} (from {period_start} - {period_end})",
        )

    def _read_balance_sheet(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
    ) -> list[AccountBalance]:
        balances: list[AccountBalance] = []
        for account_class in BALANCE_SHEET_CLASSES:
            balances.extend(
                self._read_balances(
                    company_id,
                    period_start,
                    period_end,
                    account_class,
                ).balances
            )
        return sorted(balances, key=lambda item: (item.code, item.account_id))


__all__ = ["GenerateOpeningBalancesUseCase"]

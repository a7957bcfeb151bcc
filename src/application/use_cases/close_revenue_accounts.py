"""Use case closing class 6 revenue accounts into account 710."""

from datetime import date

from src.application.use_cases.closing_step import ClosingStepUseCase
from src.domain.constants import PROFIT_LOSS_ACCOUNT, REVENUE_CLASS
from src.domain.models import ClosingResult, ClosingStep
from src.domain.services import build_revenue_close_plan


class CloseRevenueAccountsUseCase(ClosingStepUseCase):
    """Zero the revenue accounts and transfer their net to profit and loss."""

    step = ClosingStep.REVENUE_CLOSE

    def _run(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        actor_id: str,
    ) -> ClosingResult:
        balances = self._read_balances(
            company_id,
            period_start,
            period_end,
            REVENUE_CLASS,
        ).balances
        if not balances:
            return ClosingResult.nothing_to_do(self.step)
        profit_loss_id = self._resolve(company_id, PROFIT_LOSS_ACCOUNT)
        plan = build_revenue_close_plan(balances, profit_loss_id)
        return self._post_plan(
            plan,
            company_id,
            actor_id,
            period_end,
            f"Closing of revenue accounts {period_start} - {period_end}",
        )


__all__ = ["CloseRevenueAccountsUseCase"]

"""Use case moving the period result from 710 to 702."""

from datetime import date

from src.application.use_cases.closing_step import ClosingStepUseCase
from src.domain.constants import (
    AMOUNT_TOLERANCE,
    CLOSING_BALANCE_ACCOUNT,
    PROFIT_LOSS_ACCOUNT,
)
from src.domain.models import ClosingResult, ClosingStep
from src.domain.services import build_profit_loss_plan, period_result


class CloseProfitLossAccountUseCase(ClosingStepUseCase):
    """Close the profit and loss account into the closing balance account.

    Only meaningful after revenues and expenses were closed; run on its own
    it reads whatever 710 holds at that moment.
    """

    step = ClosingStep.PROFIT_LOSS_CLOSE

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
            PROFIT_LOSS_ACCOUNT.code,
        ).balances
        balance = next(
            (item for item in balances if item.code == PROFIT_LOSS_ACCOUNT.code),
            None,
        )
        result = period_result(balance)
        if abs(result) < AMOUNT_TOLERANCE:
            self._logger.info(f"{self.step.value}: no result on 710")
            return ClosingResult.nothing_to_do(self.step)
        profit_loss_id = self._resolve(company_id, PROFIT_LOSS_ACCOUNT)
        closing_id = self._resolve(company_id, CLOSING_BALANCE_ACCOUNT)
        plan = build_profit_loss_plan(balance, profit_loss_id, closing_id)
        kind = "profit" if result > 0 else "loss"
        return self._post_plan(
            plan,
            company_id,
            actor_id,
            period_end,
            f"Closing of the profit and loss account ({kind}) "
            f"{period_start} - {period_end}",
        )


__all__ = ["CloseProfitLossAccountUseCase"]

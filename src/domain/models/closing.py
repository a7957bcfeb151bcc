"""Domain models for closing operations."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from src.domain.models.accounts import AccountBalance
from src.domain.models.journal import ClosingLine


class ClosingStep(str, Enum):
    """Closing operations in the order they must be executed."""

    REVENUE_CLOSE = "revenue_close"
    EXPENSE_CLOSE = "expense_close"
    PROFIT_LOSS_CLOSE = "profit_loss_close"
    BALANCE_CLOSE = "balance_close"


class ClosingErrorKind(str, Enum):
    """Category of a failed closing operation."""

    INVALID_REQUEST = "invalid_request"
    PRECONDITION_FAILED = "precondition_failed"
    ALREADY_EXECUTED = "already_executed"
    STEP_FAILED = "step_failed"


CLOSING_PIPELINE = (
    ClosingStep.REVENUE_CLOSE,
    ClosingStep.EXPENSE_CLOSE,
    ClosingStep.PROFIT_LOSS_CLOSE,
    ClosingStep.BALANCE_CLOSE,
)

STEP_PREREQUISITES: dict[ClosingStep, tuple[ClosingStep, ...]] = {
    ClosingStep.REVENUE_CLOSE: (),
    ClosingStep.EXPENSE_CLOSE: (),
    ClosingStep.PROFIT_LOSS_CLOSE: (
        ClosingStep.REVENUE_CLOSE,
        ClosingStep.EXPENSE_CLOSE,
    ),
    ClosingStep.BALANCE_CLOSE: (ClosingStep.PROFIT_LOSS_CLOSE,),
}


@dataclass(frozen=True)
class ClosingResult:
    """Outcome of a closing step.

    Attributes:
        success: Whether the step finished without error.
        step: Step that produced the result, when known.
        journal_entry_id: Identifier of the created entry, if any.
        total_amount: Amount moved by the created entry.
        accounts_count: Number of accounts closed or rolled forward.
        error: Error message for failed steps.
        warnings: Non-fatal findings such as abnormal balance directions.
        error_kind: Category of the failure, None on success.
    """

    success: bool
    step: ClosingStep | None = None
    journal_entry_id: str | None = None
    total_amount: Decimal = Decimal("0.00")
    accounts_count: int = 0
    error: str | None = None
    warnings: tuple[str, ...] = ()
    error_kind: ClosingErrorKind | None = None

    @classmethod
    def nothing_to_do(cls, step: ClosingStep) -> "ClosingResult":
        """Return a successful result that moved nothing."""
        return cls(success=True, step=step)

    @classmethod
    def failure(
        cls,
        step: ClosingStep | None,
        error: str,
        kind: ClosingErrorKind = ClosingErrorKind.STEP_FAILED,
    ) -> "ClosingResult":
        """Return a failed result carrying an error message."""
        return cls(success=False, step=step, error=error, error_kind=kind)


@dataclass(frozen=True)
class ClosingRequest:
    """Request to run one closing step for a company and period."""

    step: ClosingStep
    company_id: str
    period_start: date
    period_end: date
    actor_id: str


@dataclass(frozen=True)
class ClosingRun:
    """Persisted record of a closing step executed for a period."""

    id: str
    company_id: str
    period_start: date
    period_end: date
    step: ClosingStep
    status: str
    created_by: str
    journal_entry_id: str | None = None
    total_amount: Decimal = Decimal("0.00")
    accounts_count: int = 0
    created_at: datetime | None = None

    @property
    def fiscal_year(self) -> int:
        """Return the year the closed period ends in."""
        return self.period_end.year


@dataclass(frozen=True)
class AccountBalancesResult:
    """Tagged result of a balance aggregation.

    A failed read carries an error message; a successful read with no
    activity carries an empty list.
    """

    balances: list[AccountBalance] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the balances could be read."""
        return self.error is None

    @classmethod
    def failed(cls, error: str) -> "AccountBalancesResult":
        """Return a failed aggregation result."""
        return cls(balances=[], error=error)


@dataclass(frozen=True)
class BalancingPlan:
    """Balanced set of closing lines computed from account balances.

    Attributes:
        lines: Individual postings followed by control counter-postings.
        total_amount: Amount moved through the control account.
        accounts_count: Number of accounts that received a posting.
        warnings: Accounts closed against their normal balance direction.
    """

    lines: list[ClosingLine] = field(default_factory=list)
    total_amount: Decimal = Decimal("0.00")
    accounts_count: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return True when there is nothing to post."""
        return not self.lines


@dataclass(frozen=True)
class OpeningBalancePreviewRow:
    """Year-end balance of a balance-sheet account and its opening sides."""

    account_id: str
    code: str
    name: str
    total_debit: Decimal
    total_credit: Decimal
    net_balance: Decimal
    opening_debit: Decimal
    opening_credit: Decimal


@dataclass(frozen=True)
class OpeningBalancePreview:
    """Opening balances that a roll-forward would post."""

    rows: list[OpeningBalancePreviewRow]
    total_opening_debit: Decimal
    total_opening_credit: Decimal

    @property
    def accounts_count(self) -> int:
        """Return the number of accounts with an opening balance."""
        return len(self.rows)

    @property
    def is_balanced(self) -> bool:
        """Return True when opening debits and credits agree."""
        difference = self.total_opening_debit - self.total_opening_credit
        return abs(difference) < Decimal("0.01")


@dataclass(frozen=True)
class ClosingStatus:
    """Progress of the closing pipeline for a company and period."""

    completed_steps: tuple[ClosingStep, ...]
    runs: list[ClosingRun]
    next_step: ClosingStep | None


__all__ = [
    "ClosingStep",
    "ClosingErrorKind",
    "CLOSING_PIPELINE",
    "STEP_PREREQUISITES",
    "ClosingResult",
    "ClosingRequest",
    "ClosingRun",
    "AccountBalancesResult",
    "BalancingPlan",
    "OpeningBalancePreviewRow",
    "OpeningBalancePreview",
    "ClosingStatus",
]

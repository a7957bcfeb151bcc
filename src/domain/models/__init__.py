"""Domain models package."""

from .accounts import Account, AccountBalance, ControlAccount
from .closing import (
    CLOSING_PIPELINE,
    STEP_PREREQUISITES,
    AccountBalancesResult,
    BalancingPlan,
    ClosingRequest,
    ClosingResult,
    ClosingRun,
    ClosingErrorKind,
    ClosingStatus,
    ClosingStep,
    OpeningBalancePreview,
    OpeningBalancePreviewRow,
)
from .journal import ClosingLine, JournalEntryDraft, LineSide, PostedLineRow

__all__ = [
    "Account",
    "AccountBalance",
    "ControlAccount",
    "CLOSING_PIPELINE",
    "STEP_PREREQUISITES",
    "AccountBalancesResult",
    "BalancingPlan",
    "ClosingRequest",
    "ClosingResult",
    "ClosingRun",
    "ClosingErrorKind",
    "ClosingStatus",
    "ClosingStep",
    "OpeningBalancePreview",
    "OpeningBalancePreviewRow",
    "ClosingLine",
    "JournalEntryDraft",
    "LineSide",
    "PostedLineRow",
]

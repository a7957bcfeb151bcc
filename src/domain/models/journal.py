"""Domain models for journal entries and their lines."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class LineSide(str, Enum):
    """Side of a journal entry line."""

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class PostedLineRow:
    """Line of a posted journal entry, as read for aggregation."""

    account_id: str
    side: str
    amount: Decimal


@dataclass(frozen=True)
class ClosingLine:
    """Line to be written as part of a closing journal entry.

    Attributes:
        account_id: Account receiving the posting.
        side: Debit or credit side.
        amount: Non-negative amount rounded to two decimals.
        description: Optional free-text line description.
    """

    account_id: str
    side: LineSide
    amount: Decimal
    description: str | None = None


@dataclass(frozen=True)
class JournalEntryDraft:
    """Header of a journal entry about to be persisted as posted."""

    company_id: str
    number: str
    document_type: str
    entry_date: date
    description: str
    total_debit: Decimal
    total_credit: Decimal
    currency: str
    actor_id: str


__all__ = ["LineSide", "PostedLineRow", "ClosingLine", "JournalEntryDraft"]

"""Port for journal entry reads and writes."""

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from src.domain.models import ClosingLine, JournalEntryDraft, PostedLineRow


class JournalRepositoryPort(Protocol):
    """Port exposing posted journal lines and atomic entry creation."""

    def fetch_posted_lines(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        account_ids: Sequence[str],
    ) -> list[PostedLineRow]:
        """Return lines of posted entries dated within the period."""

    def save_posted_entry(
        self,
        entry: JournalEntryDraft,
        lines: Sequence[ClosingLine],
    ) -> str:
        """Persist a posted header and its lines in one transaction.

        Returns:
            str: Identifier of the created journal entry.
        """


__all__ = ["JournalRepositoryPort"]

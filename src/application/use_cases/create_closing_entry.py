"""Use case to persist a posted closing journal entry."""

from collections.abc import Sequence
from datetime import date
import time

from src.application.ports.document_numbering import DocumentNumberingPort
from src.application.ports.journal_repository import JournalRepositoryPort
from src.domain.exceptions import LedgerStorageError
from src.domain.models import ClosingLine, JournalEntryDraft
from src.domain.services import sum_sides
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ClosingSettings


def fallback_entry_number(prefix: str) -> str:
    """Return a synthetic entry number such as ``JE-1735689600000``."""
    return f"{prefix}-{int(time.time() * 1000)}"


class CreateClosingEntryUseCase:
    """Write a numbered, dated, posted journal entry with its lines."""

    def __init__(
        self,
        journal_repository: JournalRepositoryPort,
        numbering: DocumentNumberingPort,
        settings: ClosingSettings | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            journal_repository: Port writing journal entries.
            numbering: Port allocating document numbers.
            settings: Currency and numbering configuration.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._journal_repository = journal_repository
        self._numbering = numbering
        self._settings = settings or ClosingSettings()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        company_id: str,
        actor_id: str,
        entry_date: date,
        description: str,
        lines: Sequence[ClosingLine],
    ) -> str | None:
        """Create the entry and return its id.

        Args:
            company_id: Company owning the entry.
            actor_id: User recorded as creator and poster.
            entry_date: Accounting date of the entry.
            description: Header description.
            lines: Lines in posting order.

        Returns:
            str | None: Entry id, or None when nothing was written.
        """
        if not lines:
            self._logger.warning("Refusing to create an entry without lines")
            return None
        number = self._allocate_number(company_id)
        total_debit, total_credit = sum_sides(lines)
        entry = JournalEntryDraft(
            company_id=company_id,
            number=number,
            document_type=self._settings.document_type,
            entry_date=entry_date,
            description=description,
            total_debit=total_debit,
            total_credit=total_credit,
            currency=self._settings.currency,
            actor_id=actor_id,
        )
        try:
            entry_id = self._journal_repository.save_posted_entry(entry, lines)
        except LedgerStorageError as exc:
            self._logger.error(f"Failed to write closing entry {number}: {exc}")
            return None
        self._logger.info(
            f"Posted journal entry {number} with {len(lines)} lines "
            f"(debit={total_debit}, credit={total_credit})"
        )
        return entry_id

    def _allocate_number(self, company_id: str) -> str:
        try:
            return self._numbering.next_number(
                company_id,
                self._settings.numbering_series,
            )
        except LedgerStorageError as exc:
            number = fallback_entry_number(self._settings.fallback_prefix)
            self._logger.warning(
                f"Numbering series {self._settings.numbering_series} "
                f"unavailable ({exc}); using {number}"
            )
            return number


__all__ = ["CreateClosingEntryUseCase", "fallback_entry_number"]

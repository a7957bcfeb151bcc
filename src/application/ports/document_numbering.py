"""Port for allocating human-readable document numbers."""

from typing import Protocol


class DocumentNumberingPort(Protocol):
    """Port exposing per-company numbering series."""

    def next_number(self, company_id: str, document_type: str) -> str:
        """Allocate the next number of the series.

        Raises:
            NumberingUnavailableError: If no number can be allocated.
        """


__all__ = ["DocumentNumberingPort"]

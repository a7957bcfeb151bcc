"""SQL-backed numbering series for journal documents."""

from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_numbering import DocumentNumberingPort
from src.domain.exceptions import NumberingUnavailableError


ENSURE_SERIES_SQL = text(
    """
    INSERT INTO document_numbering (
        id,
        company_id,
        document_type,
        prefix,
        separator,
        padding,
        suffix,
        next_number
    )
    VALUES (
        :id,
        :company_id,
        :document_type,
        :prefix,
        :separator,
        :padding,
        NULL,
        1
    )
    ON CONFLICT DO NOTHING
    """
)

INCREMENT_SERIES_SQL = text(
    """
    UPDATE document_numbering
    SET next_number = next_number + 1
    WHERE company_id = :company_id AND document_type = :document_type
    """
)

SELECT_SERIES_SQL = text(
    """
    SELECT prefix, separator, padding, suffix, next_number
    FROM document_numbering
    WHERE company_id = :company_id AND document_type = :document_type
    """
)


def format_document_number(
    prefix: str,
    separator: str | None,
    padding: int,
    number: int,
    suffix: str | None = None,
) -> str:
    """Render a document number such as ``ID-000042``.

    Args:
        prefix: Series prefix.
        separator: Separator between prefix and counter.
        padding: Minimum width of the zero-padded counter.
        number: Allocated counter value.
        suffix: Optional series suffix.

    Returns:
        str: Human readable document number.
    """
    counter = str(number).zfill(max(int(padding or 0), 0))
    return f"{prefix}{separator or ''}{counter}{suffix or ''}"


class SqlAlchemyDocumentNumbering(DocumentNumberingPort):
    """Numbering series stored in the ``document_numbering`` table.

    Missing series are created on first use. The increment runs before the
    read inside one transaction, so the row lock serializes concurrent
    allocations on PostgreSQL.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        default_prefix: str = "ID",
        default_separator: str = "-",
        default_padding: int = 6,
    ) -> None:
        """Initialize the numbering adapter.

        Args:
            db_port: Port providing access to the ledger engine.
            default_prefix: Prefix of series created on first use.
            default_separator: Separator of series created on first use.
            default_padding: Counter width of series created on first use.
        """
        self._db_port = db_port
        self._default_prefix = default_prefix
        self._default_separator = default_separator
        self._default_padding = default_padding

    def next_number(self, company_id: str, document_type: str) -> str:
        params = {"company_id": company_id, "document_type": document_type}
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(
                    ENSURE_SERIES_SQL,
                    {
                        **params,
                        "id": str(uuid4()),
                        "prefix": self._default_prefix,
                        "separator": self._default_separator,
                        "padding": self._default_padding,
                    },
                )
                updated = conn.execute(INCREMENT_SERIES_SQL, params)
                if updated.rowcount == 0:
                    raise NumberingUnavailableError(
                        f"No numbering series {document_type} for company"
                    )
                row = conn.execute(SELECT_SERIES_SQL, params).first()
        except SQLAlchemyError as exc:
            raise NumberingUnavailableError(
                f"Numbering series {document_type} is unavailable"
            ) from exc
        return format_document_number(
            row.prefix,
            row.separator,
            row.padding,
            int(row.next_number) - 1,
            row.suffix,
        )


__all__ = ["SqlAlchemyDocumentNumbering", "format_document_number"]

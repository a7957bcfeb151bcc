"""SQLAlchemy-backed repository for journal entries and lines."""

from collections.abc import Sequence
from datetime import date, datetime, timezone
from uuid import uuid4

from sqlalchemy import Date, DateTime, Numeric, String, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.journal_repository import JournalRepositoryPort
from src.domain.constants import STATUS_POSTED
from src.domain.exceptions import LedgerStorageError
from src.domain.models import (
    ClosingLine,
    JournalEntryDraft,
    LineSide,
    PostedLineRow,
)
from src.utils.decimal_utils import coerce_decimal, round_money


SELECT_POSTED_LINES_SQL = text(
    """
    SELECT l.account_id AS account_id,
           l.side AS side,
           l.amount AS amount
    FROM journal_entry_lines l
    JOIN journal_entries e ON e.id = l.journal_entry_id
    WHERE e.company_id = :company_id
      AND l.company_id = :company_id
      AND e.status = :status
      AND e.date >= :period_start
      AND e.date <= :period_end
      AND l.account_id IN :account_ids
    """
).bindparams(
    bindparam("period_start", type_=Date),
    bindparam("period_end", type_=Date),
    bindparam("account_ids", expanding=True),
).columns(
    account_id=String,
    side=String,
    amount=Numeric(18, 2),
)

INSERT_ENTRY_SQL = text(
    """
    INSERT INTO journal_entries (
        id,
        company_id,
        number,
        document_type,
        date,
        description,
        status,
        total_debit,
        total_credit,
        currency,
        created_by,
        created_at,
        posted_by,
        posted_at
    )
    VALUES (
        :id,
        :company_id,
        :number,
        :document_type,
        :date,
        :description,
        :status,
        :total_debit,
        :total_credit,
        :currency,
        :created_by,
        :created_at,
        :posted_by,
        :posted_at
    )
    """
).bindparams(
    bindparam("date", type_=Date),
    bindparam("total_debit", type_=Numeric(18, 2)),
    bindparam("total_credit", type_=Numeric(18, 2)),
    bindparam("created_at", type_=DateTime),
    bindparam("posted_at", type_=DateTime),
)

INSERT_LINES_SQL = text(
    """
    INSERT INTO journal_entry_lines (
        id,
        company_id,
        journal_entry_id,
        position,
        account_id,
        side,
        amount,
        currency,
        description
    )
    VALUES (
        :id,
        :company_id,
        :journal_entry_id,
        :position,
        :account_id,
        :side,
        :amount,
        :currency,
        :description
    )
    """
).bindparams(bindparam("amount", type_=Numeric(18, 2)))


class SqlAlchemyJournalRepository(JournalRepositoryPort):
    """Journal store backed by the ledger database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_posted_lines(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
        account_ids: Sequence[str],
    ) -> list[PostedLineRow]:
        if not account_ids:
            return []
        params = {
            "company_id": company_id,
            "status": STATUS_POSTED,
            "period_start": period_start,
            "period_end": period_end,
            "account_ids": list(account_ids),
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(SELECT_POSTED_LINES_SQL, params).all()
        except SQLAlchemyError as exc:
            raise LedgerStorageError("Failed to read posted journal lines") from exc
        return [
            PostedLineRow(
                account_id=row.account_id,
                side=row.side,
                amount=coerce_decimal(row.amount),
            )
            for row in rows
        ]

    def save_posted_entry(
        self,
        entry: JournalEntryDraft,
        lines: Sequence[ClosingLine],
    ) -> str:
        """Insert the header and its lines in a single transaction.

        A failure on any line rolls the header back, so a posted entry
        never exists without its lines.

        Args:
            entry: Header values of the entry.
            lines: Lines in posting order.

        Returns:
            str: Identifier of the created journal entry.

        Raises:
            LedgerStorageError: If the transaction fails.
        """
        entry_id = str(uuid4())
        now = datetime.now(timezone.utc)
        header = {
            "id": entry_id,
            "company_id": entry.company_id,
            "number": entry.number,
            "document_type": entry.document_type,
            "date": entry.entry_date,
            "description": entry.description,
            "status": STATUS_POSTED,
            "total_debit": entry.total_debit,
            "total_credit": entry.total_credit,
            "currency": entry.currency,
            "created_by": entry.actor_id,
            "created_at": now,
            "posted_by": entry.actor_id,
            "posted_at": now,
        }
        payload = [
            {
                "id": str(uuid4()),
                "company_id": entry.company_id,
                "journal_entry_id": entry_id,
                "position": position,
                "account_id": line.account_id,
                "side": LineSide(line.side).value,
                "amount": round_money(line.amount),
                "currency": entry.currency,
                "description": line.description,
            }
            for position, line in enumerate(lines)
        ]
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_ENTRY_SQL, header)
                if payload:
                    conn.execute(INSERT_LINES_SQL, payload)
        except SQLAlchemyError as exc:
            raise LedgerStorageError(
                f"Failed to write journal entry {entry.number}"
            ) from exc
        return entry_id


__all__ = [
    "SqlAlchemyJournalRepository",
    "SELECT_POSTED_LINES_SQL",
    "INSERT_ENTRY_SQL",
    "INSERT_LINES_SQL",
]

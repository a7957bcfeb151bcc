"""SQLAlchemy-backed repository for closing runs."""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, Numeric, String, bindparam, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.application.ports.closing_runs import ClosingRunRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.constants import RUN_STATUS_COMPLETED, RUN_STATUS_RUNNING
from src.domain.exceptions import ClosingRunConflictError, LedgerStorageError
from src.domain.models import ClosingResult, ClosingRun, ClosingStep
from src.utils.date_utils import coerce_date
from src.utils.decimal_utils import coerce_decimal

SELECT_RUNS_SQL = text(
    """
    SELECT id, company_id, period_start, period_end, step, status,
           journal_entry_id, total_amount, accounts_count,
           created_by, created_at
    FROM closing_runs
    WHERE company_id = :company_id
      AND period_start <= :period_end
      AND period_end >= :period_start
    ORDER BY created_at, id
    """
).bindparams(
    bindparam("period_start", type_=Date),
    bindparam("period_end", type_=Date),
).columns(
    id=String,
    company_id=String,
    period_start=Date,
    period_end=Date,
    step=String,
    status=String,
    journal_entry_id=String,
    total_amount=Numeric(18, 2),
    accounts_count=Integer,
    created_by=String,
    created_at=DateTime,
)

INSERT_RUN_SQL = text(
    """
    INSERT INTO closing_runs (
        id,
        company_id,
        period_start,
        period_end,
        fiscal_year,
        step,
        status,
        journal_entry_id,
        total_amount,
        accounts_count,
        created_by,
        created_at
    )
    VALUES (
        :id,
        :company_id,
        :period_start,
        :period_end,
        :fiscal_year,
        :step,
        :status,
        NULL,
        0,
        0,
        :created_by,
        :created_at
    )
    """
).bindparams(
    bindparam("period_start", type_=Date),
    bindparam("period_end", type_=Date),
    bindparam("created_at", type_=DateTime),
)

COMPLETE_RUN_SQL = text(
    """
    UPDATE closing_runs
    SET status = :status,
        journal_entry_id = :journal_entry_id,
        total_amount = :total_amount,
        accounts_count = :accounts_count
    WHERE id = :id
    """
).bindparams(bindparam("total_amount", type_=Numeric(18, 2)))

RELEASE_RUN_SQL = text(
    """
    DELETE FROM closing_runs
    WHERE id = :id AND status = :status
    """
)


class SqlAlchemyClosingRunRepository(ClosingRunRepositoryPort):
    """Closing runs stored in the ``closing_runs`` table.

    Runs are looked up by overlapping period, so a step recorded for a
    fiscal year is found again when the same year is requested with shifted
    dates. The unique index on company, fiscal year, and step turns a
    concurrent second claim into an integrity error, reported as
    ``ClosingRunConflictError``.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_runs(
        self,
        company_id: str,
        period_start: date,
        period_end: date,
    ) -> list[ClosingRun]:
        params = {
            "company_id": company_id,
            "period_start": period_start,
            "period_end": period_end,
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(SELECT_RUNS_SQL, params).all()
        except SQLAlchemyError as exc:
            raise LedgerStorageError("Failed to read closing runs") from exc
        return [
            ClosingRun(
                id=row.id,
                company_id=row.company_id,
                period_start=coerce_date(row.period_start),
                period_end=coerce_date(row.period_end),
                step=ClosingStep(row.step),
                status=row.status,
                created_by=row.created_by,
                journal_entry_id=row.journal_entry_id,
                total_amount=coerce_decimal(row.total_amount),
                accounts_count=int(row.accounts_count or 0),
                created_at=row.created_at,
            )
            for row in rows
        ]

    def claim_run(self, run: ClosingRun) -> None:
        payload = {
            "id": run.id,
            "company_id": run.company_id,
            "period_start": run.period_start,
            "period_end": run.period_end,
            "fiscal_year": run.fiscal_year,
            "step": ClosingStep(run.step).value,
            "status": RUN_STATUS_RUNNING,
            "created_by": run.created_by,
            "created_at": run.created_at or datetime.now(timezone.utc),
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_RUN_SQL, payload)
        except IntegrityError as exc:
            raise ClosingRunConflictError(
                f"Closing step {payload['step']} is already recorded"
            ) from exc
        except SQLAlchemyError as exc:
            raise LedgerStorageError("Failed to claim closing run") from exc

    def complete_run(self, run_id: str, result: ClosingResult) -> None:
        params = {
            "id": run_id,
            "status": RUN_STATUS_COMPLETED,
            "journal_entry_id": result.journal_entry_id,
            "total_amount": result.total_amount,
            "accounts_count": result.accounts_count,
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(COMPLETE_RUN_SQL, params)
        except SQLAlchemyError as exc:
            raise LedgerStorageError("Failed to complete closing run") from exc

    def release_run(self, run_id: str) -> None:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(
                    RELEASE_RUN_SQL,
                    {"id": run_id, "status": RUN_STATUS_RUNNING},
                )
        except SQLAlchemyError as exc:
            raise LedgerStorageError("Failed to release closing run") from exc


__all__ = [
    "SqlAlchemyClosingRunRepository",
]

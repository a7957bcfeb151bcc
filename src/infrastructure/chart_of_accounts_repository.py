"""SQLAlchemy-backed repository for the chart of accounts."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.chart_of_accounts import ChartOfAccountsPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.exceptions import LedgerStorageError
from src.domain.models import Account
from src.domain.policies import matches_code_prefix


SELECT_ACCOUNTS_BY_PREFIX_SQL = text(
    """
    SELECT id, company_id, code, name, nature, active
    FROM chart_of_accounts
    WHERE company_id = :company_id
      AND code LIKE :code_pattern
      AND deleted_at IS NULL
    ORDER BY code
    """
).columns(
    id=String,
    company_id=String,
    code=String,
    name=String,
    nature=String,
    active=Boolean,
)

SELECT_ACCOUNT_ID_BY_CODE_SQL = text(
    """
    SELECT id
    FROM chart_of_accounts
    WHERE company_id = :company_id
      AND code = :code
      AND deleted_at IS NULL
    LIMIT 1
    """
)

INSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO chart_of_accounts (
        id,
        company_id,
        code,
        name,
        nature,
        active,
        created_at
    )
    VALUES (
        :id,
        :company_id,
        :code,
        :name,
        :nature,
        :active,
        :created_at
    )
    ON CONFLICT DO NOTHING
    """
).bindparams(
    bindparam("active", type_=Boolean),
    bindparam("created_at", type_=DateTime),
)


class SqlAlchemyChartOfAccountsRepository(ChartOfAccountsPort):
    """Chart of accounts backed by the ledger database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def fetch_accounts_by_prefix(
        self,
        company_id: str,
        code_prefix: str,
    ) -> list[Account]:
        params = {"company_id": company_id, "code_pattern": f"{code_prefix}%"}
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                rows = conn.execute(SELECT_ACCOUNTS_BY_PREFIX_SQL, params).all()
        except SQLAlchemyError as exc:
            raise LedgerStorageError(
                f"Failed to read accounts with prefix {code_prefix}"
            ) from exc
        return [
            Account(
                id=row.id,
                company_id=row.company_id,
                code=row.code,
                name=row.name,
                nature=row.nature,
                active=bool(row.active),
            )
            for row in rows
            if matches_code_prefix(row.code, code_prefix)
        ]

    def find_account_id(self, company_id: str, code: str) -> str | None:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_ACCOUNT_ID_BY_CODE_SQL,
                    {"company_id": company_id, "code": code},
                ).first()
        except SQLAlchemyError as exc:
            raise LedgerStorageError(
                f"Failed to look up account {code}"
            ) from exc
        return row.id if row else None

    def insert_account(
        self,
        company_id: str,
        code: str,
        name: str,
        nature: str,
    ) -> None:
        payload = {
            "id": str(uuid4()),
            "company_id": company_id,
            "code": code,
            "name": name,
            "nature": nature,
            "active": True,
            "created_at": datetime.now(timezone.utc),
        }
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_ACCOUNT_SQL, payload)
        except SQLAlchemyError as exc:
            raise LedgerStorageError(
                f"Failed to create account {code}"
            ) from exc


__all__ = [
    "SqlAlchemyChartOfAccountsRepository",
    "SELECT_ACCOUNTS_BY_PREFIX_SQL",
    "SELECT_ACCOUNT_ID_BY_CODE_SQL",
    "INSERT_ACCOUNT_SQL",
]

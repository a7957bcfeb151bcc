"""Fixtures providing a throwaway SQLite ledger."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from src.domain.models import ClosingLine, JournalEntryDraft, LineSide
from src.infrastructure import container as container_module
from src.infrastructure.chart_of_accounts_repository import (
    SqlAlchemyChartOfAccountsRepository,
)
from src.infrastructure.journal_repository import SqlAlchemyJournalRepository
from src.infrastructure.schema import ensure_ledger_schema


class SqliteLedgerDatabase:
    """DatabaseEnginePort serving a file-backed SQLite engine."""

    def __init__(self, engine) -> None:
        self.engine = engine

    def get_ledger_engine(self):
        return self.engine


class LedgerSeeder:
    """Creates accounts and posted entries through the real repositories."""

    def __init__(self, db: SqliteLedgerDatabase, company_id: str = "c1") -> None:
        self.company_id = company_id
        self.chart = SqlAlchemyChartOfAccountsRepository(db)
        self.journal = SqlAlchemyJournalRepository(db)
        self._entries = 0

    def account(self, code: str, nature: str = "active") -> str:
        self.chart.insert_account(
            self.company_id,
            code,
            f"Account {code}",
            nature,
        )
        return self.chart.find_account_id(self.company_id, code)

    def post(
        self,
        entry_date: date,
        debit_account: str,
        credit_account: str,
        amount: str,
    ) -> str:
        self._entries += 1
        value = Decimal(amount)
        lines = [
            ClosingLine(debit_account, LineSide.DEBIT, value),
            ClosingLine(credit_account, LineSide.CREDIT, value),
        ]
        return self.journal.save_posted_entry(
            JournalEntryDraft(
                company_id=self.company_id,
                number=f"SEED-{self._entries}",
                document_type="ID",
                entry_date=entry_date,
                description="Seed entry",
                total_debit=value,
                total_credit=value,
                currency="EUR",
                actor_id="seeder",
            ),
            lines,
        )


@pytest.fixture
def ledger_db(tmp_path):
    """Return a database port over a fresh ledger schema."""
    engine = create_engine(f"sqlite:///{tmp_path / 'ledger.db'}", future=True)
    ensure_ledger_schema(engine)
    yield SqliteLedgerDatabase(engine)
    engine.dispose()


@pytest.fixture
def seeder(ledger_db):
    return LedgerSeeder(ledger_db)


@pytest.fixture
def quiet_container(monkeypatch):
    """Replace the container loggers with mocks and return the audit mock."""
    app_logger = MagicMock()
    audit_logger = MagicMock()
    monkeypatch.setattr(container_module, "get_app_logger", lambda: app_logger)
    monkeypatch.setattr(
        container_module,
        "get_audit_logger",
        lambda: audit_logger,
    )
    return audit_logger

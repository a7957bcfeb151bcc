"""DDL for the ledger tables touched by the closing engine.

The statements run unchanged on PostgreSQL and SQLite. Unique indexes back
the two race-sensitive writes: control-account provisioning and closing-run
claims.
"""

from sqlalchemy.engine import Engine


CREATE_CHART_OF_ACCOUNTS_SQL = """
CREATE TABLE IF NOT EXISTS chart_of_accounts (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    code TEXT NOT NULL,
    name TEXT NOT NULL,
    nature TEXT NOT NULL,
    active BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMP,
    deleted_at TIMESTAMP
)
"""

CREATE_CHART_OF_ACCOUNTS_CODE_INDEX_SQL = """
CREATE UNIQUE INDEX IF NOT EXISTS ux_chart_of_accounts_company_code
ON chart_of_accounts (company_id, code)
WHERE deleted_at IS NULL
"""

CREATE_JOURNAL_ENTRIES_SQL = """
CREATE TABLE IF NOT EXISTS journal_entries (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    number TEXT NOT NULL,
    document_type TEXT NOT NULL,
    date DATE NOT NULL,
    description TEXT,
    status TEXT NOT NULL,
    total_debit NUMERIC(18, 2) NOT NULL,
    total_credit NUMERIC(18, 2) NOT NULL,
    currency TEXT NOT NULL,
    created_by TEXT,
    created_at TIMESTAMP,
    posted_by TEXT,
    posted_at TIMESTAMP
)
"""

CREATE_JOURNAL_ENTRIES_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS ix_journal_entries_company_status_date
ON journal_entries (company_id, status, date)
"""

CREATE_JOURNAL_ENTRY_LINES_SQL = """
CREATE TABLE IF NOT EXISTS journal_entry_lines (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    journal_entry_id TEXT NOT NULL REFERENCES journal_entries (id),
    position INTEGER NOT NULL,
    account_id TEXT NOT NULL REFERENCES chart_of_accounts (id),
    side TEXT NOT NULL,
    amount NUMERIC(18, 2) NOT NULL,
    currency TEXT NOT NULL,
    description TEXT
)
"""

CREATE_JOURNAL_ENTRY_LINES_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS ix_journal_entry_lines_entry_account
ON journal_entry_lines (journal_entry_id, account_id)
"""

CREATE_DOCUMENT_NUMBERING_SQL = """
CREATE TABLE IF NOT EXISTS document_numbering (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    document_type TEXT NOT NULL,
    prefix TEXT NOT NULL,
    separator TEXT NOT NULL DEFAULT '-',
    padding INTEGER NOT NULL DEFAULT 6,
    suffix TEXT,
    next_number INTEGER NOT NULL DEFAULT 1,
    UNIQUE (company_id, document_type)
)
"""

CREATE_CLOSING_RUNS_SQL = """
CREATE TABLE IF NOT EXISTS closing_runs (
    id TEXT PRIMARY KEY,
    company_id TEXT NOT NULL,
    period_start DATE NOT NULL,
    period_end DATE NOT NULL,
    fiscal_year INTEGER NOT NULL,
    step TEXT NOT NULL,
    status TEXT NOT NULL,
    journal_entry_id TEXT,
    total_amount NUMERIC(18, 2) NOT NULL DEFAULT 0,
    accounts_count INTEGER NOT NULL DEFAULT 0,
    created_by TEXT,
    created_at TIMESTAMP
)
"""

CREATE_CLOSING_RUNS_KEY_INDEX_SQL = """
CREATE UNIQUE INDEX IF NOT EXISTS ux_closing_runs_company_year_step
ON closing_runs (company_id, fiscal_year, step)
"""

LEDGER_SCHEMA_STATEMENTS = (
    CREATE_CHART_OF_ACCOUNTS_SQL,
    CREATE_CHART_OF_ACCOUNTS_CODE_INDEX_SQL,
    CREATE_JOURNAL_ENTRIES_SQL,
    CREATE_JOURNAL_ENTRIES_INDEX_SQL,
    CREATE_JOURNAL_ENTRY_LINES_SQL,
    CREATE_JOURNAL_ENTRY_LINES_INDEX_SQL,
    CREATE_DOCUMENT_NUMBERING_SQL,
    CREATE_CLOSING_RUNS_SQL,
    CREATE_CLOSING_RUNS_KEY_INDEX_SQL,
)


def ensure_ledger_schema(engine: Engine) -> None:
    """Create the ledger tables and indexes if they do not exist.

    Args:
        engine: SQLAlchemy engine for the ledger database.
    """
    with engine.begin() as conn:
        for statement in LEDGER_SCHEMA_STATEMENTS:
            conn.exec_driver_sql(statement)


__all__ = ["LEDGER_SCHEMA_STATEMENTS", "ensure_ledger_schema"]

"""Composition root for wiring infrastructure adapters."""

from src.application.ports.chart_of_accounts import ChartOfAccountsPort
from src.application.ports.closing_runs import ClosingRunRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.document_numbering import DocumentNumberingPort
from src.application.ports.journal_repository import JournalRepositoryPort
from src.application.use_cases import (
    CloseExpenseAccountsUseCase,
    CloseProfitLossAccountUseCase,
    CloseRevenueAccountsUseCase,
    ClosingStepUseCase,
    CreateClosingEntryUseCase,
    GenerateOpeningBalancesUseCase,
    GetAccountBalancesUseCase,
    GetClosingStatusUseCase,
    PreviewOpeningBalancesUseCase,
    ResolveControlAccountUseCase,
    RunClosingOperationUseCase,
)
from src.domain.models import ClosingStep
from src.infrastructure.chart_of_accounts_repository import (
    SqlAlchemyChartOfAccountsRepository,
)
from src.infrastructure.closing_runs_repository import (
    SqlAlchemyClosingRunRepository,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.document_numbering import SqlAlchemyDocumentNumbering
from src.infrastructure.journal_repository import SqlAlchemyJournalRepository
from src.infrastructure.logging.logger import get_app_logger, get_audit_logger
from src.infrastructure.settings import ClosingSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_chart_of_accounts_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ChartOfAccountsPort:
    """Return the chart of accounts repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyChartOfAccountsRepository(resolved_db)


def build_journal_repository(
    db_port: DatabaseEnginePort | None = None,
) -> JournalRepositoryPort:
    """Return the journal entries repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyJournalRepository(resolved_db)


def build_document_numbering(
    db_port: DatabaseEnginePort | None = None,
    settings: ClosingSettings | None = None,
) -> DocumentNumberingPort:
    """Return the numbering service seeded with the closing document type."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or ClosingSettings.from_env()
    return SqlAlchemyDocumentNumbering(
        resolved_db,
        default_prefix=resolved_settings.document_type,
    )


def build_closing_run_repository(
    db_port: DatabaseEnginePort | None = None,
) -> ClosingRunRepositoryPort:
    """Return the closing runs repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyClosingRunRepository(resolved_db)


def build_account_balances_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetAccountBalancesUseCase:
    """Return the balance aggregation use case."""
    resolved_db = db_port or build_database_adapter()
    return GetAccountBalancesUseCase(
        build_chart_of_accounts_repository(resolved_db),
        build_journal_repository(resolved_db),
        logger=get_app_logger(),
    )


def build_closing_steps(
    db_port: DatabaseEnginePort | None = None,
    settings: ClosingSettings | None = None,
) -> dict[ClosingStep, ClosingStepUseCase]:
    """Return the four closing steps keyed by their step name."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or ClosingSettings.from_env()
    logger = get_app_logger()
    balances = build_account_balances_use_case(resolved_db)
    resolver = ResolveControlAccountUseCase(
        build_chart_of_accounts_repository(resolved_db),
        logger=logger,
    )
    writer = CreateClosingEntryUseCase(
        build_journal_repository(resolved_db),
        build_document_numbering(resolved_db, resolved_settings),
        settings=resolved_settings,
        logger=logger,
    )
    step_classes = (
        CloseRevenueAccountsUseCase,
        CloseExpenseAccountsUseCase,
        CloseProfitLossAccountUseCase,
        GenerateOpeningBalancesUseCase,
    )
    return {
        step_class.step: step_class(balances, resolver, writer, logger=logger)
        for step_class in step_classes
    }


def build_closing_runner(
    db_port: DatabaseEnginePort | None = None,
    settings: ClosingSettings | None = None,
) -> RunClosingOperationUseCase:
    """Return the guarded closing operation runner."""
    resolved_db = db_port or build_database_adapter()
    return RunClosingOperationUseCase(
        build_closing_steps(resolved_db, settings),
        build_closing_run_repository(resolved_db),
        logger=get_app_logger(),
        audit_logger=get_audit_logger(),
    )


def build_opening_preview_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> PreviewOpeningBalancesUseCase:
    """Return the opening balance preview use case."""
    resolved_db = db_port or build_database_adapter()
    return PreviewOpeningBalancesUseCase(
        build_account_balances_use_case(resolved_db),
        logger=get_app_logger(),
    )


def build_closing_status_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetClosingStatusUseCase:
    """Return the closing status use case."""
    resolved_db = db_port or build_database_adapter()
    return GetClosingStatusUseCase(build_closing_run_repository(resolved_db))


__all__ = [
    "build_database_adapter",
    "build_chart_of_accounts_repository",
    "build_journal_repository",
    "build_document_numbering",
    "build_closing_run_repository",
    "build_account_balances_use_case",
    "build_closing_steps",
    "build_closing_runner",
    "build_opening_preview_use_case",
    "build_closing_status_use_case",
]

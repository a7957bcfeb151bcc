"""Application ports package."""

from .chart_of_accounts import ChartOfAccountsPort
from .closing_runs import ClosingRunRepositoryPort
from .database import DatabaseEnginePort
from .document_numbering import DocumentNumberingPort
from .journal_repository import JournalRepositoryPort

__all__ = [
    "ChartOfAccountsPort",
    "ClosingRunRepositoryPort",
    "DatabaseEnginePort",
    "DocumentNumberingPort",
    "JournalRepositoryPort",
]

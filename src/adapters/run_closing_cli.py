"""CLI adapter for period-close operations.

Commands:

* ``run``: execute one closing step through the guarded runner;
* ``status``: list the steps recorded for a period and the next one;
* ``preview``: print the opening balances a roll-forward would post;
* ``init-schema``: create the ledger tables if they are missing.
"""

import argparse
from datetime import date

from src.domain.exceptions import LedgerStorageError
from src.domain.models import ClosingRequest, ClosingStep
from src.infrastructure.container import (
    build_closing_runner,
    build_closing_status_use_case,
    build_database_adapter,
    build_opening_preview_use_case,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.schema import ensure_ledger_schema


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def _add_period_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--company", required=True, help="Company id.")
    parser.add_argument(
        "--start",
        required=True,
        type=_parse_date,
        help="First day of the fiscal period (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--end",
        required=True,
        type=_parse_date,
        help="Last day of the fiscal period (YYYY-MM-DD).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the closing CLI."""
    parser = argparse.ArgumentParser(
        prog="ledger-closing",
        description="Run fiscal period closing operations.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    run_parser = commands.add_parser("run", help="Execute a closing step.")
    run_parser.add_argument(
        "step",
        choices=[step.value for step in ClosingStep],
        help="Closing step to execute.",
    )
    _add_period_arguments(run_parser)
    run_parser.add_argument("--actor", required=True, help="Acting user id.")

    status_parser = commands.add_parser(
        "status",
        help="Show closing progress for a period.",
    )
    _add_period_arguments(status_parser)

    preview_parser = commands.add_parser(
        "preview",
        help="Preview opening balances of the next fiscal year.",
    )
    _add_period_arguments(preview_parser)

    commands.add_parser("init-schema", help="Create the ledger tables.")
    return parser


def _run(args: argparse.Namespace) -> int:
    runner = build_closing_runner()
    result = runner.execute(
        ClosingRequest(
            step=ClosingStep(args.step),
            company_id=args.company,
            period_start=args.start,
            period_end=args.end,
            actor_id=args.actor,
        )
    )
    if not result.success:
        print(f"{args.step} failed: {result.error}")
        return 1
    for warning in result.warnings:
        print(f"warning: {warning}")
    print(
        f"{args.step} completed: entry={result.journal_entry_id}, "
        f"amount={result.total_amount}, accounts={result.accounts_count}"
    )
    return 0


def _status(args: argparse.Namespace) -> int:
    status = build_closing_status_use_case().execute(
        args.company,
        args.start,
        args.end,
    )
    print(f"Closing status {args.company} ({args.start} - {args.end})")
    for run in status.runs:
        print(
            f"  {run.step.value}: {run.status}, entry={run.journal_entry_id}, "
            f"amount={run.total_amount}, accounts={run.accounts_count}"
        )
    next_step = status.next_step.value if status.next_step else "none"
    print(f"Next step: {next_step}")
    return 0


def _preview(args: argparse.Namespace) -> int:
    preview = build_opening_preview_use_case().execute(
        args.company,
        args.start,
        args.end,
    )
    for row in preview.rows:
        print(
            f"{row.code:<12} {row.name:<40} "
            f"{row.opening_debit:>14} {row.opening_credit:>14}"
        )
    print(
        f"{preview.accounts_count} accounts, "
        f"debit={preview.total_opening_debit}, "
        f"credit={preview.total_opening_credit}, "
        f"balanced={preview.is_balanced}"
    )
    return 0


def _init_schema(args: argparse.Namespace) -> int:
    ensure_ledger_schema(build_database_adapter().get_ledger_engine())
    print("Ledger schema is ready.")
    return 0


COMMANDS = {
    "run": _run,
    "status": _status,
    "preview": _preview,
    "init-schema": _init_schema,
}


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch the closing command.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``.

    Returns:
        int: Process exit code.
    """
    args = build_parser().parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except LedgerStorageError as exc:
        get_app_logger().error(f"{args.command} failed: {exc}")
        print(f"{args.command} failed: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

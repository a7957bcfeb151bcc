"""Request handler behind ``POST /closing/operations``.

The handler is framework agnostic: it validates a JSON-like payload, runs
the requested step, and returns a status code with a response body.
"""

from collections.abc import Mapping
from typing import Any

from src.application.use_cases.run_closing_operation import (
    RunClosingOperationUseCase,
)
from src.domain.models import ClosingErrorKind, ClosingRequest, ClosingStep
from src.infrastructure.container import build_closing_runner
from src.utils.date_utils import coerce_date
from src.utils.decimal_utils import round_money


STATUS_BY_ERROR_KIND = {
    ClosingErrorKind.INVALID_REQUEST: 400,
    ClosingErrorKind.PRECONDITION_FAILED: 400,
    ClosingErrorKind.ALREADY_EXECUTED: 409,
    ClosingErrorKind.STEP_FAILED: 500,
}

REQUIRED_FIELDS = ("type", "company_id", "fiscal_year_start", "fiscal_year_end")


def _parse_request(
    payload: Mapping[str, Any],
    actor_id: str,
) -> ClosingRequest:
    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        raise ValueError(f"Missing fields: {', '.join(missing)}")
    try:
        step = ClosingStep(payload["type"])
    except ValueError as exc:
        raise ValueError(f"Unknown closing type {payload['type']!r}") from exc
    return ClosingRequest(
        step=step,
        company_id=str(payload["company_id"]),
        period_start=coerce_date(payload["fiscal_year_start"]),
        period_end=coerce_date(payload["fiscal_year_end"]),
        actor_id=actor_id,
    )


def handle_closing_operation(
    payload: Mapping[str, Any],
    actor_id: str,
    runner: RunClosingOperationUseCase | None = None,
) -> tuple[int, dict[str, Any]]:
    """Run a closing operation from a request payload.

    Args:
        payload: Body with ``type``, ``company_id``, ``fiscal_year_start``
            and ``fiscal_year_end``.
        actor_id: Authenticated user id.
        runner: Runner to use, built from the environment when omitted.

    Returns:
        tuple[int, dict[str, Any]]: HTTP status code and JSON body.
    """
    if not actor_id:
        return 400, {"success": False, "error": "Missing actor id"}
    try:
        request = _parse_request(payload, actor_id)
    except ValueError as exc:
        return 400, {"success": False, "error": str(exc)}

    resolved_runner = runner or build_closing_runner()
    result = resolved_runner.execute(request)
    if not result.success:
        kind = result.error_kind or ClosingErrorKind.STEP_FAILED
        return STATUS_BY_ERROR_KIND[kind], {
            "success": False,
            "type": request.step.value,
            "error": result.error,
        }
    return 201, {
        "success": True,
        "journal_entry_id": result.journal_entry_id,
        "total_amount": float(round_money(result.total_amount)),
        "accounts_count": result.accounts_count,
        "type": request.step.value,
        "warnings": list(result.warnings),
    }


__all__ = ["handle_closing_operation", "STATUS_BY_ERROR_KIND"]

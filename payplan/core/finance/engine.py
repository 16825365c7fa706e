# payplan/core/finance/engine.py
from __future__ import annotations

from payplan.core.logs import get_logger
from payplan.schemas.models import Mode, ProjectionParameters, ProjectionReport

from .amortization import ProjectionResult, build_ledger, solve_payment

log = get_logger(__name__)


def project(params: ProjectionParameters) -> ProjectionResult:
    """Solve the payment, then walk the ledger, for one set of validated parameters."""
    payment = solve_payment(params.principal, params.annual_rate_percent, params.periods_total, params.mode)
    result = build_ledger(
        params.principal,
        params.starting_balance if params.mode is Mode.ACCUMULATE_UP else 0.0,
        params.annual_rate_percent,
        params.periods_total,
        params.mode,
        payment,
        params.target,
    )
    log.debug(
        "projected %s principal=%.2f payment=%.6f periods=%d",
        params.mode.value,
        params.principal,
        payment,
        len(result.ledger),
    )
    return result


def run_projection(params: ProjectionParameters, *, max_rows: int | None = None) -> ProjectionReport:
    """project() plus conversion to the serializable report (optionally row-capped)."""
    return ProjectionReport.from_result(project(params), max_rows=max_rows)

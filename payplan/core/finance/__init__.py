# payplan/core/finance/__init__.py

from .amortization import (
    PeriodRecord,
    ProjectionResult,
    build_ledger,
    periodic_rate,
    solve_payment,
)
from .engine import project, run_projection
from .metrics import (
    balance_after_periods,
    total_interest,
    total_interest_from_payments,
    total_paid,
    yearly_summary,
)

__all__ = [
    "PeriodRecord",
    "ProjectionResult",
    "periodic_rate",
    "solve_payment",
    "build_ledger",
    "project",
    "run_projection",
    "total_paid",
    "total_interest",
    "total_interest_from_payments",
    "yearly_summary",
    "balance_after_periods",
]

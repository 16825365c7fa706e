# payplan/orchestrators/runner.py
"""
Calculator dispatch.

Purpose
-------
Route a validated AppInputs payload to the matching calculator and return its
result model, honoring run options (row cap, ledger on/off).

Public API
----------
run_calculator(cfg: AppInputs) -> BaseModel
"""

from __future__ import annotations

from pydantic import BaseModel

from payplan.core.finance import run_projection
from payplan.core.logs import get_logger
from payplan.inputs.inputs import AppInputs
from payplan.schemas.models import (
    CarLoanInputs,
    HomeImprovementInputs,
    ProjectionParameters,
    ProjectionReport,
    SavingsGoalInputs,
)
from payplan.tools.car_loan import quote_car_loan
from payplan.tools.home_improvement import financing_options
from payplan.tools.savings_goal import plan_savings_goal

log = get_logger(__name__)


def _without_ledger(report: ProjectionReport) -> ProjectionReport:
    return report.model_copy(update={"ledger": [], "truncated": report.periods_emitted > 0})


def run_calculator(cfg: AppInputs) -> BaseModel:
    """Execute the calculator named in cfg and return its structured result."""
    run = cfg.run
    inputs = cfg.inputs
    log.info("running calculator %s", cfg.calculator)

    if isinstance(inputs, ProjectionParameters):
        report = run_projection(inputs, max_rows=run.max_rows)
        return report if run.include_ledger else _without_ledger(report)

    if isinstance(inputs, CarLoanInputs):
        quote = quote_car_loan(inputs, max_rows=run.max_rows)
        if run.include_ledger:
            return quote
        return quote.model_copy(update={"schedule": _without_ledger(quote.schedule)})

    if isinstance(inputs, SavingsGoalInputs):
        plan = plan_savings_goal(inputs, max_rows=run.max_rows)
        if run.include_ledger:
            return plan
        return plan.model_copy(update={"schedule": _without_ledger(plan.schedule)})

    if isinstance(inputs, HomeImprovementInputs):
        return financing_options(inputs)

    raise TypeError(f"unsupported inputs type: {type(inputs).__name__}")

# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from payplan.schemas.models import (
    CarLoanInputs,
    Mode,
    ProjectionParameters,
    SavingsGoalInputs,
)

# -----------------------------
# Global defaults (edit once)
# -----------------------------

# Scenario 1: direct loan amount
LOAN_PRINCIPAL = 25_000.0
LOAN_RATE_PERCENT = 6.0
LOAN_MONTHS = 60
LOAN_PAYMENT = 483.32
LOAN_TOTAL_INTEREST = 3_999.15

# Scenario 2: zero-rate loan
ZERO_RATE_PRINCIPAL = 12_000.0
ZERO_RATE_MONTHS = 24

# Scenario 3: savings goal
GOAL_TARGET = 15_000.0
GOAL_CURRENT = 2_000.0
GOAL_RATE_PERCENT = 4.0
GOAL_MONTHS = 36
GOAL_PAYMENT = 340.48

REL_TOL = 1e-6

# -----------------------------
# Factories
# -----------------------------


def make_loan_params(
    principal: float = LOAN_PRINCIPAL,
    annual_rate_percent: float = LOAN_RATE_PERCENT,
    periods_total: int = LOAN_MONTHS,
) -> ProjectionParameters:
    return ProjectionParameters(
        principal=principal,
        annual_rate_percent=annual_rate_percent,
        periods_total=periods_total,
        mode=Mode.AMORTIZE_DOWN,
    )


def make_goal_params(
    target: float = GOAL_TARGET,
    current_savings: float = GOAL_CURRENT,
    annual_rate_percent: float = GOAL_RATE_PERCENT,
    periods_total: int = GOAL_MONTHS,
) -> ProjectionParameters:
    return ProjectionParameters.for_savings_goal(
        target=target,
        current_savings=current_savings,
        annual_rate_percent=annual_rate_percent,
        periods_total=periods_total,
    )


def make_car_loan_inputs(**overrides: Any) -> CarLoanInputs:
    base = CarLoanInputs(
        car_price=30_000.0,
        down_payment=5_000.0,
        trade_in_value=0.0,
        annual_rate_percent=6.5,
        term_months=60,
    )
    return base.model_copy(update=overrides) if overrides else base


def make_savings_goal_inputs(**overrides: Any) -> SavingsGoalInputs:
    base = SavingsGoalInputs(
        goal_name="Emergency Fund",
        goal_amount=GOAL_TARGET,
        current_savings=GOAL_CURRENT,
        years=3.0,
        annual_rate_percent=GOAL_RATE_PERCENT,
    )
    return base.model_copy(update=overrides) if overrides else base


def write_json(path: Path, payload: dict[str, Any]) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path

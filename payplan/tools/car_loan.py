# payplan/tools/car_loan.py
"""
Car loan quote.

Purpose
-------
Size the loan from price, down payment and trade-in; solve the monthly payment;
build the amortization ledger and a year-by-year roll-up; and compare a few
what-if variants (shorter term, lower rate, more money down).

Public API
----------
loan_amount(car_price, down_payment, trade_in_value) -> float
compare_scenarios(loan, annual_rate_percent, term_months) -> list[ScenarioOutcome]
quote_car_loan(inputs, max_rows=None) -> CarLoanQuote
"""

from __future__ import annotations

from payplan.core.finance import build_ledger, solve_payment, yearly_summary
from payplan.core.logs import get_logger
from payplan.schemas.models import CarLoanInputs, CarLoanQuote, Mode, ProjectionReport, ScenarioOutcome

MIN_SCENARIO_TERM_MONTHS = 24
SCENARIO_TERM_STEP_MONTHS = 12
SCENARIO_RATE_STEP_PERCENT = 1.0
SCENARIO_EXTRA_DOWN = 2_000.0

log = get_logger(__name__)


def loan_amount(car_price: float, down_payment: float, trade_in_value: float) -> float:
    """Financed amount: price less cash down and trade-in, never negative."""
    return max(0.0, car_price - down_payment - trade_in_value)


def _outcome(name: str, principal: float, annual_rate_percent: float, term_months: int) -> ScenarioOutcome:
    payment = solve_payment(principal, annual_rate_percent, term_months, Mode.AMORTIZE_DOWN)
    result = build_ledger(principal, 0.0, annual_rate_percent, term_months, Mode.AMORTIZE_DOWN, payment)
    return ScenarioOutcome(
        name=name,
        principal=principal,
        annual_rate_percent=annual_rate_percent,
        periods_total=term_months,
        periodic_payment=payment,
        total_paid=result.total_paid,
        total_interest=result.total_interest,
    )


def compare_scenarios(loan: float, annual_rate_percent: float, term_months: int) -> list[ScenarioOutcome]:
    """
    What-if variants against the current loan.

    Variants:
        - shorter_term: term - 12 months, but never below 24
        - lower_rate:   rate - 1 point, floored at 0
        - more_down:    $2,000 less financed, floored at 0
    """
    current = _outcome("current", loan, annual_rate_percent, term_months)
    variants = [
        _outcome(
            "shorter_term",
            loan,
            annual_rate_percent,
            max(MIN_SCENARIO_TERM_MONTHS, term_months - SCENARIO_TERM_STEP_MONTHS),
        ),
        _outcome("lower_rate", loan, max(0.0, annual_rate_percent - SCENARIO_RATE_STEP_PERCENT), term_months),
        _outcome("more_down", max(0.0, loan - SCENARIO_EXTRA_DOWN), annual_rate_percent, term_months),
    ]
    out = [current]
    for v in variants:
        out.append(
            v.model_copy(
                update={
                    "interest_saved": current.total_interest - v.total_interest,
                    "payment_change": v.periodic_payment - current.periodic_payment,
                }
            )
        )
    return out


def quote_car_loan(inputs: CarLoanInputs, *, max_rows: int | None = None) -> CarLoanQuote:
    loan = loan_amount(inputs.car_price, inputs.down_payment, inputs.trade_in_value)
    payment = solve_payment(loan, inputs.annual_rate_percent, inputs.term_months, Mode.AMORTIZE_DOWN)
    result = build_ledger(loan, 0.0, inputs.annual_rate_percent, inputs.term_months, Mode.AMORTIZE_DOWN, payment)

    down_pct = inputs.down_payment / inputs.car_price * 100.0 if inputs.car_price > 0 else 0.0
    log.info("car loan quote: loan=%.2f payment=%.2f term=%d", loan, payment, inputs.term_months)

    return CarLoanQuote(
        inputs=inputs,
        loan_amount=loan,
        down_payment_percent=down_pct,
        monthly_payment=payment,
        total_cost=result.total_paid,
        total_interest=result.total_interest,
        schedule=ProjectionReport.from_result(result, max_rows=max_rows),
        yearly=yearly_summary(result.ledger),
        scenarios=compare_scenarios(loan, inputs.annual_rate_percent, inputs.term_months),
    )

# payplan/tools/savings_goal.py
from __future__ import annotations

import math

from payplan.core.finance import build_ledger, periodic_rate, solve_payment
from payplan.core.logs import get_logger
from payplan.schemas.models import Mode, ProjectionReport, SavingsGoalInputs, SavingsGoalPlan, ScenarioOutcome

FASTER_TIME_FACTOR = 0.75
LONGER_EXTRA_YEARS = 1.0

# name, amount, annual rate percent
GOAL_TEMPLATES: dict[str, tuple[str, float, float]] = {
    "emergency": ("Emergency Fund", 15_000.0, 4.0),
    "vacation": ("Dream Vacation", 5_000.0, 3.0),
    "house": ("House Down Payment", 50_000.0, 4.0),
    "car": ("New Car", 8_000.0, 3.0),
    "wedding": ("Wedding Fund", 25_000.0, 4.0),
    "retirement": ("Retirement Savings", 100_000.0, 6.0),
}

log = get_logger(__name__)


def apply_template(inputs: SavingsGoalInputs, key: str) -> SavingsGoalInputs:
    """Return a copy with name, amount and rate taken from a preset goal."""
    try:
        name, amount, rate = GOAL_TEMPLATES[key]
    except KeyError as e:
        raise ValueError(f"unknown goal template: {key!r}") from e
    return inputs.model_copy(update={"goal_name": name, "goal_amount": amount, "annual_rate_percent": rate})


def months_for(years: float) -> int:
    """Whole months in a (possibly fractional) number of years, half rounding up."""
    return int(math.floor(years * 12 + 0.5))


def interest_earned(payment: float, annual_rate_percent: float, months: int) -> float:
    """
    Interest earned by the contributions alone at the deadline.

    Future value of an ordinary annuity minus what was paid in:
        FV = PMT * ((1 + r)^n - 1) / r
        interest = FV - PMT * n
    """
    r = periodic_rate(annual_rate_percent)
    if r <= 0 or payment <= 0 or months <= 0:
        return 0.0
    fv = payment * ((1.0 + r) ** months - 1.0) / r
    return fv - payment * months


def _scenario(name: str, inputs: SavingsGoalInputs, years: float) -> ScenarioOutcome:
    months = months_for(years)
    gap = max(0.0, inputs.goal_amount - inputs.current_savings)
    if months < 1:
        return ScenarioOutcome(
            name=name,
            principal=gap,
            annual_rate_percent=inputs.annual_rate_percent,
            periods_total=0,
            periodic_payment=0.0,
            total_paid=0.0,
            total_interest=0.0,
        )
    payment = solve_payment(gap, inputs.annual_rate_percent, months, Mode.ACCUMULATE_UP)
    return ScenarioOutcome(
        name=name,
        principal=gap,
        annual_rate_percent=inputs.annual_rate_percent,
        periods_total=months,
        periodic_payment=payment,
        total_paid=payment * months,
        total_interest=interest_earned(payment, inputs.annual_rate_percent, months),
    )


def compare_scenarios(inputs: SavingsGoalInputs) -> list[ScenarioOutcome]:
    """
    Current plan vs. reaching the goal in 75% of the time (higher contribution)
    vs. one extra year (lower contribution). payment_change is relative to current.
    """
    current = _scenario("current", inputs, inputs.years)
    out = [current]
    for name, years in (
        ("faster", inputs.years * FASTER_TIME_FACTOR),
        ("longer", inputs.years + LONGER_EXTRA_YEARS),
    ):
        s = _scenario(name, inputs, years)
        out.append(s.model_copy(update={"payment_change": s.periodic_payment - current.periodic_payment}))
    return out


def plan_savings_goal(inputs: SavingsGoalInputs, *, max_rows: int | None = None) -> SavingsGoalPlan:
    """
    Monthly contribution needed to close the gap between current savings and the goal.

    The ledger starts from current savings, grows with interest plus the
    contribution, and stops at the first month the goal is reached.
    """
    gap = max(0.0, inputs.goal_amount - inputs.current_savings)
    progress = inputs.current_savings / inputs.goal_amount * 100.0 if inputs.goal_amount > 0 else 0.0
    months = months_for(inputs.years)

    if months < 1:
        payment = 0.0
        schedule = ProjectionReport(
            mode=Mode.ACCUMULATE_UP,
            principal=gap,
            periodic_payment=0.0,
            total_paid=0.0,
            total_interest=0.0,
            periods_emitted=0,
        )
    else:
        payment = solve_payment(gap, inputs.annual_rate_percent, months, Mode.ACCUMULATE_UP)
        result = build_ledger(
            gap,
            inputs.current_savings,
            inputs.annual_rate_percent,
            months,
            Mode.ACCUMULATE_UP,
            payment,
            target=inputs.goal_amount,
        )
        schedule = ProjectionReport.from_result(result, max_rows=max_rows)

    reached = None
    if schedule.periods_emitted and schedule.final_balance >= inputs.goal_amount:
        reached = schedule.periods_emitted

    log.info("savings goal %r: gap=%.2f months=%d contribution=%.2f", inputs.goal_name, gap, months, payment)

    return SavingsGoalPlan(
        inputs=inputs,
        amount_to_save=gap,
        progress_percent=progress,
        months=months,
        monthly_contribution=payment,
        interest_earned=interest_earned(payment, inputs.annual_rate_percent, months),
        goal_reached_period=reached,
        schedule=schedule,
        scenarios=compare_scenarios(inputs),
    )

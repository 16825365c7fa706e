# payplan/tools/home_improvement.py
from __future__ import annotations

from payplan.core.finance import solve_payment
from payplan.schemas.models import FinancingOption, HomeImprovementFinancing, HomeImprovementInputs, Mode

# (term months, APR percent)
FINANCING_TIERS: tuple[tuple[int, float], ...] = (
    (12, 6.0),
    (24, 7.0),
    (60, 8.0),
)
PERMITS_PERCENT = 5.0


def total_with_extras(cost: float, contingency_percent: float, permits_percent: float = PERMITS_PERCENT) -> float:
    """Materials + labor plus permits and a contingency budget, both as a percent of that cost."""
    return cost + cost * permits_percent / 100.0 + cost * contingency_percent / 100.0


def financing_options(
    inputs: HomeImprovementInputs,
    tiers: tuple[tuple[int, float], ...] = FINANCING_TIERS,
) -> HomeImprovementFinancing:
    """Monthly payment for each standard financing tier on the project cost (with extras when a contingency is given)."""
    if inputs.contingency_percent is None:
        financed = inputs.project_cost
    else:
        financed = total_with_extras(inputs.project_cost, inputs.contingency_percent)

    options: list[FinancingOption] = []
    for term, rate in tiers:
        payment = solve_payment(financed, rate, term, Mode.AMORTIZE_DOWN)
        total = payment * term
        options.append(
            FinancingOption(
                term_months=term,
                annual_rate_percent=rate,
                monthly_payment=payment,
                total_paid=total,
                total_interest=total - financed,
            )
        )
    return HomeImprovementFinancing(project_cost=inputs.project_cost, financed_amount=financed, options=options)

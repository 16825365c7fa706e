# tests/unit/test_home_improvement.py
from __future__ import annotations

import pytest

from payplan.core.finance import solve_payment
from payplan.schemas.models import HomeImprovementInputs
from payplan.tools.home_improvement import financing_options, total_with_extras


def test_standard_tiers():
    out = financing_options(HomeImprovementInputs(project_cost=10_000.0))
    assert [(o.term_months, o.annual_rate_percent) for o in out.options] == [(12, 6.0), (24, 7.0), (60, 8.0)]
    first = out.options[0]
    assert first.monthly_payment == pytest.approx(solve_payment(10_000.0, 6.0, 12))
    assert first.total_interest == pytest.approx(first.total_paid - 10_000.0)
    # Longer terms: lower monthly, more interest overall
    payments = [o.monthly_payment for o in out.options]
    interest = [o.total_interest for o in out.options]
    assert payments == sorted(payments, reverse=True)
    assert interest == sorted(interest)


def test_zero_cost():
    out = financing_options(HomeImprovementInputs(project_cost=0.0))
    assert all(o.monthly_payment == 0.0 and o.total_interest == 0.0 for o in out.options)


def test_custom_tiers():
    out = financing_options(HomeImprovementInputs(project_cost=1_200.0), tiers=((12, 0.0),))
    assert len(out.options) == 1
    assert out.options[0].monthly_payment == pytest.approx(100.0)


def test_total_with_extras_adds_permits_and_contingency():
    # 20k materials + labor, 5% permits, 10% contingency
    assert total_with_extras(20_000.0, 10.0) == pytest.approx(23_000.0)
    assert total_with_extras(20_000.0, 0.0, permits_percent=0.0) == 20_000.0


def test_contingency_is_financed_with_permits():
    out = financing_options(HomeImprovementInputs(project_cost=20_000.0, contingency_percent=10.0))
    assert out.project_cost == 20_000.0
    assert out.financed_amount == pytest.approx(23_000.0)
    assert out.options[0].monthly_payment == pytest.approx(solve_payment(23_000.0, 6.0, 12))
    assert out.options[-1].total_interest == pytest.approx(out.options[-1].total_paid - 23_000.0)


def test_cost_without_contingency_is_financed_as_given():
    out = financing_options(HomeImprovementInputs(project_cost=10_000.0))
    assert out.financed_amount == 10_000.0

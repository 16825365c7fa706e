# payplan/schemas/models.py

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from payplan.core.finance.amortization import PeriodRecord, ProjectionResult

# =========================
# Core inputs
# =========================


class Mode(str, Enum):
    """Direction of the schedule: pay a balance down, or grow savings up."""

    AMORTIZE_DOWN = "amortize_down"
    ACCUMULATE_UP = "accumulate_up"


class ProjectionParameters(BaseModel):
    """
    Inputs for one engine run. Immutable per calculation; supply a fresh instance on every recalculation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    principal: float = Field(..., ge=0, description="Amount to amortize (loan) or savings gap target - current (goal).")
    starting_balance: float = Field(0.0, ge=0, description="Opening balance: 0 for a loan, current savings for a goal.")
    annual_rate_percent: float = Field(..., ge=0, description="Nominal annual rate in percent (6.5 = 6.5%).")
    periods_total: int = Field(..., ge=1, description="Number of monthly payment/compounding periods.")
    mode: Mode = Field(Mode.AMORTIZE_DOWN, description="AMORTIZE_DOWN (loan) or ACCUMULATE_UP (savings).")
    target: float | None = Field(None, ge=0, description="Savings goal; the ledger stops once the balance reaches it.")

    @model_validator(mode="after")
    def _target_only_for_savings(self) -> ProjectionParameters:
        if self.target is not None and self.mode is Mode.AMORTIZE_DOWN:
            raise ValueError("target applies to accumulate_up projections only")
        return self

    @classmethod
    def for_savings_goal(
        cls,
        *,
        target: float,
        current_savings: float,
        annual_rate_percent: float,
        periods_total: int,
    ) -> ProjectionParameters:
        """Savings goal: principal is the remaining gap, floored at 0."""
        return cls(
            principal=max(0.0, target - current_savings),
            starting_balance=current_savings,
            annual_rate_percent=annual_rate_percent,
            periods_total=periods_total,
            mode=Mode.ACCUMULATE_UP,
            target=target,
        )


class CarLoanInputs(BaseModel):
    """Vehicle purchase financed with a fixed-rate installment loan."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    car_price: float = Field(30_000.0, ge=0, description="Vehicle price.")
    down_payment: float = Field(5_000.0, ge=0, description="Cash paid up front.")
    trade_in_value: float = Field(0.0, ge=0, description="Value credited for a trade-in.")
    annual_rate_percent: float = Field(6.5, ge=0, description="Loan APR in percent.")
    term_months: int = Field(60, ge=1, description="Loan term in months.")


class SavingsGoalInputs(BaseModel):
    """Save toward a target amount by a deadline with monthly contributions."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    goal_name: str = Field("Emergency Fund", description="Label for the goal.")
    goal_amount: float = Field(15_000.0, ge=0, description="Target balance.")
    current_savings: float = Field(2_000.0, ge=0, description="Balance already saved.")
    years: float = Field(3.0, gt=0, description="Time to reach the goal, in years (fractional allowed).")
    annual_rate_percent: float = Field(4.0, ge=0, description="Annual yield on savings in percent.")


class HomeImprovementInputs(BaseModel):
    """Project cost to be financed, optionally before permits and contingency."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    project_cost: float = Field(..., ge=0, description="Materials + labor, or the full cost when contingency_percent is unset.")
    contingency_percent: float | None = Field(
        None, ge=0, description="When set, permits (5%) and this contingency are added before financing."
    )


# =========================
# Computed outputs
# =========================


class PeriodRow(BaseModel):
    """One ledger row."""

    period: int = Field(..., ge=1, description="1-based period index.")
    payment: float = Field(..., description="Payment or contribution for the period.")
    interest: float = Field(..., description="Interest charged (loan) or credited (savings).")
    principal: float = Field(..., description="Loan: principal retired. Savings: balance increase (contribution + interest).")
    ending_balance: float = Field(..., description="Balance after the period.")

    @classmethod
    def from_record(cls, record: PeriodRecord) -> PeriodRow:
        return cls(
            period=record.period,
            payment=record.payment,
            interest=record.interest,
            principal=record.principal,
            ending_balance=record.ending_balance,
        )


class YearSummary(BaseModel):
    """Periods rolled up by year (a trailing partial year is kept)."""

    year: int = Field(..., ge=1, description="1-based year index.")
    periods: int = Field(..., ge=1, description="Number of periods aggregated into this year.")
    payment: float = Field(..., description="Sum of payments in the year.")
    principal: float = Field(..., description="Sum of principal components in the year.")
    interest: float = Field(..., description="Sum of interest components in the year.")
    ending_balance: float = Field(..., description="Balance at the end of the year's last period.")


class ProjectionReport(BaseModel):
    """Serializable view of a ProjectionResult, with an optional display cap on rows."""

    mode: Mode
    principal: float
    periodic_payment: float
    total_paid: float
    total_interest: float
    periods_emitted: int = Field(..., ge=0, description="Ledger length before any display cap.")
    final_balance: float = Field(0.0, description="Ending balance of the last emitted period (0 for an empty ledger).")
    ledger: list[PeriodRow] = Field(default_factory=list)
    truncated: bool = Field(False, description="True when max_rows hid part of the ledger.")

    @classmethod
    def from_result(cls, result: ProjectionResult, *, max_rows: int | None = None) -> ProjectionReport:
        rows = result.ledger if max_rows is None else result.ledger[:max_rows]
        return cls(
            mode=result.mode,
            principal=result.principal,
            periodic_payment=result.periodic_payment,
            total_paid=result.total_paid,
            total_interest=result.total_interest,
            periods_emitted=len(result.ledger),
            final_balance=result.ledger[-1].ending_balance if result.ledger else 0.0,
            ledger=[PeriodRow.from_record(r) for r in rows],
            truncated=len(rows) < len(result.ledger),
        )


class ScenarioOutcome(BaseModel):
    """A what-if variant of a calculation, compared against the current inputs."""

    name: str = Field(..., description="Scenario key, e.g. 'current', 'shorter_term', 'faster'.")
    principal: float
    annual_rate_percent: float
    periods_total: int
    periodic_payment: float
    total_paid: float
    total_interest: float
    interest_saved: float = Field(0.0, description="Current total interest minus this scenario's (loans).")
    payment_change: float = Field(0.0, description="This scenario's periodic payment minus the current one.")


class CarLoanQuote(BaseModel):
    inputs: CarLoanInputs
    loan_amount: float
    down_payment_percent: float
    monthly_payment: float
    total_cost: float
    total_interest: float
    schedule: ProjectionReport
    yearly: list[YearSummary] = Field(default_factory=list)
    scenarios: list[ScenarioOutcome] = Field(default_factory=list)


class SavingsGoalPlan(BaseModel):
    inputs: SavingsGoalInputs
    amount_to_save: float = Field(..., description="goal - current savings, floored at 0.")
    progress_percent: float = Field(..., description="current / goal * 100 (0 when the goal is 0).")
    months: int = Field(..., ge=0)
    monthly_contribution: float
    interest_earned: float = Field(..., description="Interest the contributions alone earn by the deadline.")
    goal_reached_period: int | None = Field(None, description="First period whose balance reaches the goal.")
    schedule: ProjectionReport
    scenarios: list[ScenarioOutcome] = Field(default_factory=list)


class FinancingOption(BaseModel):
    term_months: int
    annual_rate_percent: float
    monthly_payment: float
    total_paid: float
    total_interest: float


class HomeImprovementFinancing(BaseModel):
    project_cost: float
    financed_amount: float = Field(..., description="Amount the tiers are quoted on (cost plus any extras).")
    options: list[FinancingOption] = Field(default_factory=list)

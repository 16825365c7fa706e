# payplan/core/finance/amortization.py

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

from payplan.core.errors import InvalidParametersError, projection_error_guard, require_finite
from payplan.core.logs import get_logger
from payplan.schemas.models import Mode

_EPS = 1e-6  # loan residual below _EPS * payment is snapped to zero
_SOLVED_REL_TOL = 1e-9  # payment this close to the solved one is walked in closed form
_MAX_LOG_GROWTH = math.log(sys.float_info.max)  # ln((1 + r)^n) beyond this overflows a float
PERIODS_PER_YEAR = 12

log = get_logger(__name__)


@dataclass(frozen=True)
class PeriodRecord:
    """
    Immutable record of a single period.

    Attributes:
        period (int): 1-based period index.
        payment (float): Payment/contribution this period (constant within a ledger).
        interest (float): Interest charged (loan) or credited (savings) on the opening balance.
        principal (float): Loan: payment - interest. Savings: payment + interest (balance increase).
        ending_balance (float): Balance after this period.
    """

    period: int
    payment: float
    interest: float
    principal: float
    ending_balance: float


@dataclass(frozen=True)
class ProjectionResult:
    mode: Mode
    principal: float
    periodic_payment: float
    total_paid: float
    total_interest: float
    ledger: tuple[PeriodRecord, ...] = ()


def periodic_rate(annual_rate_percent: float, periods_per_year: int = PERIODS_PER_YEAR) -> float:
    """Nominal annual percent (6.5 = 6.5%) → per-period fraction."""
    return annual_rate_percent / 100.0 / periods_per_year


def _coerce_mode(mode: Mode | str) -> Mode:
    try:
        return Mode(mode)
    except ValueError as e:
        raise InvalidParametersError(f"unknown mode: {mode!r}") from e


def _validated_terms(annual_rate_percent: float, periods_total: int) -> tuple[float, int]:
    """Return (periodic rate, period count) or raise InvalidParametersError."""
    rate = require_finite("annual_rate_percent", annual_rate_percent)
    if rate < 0:
        raise InvalidParametersError(f"annual_rate_percent must be >= 0, got {annual_rate_percent!r}")

    n = require_finite("periods_total", periods_total)
    if not n.is_integer():
        raise InvalidParametersError(f"periods_total must be a whole number, got {periods_total!r}")
    if n < 1:
        raise InvalidParametersError(f"periods_total must be >= 1, got {periods_total!r}")
    return periodic_rate(rate), int(n)


def _clamped(name: str, value: float) -> float:
    # negative amounts are treated as nothing to amortize / nothing saved yet
    return max(0.0, require_finite(name, value))


def _remaining_balance(payment: float, r: float, periods_left: int) -> float:
    """Present value of `periods_left` further payments, i.e. the loan balance still owed."""
    if periods_left <= 0:
        return 0.0
    if r == 0:
        return payment * periods_left
    # payment * (1 - (1 + r)^-m) / r, without forming (1 + r)^m
    return payment * -math.expm1(-periods_left * math.log1p(r)) / r


def solve_payment(
    principal: float,
    annual_rate_percent: float,
    periods_total: int,
    mode: Mode | str = Mode.AMORTIZE_DOWN,
) -> float:
    """
    Compute the constant periodic payment.

    Formulas (r = periodic rate, n = periods):
        AMORTIZE_DOWN (loan annuity):   PMT = P * r * (1 + r)^n / ((1 + r)^n - 1)
        ACCUMULATE_UP (sinking fund):   PMT = P * r / ((1 + r)^n - 1)

    The loan formula pays off P in n periods; the sinking-fund formula grows
    contributions (with compounding) into an extra P by period n.

    Args:
        principal: Amount to amortize, or the savings gap (target - current). Negative → 0.
        annual_rate_percent: Nominal annual rate in percent (6.5 = 6.5%).
        periods_total: Number of monthly periods (>= 1).
        mode: Mode.AMORTIZE_DOWN or Mode.ACCUMULATE_UP.

    Returns:
        The periodic payment (>= 0).

    Notes:
        - principal == 0 returns 0.0.
        - A zero rate reduces to principal / n.
        - The growth factor is handled as ln((1 + r)^n), so very long terms
          approach their limits instead of overflowing: the loan payment tends
          to P * r (interest only) and the sinking-fund payment to 0.
        - A loan payment is never below the first period's interest P * r.
    """
    mode = _coerce_mode(mode)
    r, n = _validated_terms(annual_rate_percent, periods_total)
    p = _clamped("principal", principal)

    if p <= 0:
        return 0.0
    if r == 0:
        return p / n

    with projection_error_guard():
        log_growth = n * math.log1p(r)
        if mode is Mode.AMORTIZE_DOWN:
            # P * r / (1 - (1 + r)^-n)
            return max(p * r / -math.expm1(-log_growth), p * r)
        if log_growth > _MAX_LOG_GROWTH:
            return 0.0
        # P * r / ((1 + r)^n - 1)
        return p * r / math.expm1(log_growth)


def build_ledger(
    principal: float,
    starting_balance: float,
    annual_rate_percent: float,
    periods_total: int,
    mode: Mode | str,
    periodic_payment: float,
    target: float | None = None,
) -> ProjectionResult:
    """
    Walk the schedule period by period.

    Model:
        - Loan (AMORTIZE_DOWN): opens at `principal`; each period pays interest on the
          opening balance and retires payment - interest, clamped so the balance
          never goes negative. Stops once the balance reaches 0.
        - Savings (ACCUMULATE_UP): opens at `starting_balance`; each period credits
          interest and adds the contribution. Stops at the first period whose
          ending balance reaches `target` (if given).

    Args:
        principal: Loan amount, or savings gap. <= 0 yields an empty ledger.
        starting_balance: Opening savings balance. Ignored for loans.
        annual_rate_percent: Nominal annual rate in percent.
        periods_total: Upper bound on periods emitted (>= 1).
        mode: Mode.AMORTIZE_DOWN or Mode.ACCUMULATE_UP.
        periodic_payment: Payment from solve_payment() (or a caller-chosen amount).
        target: Optional goal balance for early exit (savings only).

    Returns:
        ProjectionResult with totals and the emitted ledger.

    Notes:
        - No row cap is applied here; display limits belong to the caller.
        - A loan payment below the first period's interest never amortizes and
          is rejected.
        - With the solved loan payment, each ending balance is the present value
          of the payments still owed, so the final balance is exactly 0 and the
          balances never rise, however long the term.
    """
    mode = _coerce_mode(mode)
    r, n = _validated_terms(annual_rate_percent, periods_total)
    p = _clamped("principal", principal)
    opening = _clamped("starting_balance", starting_balance)
    payment = require_finite("periodic_payment", periodic_payment)
    if payment < 0:
        raise InvalidParametersError(f"periodic_payment must be >= 0, got {periodic_payment!r}")
    goal = require_finite("target", target) if target is not None else None

    if p <= 0:
        return ProjectionResult(mode=mode, principal=p, periodic_payment=0.0, total_paid=0.0, total_interest=0.0)

    rows: list[PeriodRecord] = []
    with projection_error_guard():
        if mode is Mode.AMORTIZE_DOWN:
            first_interest = p * r
            if payment < first_interest and not math.isclose(payment, first_interest, rel_tol=1e-12):
                raise InvalidParametersError(
                    f"periodic_payment {payment:.6f} does not cover first-period interest {first_interest:.6f}"
                )
            # The running update amplifies rounding by (1 + r) per period; with the
            # solved payment the balance is taken from the payments still owed instead.
            settles_at_term = math.isclose(
                payment, solve_payment(p, annual_rate_percent, n, mode), rel_tol=_SOLVED_REL_TOL
            )
            bal = p
            for period in range(1, n + 1):
                interest = bal * r
                principal_pay = payment - interest
                if settles_at_term:
                    next_bal = _remaining_balance(payment, r, n - period)
                else:
                    next_bal = max(0.0, bal - principal_pay)
                bal = min(bal, next_bal)
                # Clean tiny residual drift
                if bal < _EPS * payment:
                    bal = 0.0
                rows.append(PeriodRecord(period, payment, interest, principal_pay, bal))
                if bal == 0.0:
                    break
        else:
            bal = opening
            for period in range(1, n + 1):
                interest = bal * r
                credited = payment + interest
                bal = bal + credited
                rows.append(PeriodRecord(period, payment, interest, credited, bal))
                if goal is not None and bal >= goal:
                    break

    total_interest = sum(row.interest for row in rows)
    if len(rows) < n:
        log.debug("ledger %s stopped early at period %d of %d", mode.value, len(rows), n)

    return ProjectionResult(
        mode=mode,
        principal=p,
        periodic_payment=payment,
        total_paid=payment * len(rows),
        total_interest=total_interest,
        ledger=tuple(rows),
    )

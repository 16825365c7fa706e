# payplan/core/finance/metrics.py
"""Aggregates over a ledger: totals, yearly roll-ups, balance lookups."""

from __future__ import annotations

from collections.abc import Sequence

from payplan.schemas.models import YearSummary

from .amortization import PERIODS_PER_YEAR, PeriodRecord


def total_paid(ledger: Sequence[PeriodRecord]) -> float:
    """Sum of payments across emitted periods."""
    return sum(row.payment for row in ledger)


def total_interest(ledger: Sequence[PeriodRecord]) -> float:
    """Sum of per-period interest."""
    return sum(row.interest for row in ledger)


def total_interest_from_payments(ledger: Sequence[PeriodRecord], principal: float) -> float:
    """
    Loan-only shortcut: interest = everything paid minus what was borrowed.

    Agrees with total_interest() for a fully amortized loan within floating tolerance.
    """
    return total_paid(ledger) - principal


def yearly_summary(ledger: Sequence[PeriodRecord], periods_per_year: int = PERIODS_PER_YEAR) -> list[YearSummary]:
    """
    Roll periods up into years.

    Definitions:
        - payment / principal / interest = sums over the year's periods.
        - ending_balance = balance after the year's last emitted period.

    Notes:
        - A trailing partial year (ledger stopped early or term not a multiple of
          periods_per_year) is emitted with its actual period count.
    """
    if periods_per_year < 1:
        raise ValueError("periods_per_year must be >= 1")

    out: list[YearSummary] = []
    for start in range(0, len(ledger), periods_per_year):
        chunk = ledger[start : start + periods_per_year]
        out.append(
            YearSummary(
                year=start // periods_per_year + 1,
                periods=len(chunk),
                payment=sum(r.payment for r in chunk),
                principal=sum(r.principal for r in chunk),
                interest=sum(r.interest for r in chunk),
                ending_balance=chunk[-1].ending_balance,
            )
        )
    return out


def balance_after_periods(ledger: Sequence[PeriodRecord], periods_elapsed: int, opening_balance: float) -> float:
    """
    Balance after a whole number of periods.

    Args:
        ledger: Ledger from build_ledger().
        periods_elapsed: Periods since the start (0, 1, 2, ...).
        opening_balance: Balance before period 1 (loan principal or current savings).

    Returns:
        opening_balance for 0 elapsed periods; otherwise the ending balance of that
        period, held at the last emitted balance once the ledger has stopped.
    """
    if periods_elapsed < 0:
        raise ValueError("periods_elapsed must be >= 0")
    if periods_elapsed == 0 or not ledger:
        return opening_balance
    cutoff = min(len(ledger), periods_elapsed)
    return ledger[cutoff - 1].ending_balance

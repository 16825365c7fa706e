# main.py
"""
Entry Point — payplan

Purpose
-------
Run one calculation and emit its result as JSON:
  1) Load inputs (demo defaults for the chosen calculator, or --config JSON).
  2) Dispatch to the calculator (projection, car-loan, savings-goal, home-improvement).
  3) Write the JSON result to --out, or print it to stdout.

Usage
-----
    python main.py --calculator car-loan
    python main.py --config payplan.json --out result.json --max-rows 24
    python main.py --calculator savings-goal --no-ledger
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from payplan.core.errors import PROJECTION_ERRORS
from payplan.core.logs import get_logger
from payplan.inputs.inputs import AppInputs, InputsLoader, RunOptions
from payplan.orchestrators.runner import run_calculator
from payplan.schemas.models import (
    CarLoanInputs,
    HomeImprovementInputs,
    Mode,
    ProjectionParameters,
    SavingsGoalInputs,
)

CALCULATORS = ("projection", "car-loan", "savings-goal", "home-improvement")


def build_sample_inputs(calculator: str) -> AppInputs:
    """Return demo inputs for the named calculator."""
    if calculator == "car-loan":
        inputs = CarLoanInputs()
    elif calculator == "savings-goal":
        inputs = SavingsGoalInputs()
    elif calculator == "home-improvement":
        inputs = HomeImprovementInputs(project_cost=25_000.0, contingency_percent=10.0)
    else:
        inputs = ProjectionParameters(
            principal=25_000.0,
            annual_rate_percent=6.0,
            periods_total=60,
            mode=Mode.AMORTIZE_DOWN,
        )
    return AppInputs(calculator=calculator, inputs=inputs, run=RunOptions())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for configurable runs."""
    p = argparse.ArgumentParser(description="Loan amortization and savings projection calculators")
    p.add_argument("--config", type=str, default=None, help="Path to JSON config (ProjectionParameters or AppInputs).")
    p.add_argument(
        "--calculator",
        type=str,
        default=None,
        choices=CALCULATORS,
        help="Calculator to run with demo inputs (ignored when --config is given).",
    )
    p.add_argument("--out", type=str, default=None, help="Output JSON path (overrides config).")
    p.add_argument("--max-rows", type=int, default=None, help="Cap on ledger rows in the output (overrides config).")
    p.add_argument("--no-ledger", action="store_true", help="Emit totals only, without per-period rows.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one calculation and write its JSON result."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s", stream=sys.stderr)
    log = get_logger("payplan.cli")

    loader = InputsLoader()
    try:
        cfg = loader.load(args.config) if args.config else build_sample_inputs(args.calculator or "projection")
        cfg = loader.with_overrides(
            cfg,
            out=args.out,
            max_rows=args.max_rows,
            include_ledger=False if args.no_ledger else None,
        )
        result = run_calculator(cfg)
    except (FileNotFoundError, ValueError) as e:
        # PROJECTION_ERRORS are ValueErrors; report them the same way
        kind = "calculation" if isinstance(e, PROJECTION_ERRORS) else "input"
        log.error("%s error: %s", kind, e)
        return 2

    payload = result.model_dump_json(indent=2)
    if cfg.run.out:
        Path(cfg.run.out).write_text(payload + "\n", encoding="utf-8")
        log.info("result written to %s", cfg.run.out)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())

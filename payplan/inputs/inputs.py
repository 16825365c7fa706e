# payplan/inputs/inputs.py
"""
Inputs loader for payplan.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- Accept a bare ProjectionParameters object (the engine's own input shape)
  as well as a structured shape naming the calculator and run options.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Bare (root = ProjectionParameters)
   {
     "principal": 25000, "annual_rate_percent": 6, "periods_total": 60
   }

2) Structured (root = AppInputs)
   {
     "calculator": "car-loan",
     "inputs": { ... CarLoanInputs ... },
     "run": {
       "out": "quote.json",
       "max_rows": 120,
       "include_ledger": true
     }
   }

Environment overrides (optional)
--------------------------------
- PAYPLAN_OUT             -> AppInputs.run.out
- PAYPLAN_MAX_ROWS        -> AppInputs.run.max_rows (int, or "all" for no cap)
- PAYPLAN_INCLUDE_LEDGER  -> AppInputs.run.include_ledger (1/0, true/false)

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(**kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path | None) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError, model_validator

from payplan.schemas.models import (
    CarLoanInputs,
    HomeImprovementInputs,
    ProjectionParameters,
    SavingsGoalInputs,
)

CalculatorName = Literal["projection", "car-loan", "savings-goal", "home-improvement"]

INPUT_MODELS: dict[str, type[BaseModel]] = {
    "projection": ProjectionParameters,
    "car-loan": CarLoanInputs,
    "savings-goal": SavingsGoalInputs,
    "home-improvement": HomeImprovementInputs,
}

DEFAULT_MAX_ROWS = 120

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the run."""

    out: str | None = Field(None, description="Path to write the JSON result; stdout when unset.")
    max_rows: int | None = Field(
        DEFAULT_MAX_ROWS, ge=1, description="Display cap on ledger rows; None keeps the full ledger."
    )
    include_ledger: bool = Field(True, description="Emit per-period rows (False keeps totals only).")


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        calculator: Which calculation to run.
        inputs:     Validated inputs for that calculator.
        run:        Non-financial, runtime options for the current execution.
    """

    calculator: CalculatorName = "projection"
    inputs: ProjectionParameters | CarLoanInputs | SavingsGoalInputs | HomeImprovementInputs
    run: RunOptions = RunOptions()

    @model_validator(mode="before")
    @classmethod
    def _typed_inputs(cls, data: Any) -> Any:
        """Validate `inputs` against the model named by `calculator` (not by union guessing)."""
        if not isinstance(data, dict):
            return data
        model = INPUT_MODELS.get(data.get("calculator", "projection"))
        raw = data.get("inputs")
        if model is not None and isinstance(raw, dict):
            data = {**data, "inputs": model.model_validate(raw)}
        return data

    @model_validator(mode="after")
    def _inputs_match_calculator(self) -> AppInputs:
        expected = INPUT_MODELS[self.calculator]
        if not isinstance(self.inputs, expected):
            raise ValueError(f"inputs do not match calculator {self.calculator!r}")
        return self


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Responsibilities:
        - Read JSON from a file or string
        - Accept both the bare and structured shapes
        - Validate with Pydantic
        - Apply environment overrides for run options

    Default search (when path=None):
        1) ./payplan.json
        2) ./config.json
    """

    env_prefix: str = "PAYPLAN_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.

        Returns:
            AppInputs (validated).
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        data = self._maybe_wrap_bare(raw)
        cfg = self._parse_root(data)
        cfg = self._apply_env_overrides(cfg)
        return cfg

    def load_json(self, text: str) -> AppInputs:
        """Load inputs from a JSON string (bare or structured shape)."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs payload must be a JSON object.")
        data = self._maybe_wrap_bare(raw)
        cfg = self._parse_root(data)
        cfg = self._apply_env_overrides(cfg)
        return cfg

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        max_rows: int | None = None,
        include_ledger: bool | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied to RunOptions.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if out is not None:
            updates["out"] = out
        if max_rows is not None:
            updates["max_rows"] = max_rows
        if include_ledger is not None:
            updates["include_ledger"] = include_ledger

        if not updates:
            return cfg

        run_new = RunOptions.model_validate({**cfg.run.model_dump(), **updates})
        return cfg.model_copy(update={"run": run_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("payplan.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError("No inputs path provided and no default inputs found. Looked for ./payplan.json and ./config.json.")

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Inputs in {p} must be a JSON object.")
        return cast(dict[str, Any], data)

    def _maybe_wrap_bare(self, raw: dict[str, Any]) -> dict[str, Any]:
        """A root without 'inputs' is a bare ProjectionParameters object."""
        if "inputs" in raw:
            return raw
        return {"calculator": "projection", "inputs": raw}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """Apply light, optional overrides from environment variables to run options."""
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        max_rows = os.getenv(f"{prefix}MAX_ROWS")
        if max_rows:
            value = max_rows.strip().lower()
            if value in ("all", "none"):
                updates["max_rows"] = None
            else:
                try:
                    parsed = int(value)
                except ValueError:
                    parsed = 0
                # Ignore bad or non-positive values; keep validated cfg.max_rows
                if parsed >= 1:
                    updates["max_rows"] = parsed

        include = os.getenv(f"{prefix}INCLUDE_LEDGER")
        if include:
            flag = include.strip().lower()
            if flag in _TRUTHY:
                updates["include_ledger"] = True
            elif flag in _FALSY:
                updates["include_ledger"] = False

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)

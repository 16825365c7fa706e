# payplan/core/errors.py
"""
Typed errors + utilities for the projection engine.

Exports
-------
- ProjectionError, InvalidParametersError
- PROJECTION_ERRORS
- classify_projection_error(exc)
- projection_error_guard()
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager

# =========================
# Exception types
# =========================


class ProjectionError(ValueError):
    """Base class for payment/ledger computation failures."""


class InvalidParametersError(ProjectionError):
    """Inputs fall outside the engine contract (negative rate, empty term, non-finite values)."""


# Selector tuple for grouped exception handling
PROJECTION_ERRORS = (ProjectionError,)

# =========================
# Validation helpers
# =========================


def require_finite(name: str, value: float) -> float:
    """Return value as float, raising InvalidParametersError for NaN/inf or non-numbers."""
    try:
        out = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidParametersError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(out):
        raise InvalidParametersError(f"{name} must be finite, got {value!r}")
    return out


# =========================
# Classification helpers
# =========================


def classify_projection_error(exc: Exception) -> ProjectionError:
    """
    Map arbitrary exceptions raised inside the engine to a typed ProjectionError.

    Heuristics:
      - Any ProjectionError subclass → passed through
      - OverflowError → ProjectionError
      - ZeroDivisionError → ProjectionError
      - Fallback → ProjectionError
    """
    if isinstance(exc, ProjectionError):
        return exc
    if isinstance(exc, OverflowError):
        return ProjectionError(f"growth factor overflow: {exc}")
    if isinstance(exc, ZeroDivisionError):
        return ProjectionError(f"degenerate annuity factor: {exc}")
    return ProjectionError(f"{type(exc).__name__}: {exc}")


@contextmanager
def projection_error_guard() -> Iterator[None]:
    """Context manager to normalize arithmetic failures from engine internals."""
    try:
        yield
    except PROJECTION_ERRORS:
        raise
    except (ArithmeticError, TypeError) as exc:
        raise classify_projection_error(exc) from exc


__all__ = [
    "ProjectionError",
    "InvalidParametersError",
    "PROJECTION_ERRORS",
    "require_finite",
    "classify_projection_error",
    "projection_error_guard",
]

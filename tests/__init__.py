# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_loan_params, make_goal_params
"""

from .utils import make_car_loan_inputs, make_goal_params, make_loan_params, make_savings_goal_inputs

__all__ = ["make_loan_params", "make_goal_params", "make_car_loan_inputs", "make_savings_goal_inputs"]

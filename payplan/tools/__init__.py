# payplan/tools/__init__.py

from .car_loan import quote_car_loan
from .home_improvement import financing_options
from .savings_goal import plan_savings_goal

__all__ = [
    "quote_car_loan",
    "plan_savings_goal",
    "financing_options",
]

# tests/conftest.py
from __future__ import annotations

import pytest

from payplan.core.finance import project
from tests.utils import make_goal_params, make_loan_params

_ENV_VARS = ("PAYPLAN_OUT", "PAYPLAN_MAX_ROWS", "PAYPLAN_INCLUDE_LEDGER", "PAYPLAN_DEBUG")


# -------- Keep runs independent of the caller's shell --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


# -------- Engine fixtures --------
@pytest.fixture
def loan_params():
    return make_loan_params()


@pytest.fixture
def goal_params():
    return make_goal_params()


@pytest.fixture
def loan_result(loan_params):
    return project(loan_params)


@pytest.fixture
def goal_result(goal_params):
    return project(goal_params)

# tests/unit/test_inputs_loader.py
from __future__ import annotations

import pytest

from payplan.inputs.inputs import DEFAULT_MAX_ROWS, AppInputs, InputsLoader, load_inputs
from payplan.schemas.models import CarLoanInputs, HomeImprovementInputs, Mode, ProjectionParameters
from tests.utils import write_json


def test_bare_projection_shape(tmp_path):
    p = write_json(tmp_path / "loan.json", {"principal": 25_000, "annual_rate_percent": 6, "periods_total": 60})
    cfg = InputsLoader().load(p)
    assert cfg.calculator == "projection"
    assert isinstance(cfg.inputs, ProjectionParameters)
    assert cfg.inputs.mode is Mode.AMORTIZE_DOWN
    assert cfg.run.max_rows == DEFAULT_MAX_ROWS


def test_structured_shape(tmp_path):
    p = write_json(
        tmp_path / "car.json",
        {
            "calculator": "car-loan",
            "inputs": {"car_price": 20_000, "down_payment": 2_000, "term_months": 48},
            "run": {"out": "quote.json", "max_rows": 12, "include_ledger": False},
        },
    )
    cfg = load_inputs(p)
    assert isinstance(cfg.inputs, CarLoanInputs)
    assert cfg.inputs.term_months == 48
    assert cfg.run.out == "quote.json"
    assert cfg.run.max_rows == 12
    assert cfg.run.include_ledger is False


def test_inputs_validated_against_named_calculator():
    loader = InputsLoader()
    with pytest.raises(ValueError):
        loader.load_json('{"calculator": "car-loan", "inputs": {"principal": 1000}}')
    with pytest.raises(ValueError):
        loader.load_json('{"calculator": "home-improvement", "inputs": {}}')
    with pytest.raises(ValueError):
        loader.load_json('{"calculator": "mortgage", "inputs": {}}')


def test_home_improvement_payload():
    cfg = InputsLoader().load_json('{"calculator": "home-improvement", "inputs": {"project_cost": 8000}}')
    assert isinstance(cfg.inputs, HomeImprovementInputs)


def test_invalid_json_and_shapes(tmp_path):
    loader = InputsLoader()
    with pytest.raises(ValueError):
        loader.load_json("{not json")
    with pytest.raises(ValueError):
        loader.load_json("[1, 2]")
    txt = tmp_path / "inputs.txt"
    txt.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        loader.load(txt)
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")
    with pytest.raises(ValueError):
        loader.load(bad)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        InputsLoader().load(tmp_path / "nope.json")


def test_default_search(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        InputsLoader().load()
    write_json(tmp_path / "config.json", {"principal": 100, "annual_rate_percent": 0, "periods_total": 1})
    assert InputsLoader().load().inputs.principal == 100
    write_json(tmp_path / "payplan.json", {"principal": 200, "annual_rate_percent": 0, "periods_total": 1})
    assert InputsLoader().load().inputs.principal == 200


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PAYPLAN_OUT", "env.json")
    monkeypatch.setenv("PAYPLAN_MAX_ROWS", "all")
    monkeypatch.setenv("PAYPLAN_INCLUDE_LEDGER", "off")
    cfg = InputsLoader().load_json('{"principal": 1, "annual_rate_percent": 1, "periods_total": 1}')
    assert cfg.run.out == "env.json"
    assert cfg.run.max_rows is None
    assert cfg.run.include_ledger is False


@pytest.mark.parametrize("raw", ["abc", "0", "-4"])
def test_bad_env_max_rows_ignored(monkeypatch, raw):
    monkeypatch.setenv("PAYPLAN_MAX_ROWS", raw)
    cfg = InputsLoader().load_json('{"principal": 1, "annual_rate_percent": 1, "periods_total": 1}')
    assert cfg.run.max_rows == DEFAULT_MAX_ROWS


def test_with_overrides_is_non_destructive():
    loader = InputsLoader()
    cfg = loader.load_json('{"principal": 1, "annual_rate_percent": 1, "periods_total": 1}')
    new = loader.with_overrides(cfg, out="x.json", max_rows=5, include_ledger=False)
    assert (new.run.out, new.run.max_rows, new.run.include_ledger) == ("x.json", 5, False)
    assert (cfg.run.out, cfg.run.max_rows, cfg.run.include_ledger) == (None, DEFAULT_MAX_ROWS, True)
    assert loader.with_overrides(cfg) is cfg
    with pytest.raises(ValueError):
        loader.with_overrides(cfg, max_rows=0)


def test_app_inputs_direct_construction():
    cfg = AppInputs(calculator="car-loan", inputs=CarLoanInputs())
    assert cfg.run.include_ledger is True
    with pytest.raises(ValueError):
        AppInputs(calculator="savings-goal", inputs=CarLoanInputs())

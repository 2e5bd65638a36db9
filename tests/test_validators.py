import pytest

from core.config import FinancialInputs
from scenarios.validators import InvalidInputsError, require_valid_inputs, validate_inputs


def test_defaults_pass_cleanly(base_inputs):
    result = validate_inputs(base_inputs)
    assert result.is_valid
    assert result.warnings == []
    assert "All checks passed" in result.summary()


@pytest.mark.parametrize("overrides", [
    {"loan_term_years": 0},
    {"time_horizon_years": 0},
    {"home_price": 0.0},
    {"current_rent": -100.0},
    {"closing_costs_percent": 150.0},
    {"down_payment_percent": -5.0},
])
def test_blocking_errors(overrides):
    result = validate_inputs(FinancialInputs(**overrides))
    assert not result.is_valid


@pytest.mark.parametrize("overrides, fragment", [
    ({"interest_rate": 0.07}, "decimal"),
    ({"property_tax_rate": 0.012}, "below 0.1%"),
    ({"down_payment_percent": 5.0}, "PMI"),
    ({"time_horizon_years": 35}, "past the loan term"),
])
def test_warnings(overrides, fragment):
    result = validate_inputs(FinancialInputs(**overrides))
    assert result.is_valid
    assert any(fragment in w for w in result.warnings)


def test_require_valid_inputs_raises():
    with pytest.raises(InvalidInputsError) as excinfo:
        require_valid_inputs(FinancialInputs(loan_term_years=0))
    assert not excinfo.value.result.is_valid
    assert isinstance(excinfo.value, ValueError)


def test_require_valid_inputs_returns_result(low_down_inputs):
    result = require_valid_inputs(low_down_inputs)
    assert result.warnings

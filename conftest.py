import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent))

from core.config import FinancialInputs, MonteCarloInputs
from engine.runner import calculate_rent_vs_buy


@pytest.fixture
def base_inputs():
    return FinancialInputs()


@pytest.fixture
def low_down_inputs():
    return FinancialInputs(down_payment_percent=5.0)


@pytest.fixture
def base_results(base_inputs):
    return calculate_rent_vs_buy(base_inputs)


@pytest.fixture
def small_mc():
    return MonteCarloInputs(simulations=50)

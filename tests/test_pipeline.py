import pytest

from core.config import FinancialInputs
from core.schema import MonteCarloResult, PercentileBand
from analysis.montecarlo import run_monte_carlo_simulation
from analysis.pipeline import run_full_analysis
from scenarios.validators import InvalidInputsError


def test_without_monte_carlo(base_inputs):
    bundle = run_full_analysis(base_inputs, include_sensitivity=False)
    assert bundle.results.monte_carlo_results is None
    assert bundle.sensitivity == []
    assert bundle.validation.is_valid
    assert bundle.decision.horizon_years == 10


def test_with_monte_carlo(base_inputs, small_mc):
    bundle = run_full_analysis(base_inputs, small_mc, seed=3)
    assert len(bundle.results.monte_carlo_results) == 10
    assert len(bundle.sensitivity) == 4
    assert bundle.decision.mc_buy_p50 is not None


def test_invalid_inputs_raise_before_running():
    with pytest.raises(InvalidInputsError):
        run_full_analysis(FinancialInputs(time_horizon_years=0))


def test_warnings_are_carried(low_down_inputs):
    bundle = run_full_analysis(low_down_inputs, include_sensitivity=False)
    assert bundle.validation.warnings


def test_precomputed_bands_feed_the_decision(base_inputs, small_mc):
    bands = run_monte_carlo_simulation(base_inputs, small_mc, seed=8)
    bundle = run_full_analysis(base_inputs, monte_carlo=bands, include_sensitivity=False)
    assert bundle.results.monte_carlo_results == bands
    assert bundle.decision.mc_rent_p50 == pytest.approx(bands[-1].rent_net_worth.p50)
    assert bundle.decision.mc_buy_p50 == pytest.approx(bands[-1].buy_net_worth.p50)
    assert bundle.decision.mc_bands_overlap is not None


def _final_year_bands(rent, buy):
    return [MonteCarloResult(year=1, rent_net_worth=PercentileBand(*rent), buy_net_worth=PercentileBand(*buy))]


def test_overlapping_bands_flag_uncertainty():
    inputs = FinancialInputs(time_horizon_years=1)
    bands = _final_year_bands((0, 1, 2, 3, 4), (2, 3, 4, 5, 6))
    bundle = run_full_analysis(inputs, monte_carlo=bands, include_sensitivity=False)
    assert bundle.decision.mc_bands_overlap is True
    assert any(f.startswith("WIDE_UNCERTAINTY") for f in bundle.decision.flags)


def test_separated_bands_do_not_flag_uncertainty():
    inputs = FinancialInputs(time_horizon_years=1)
    bands = _final_year_bands((0, 1, 2, 3, 4), (10, 11, 12, 13, 14))
    bundle = run_full_analysis(inputs, monte_carlo=bands, include_sensitivity=False)
    assert bundle.decision.mc_bands_overlap is False
    assert not any(f.startswith("WIDE_UNCERTAINTY") for f in bundle.decision.flags)

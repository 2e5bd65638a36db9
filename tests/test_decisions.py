import pytest

from core.config import FinancialInputs
from engine.runner import calculate_rent_vs_buy
from analysis.decisions import generate_decision_report
from analysis.montecarlo import run_monte_carlo_simulation


def test_verdict_follows_difference(base_results, base_inputs):
    report = generate_decision_report(base_results, base_inputs)
    diff = base_results.net_worth_difference
    if abs(diff) < 0.01 * base_inputs.home_price:
        assert report.verdict == "toss-up"
    else:
        assert report.verdict == ("buy" if diff > 0 else "rent")
    assert "10 years" in report.headline()


def test_no_pmi_at_twenty_percent(base_results, base_inputs):
    report = generate_decision_report(base_results, base_inputs)
    assert report.pmi_end_year is None
    assert not any(f.startswith("PMI_REQUIRED") for f in report.flags)


def test_pmi_flag_with_low_down_payment(low_down_inputs):
    results = calculate_rent_vs_buy(low_down_inputs)
    report = generate_decision_report(results, low_down_inputs)
    assert report.pmi_end_year is not None and report.pmi_end_year > 1
    assert any(f.startswith("PMI_REQUIRED") for f in report.flags)


def test_no_tax_benefit_without_mortgage():
    inputs = FinancialInputs(down_payment_percent=100.0)
    report = generate_decision_report(calculate_rent_vs_buy(inputs), inputs)
    assert any(f.startswith("NO_TAX_BENEFIT") for f in report.flags)


def test_monte_carlo_medians(base_results, base_inputs, small_mc):
    bands = run_monte_carlo_simulation(base_inputs, small_mc, seed=5)
    report = generate_decision_report(base_results, base_inputs, monte_carlo=bands)
    assert report.mc_rent_p50 == pytest.approx(bands[-1].rent_net_worth.p50)
    assert report.mc_buy_p50 == pytest.approx(bands[-1].buy_net_worth.p50)
    assert report.mc_bands_overlap is not None


def test_without_monte_carlo(base_results, base_inputs):
    report = generate_decision_report(base_results, base_inputs)
    assert report.mc_rent_p50 is None
    assert report.mc_bands_overlap is None


def test_dataframe(base_results, base_inputs):
    df = generate_decision_report(base_results, base_inputs).to_dataframe()
    assert list(df.columns) == ["Metric", "Value"]
    assert df.iloc[0]["Metric"] == "Verdict"

import pytest

from analysis.metrics import compute_liquidity_timeline


def test_columns_and_length(base_results, base_inputs):
    df = compute_liquidity_timeline(base_results, base_inputs)
    assert list(df.columns) == [
        "year", "net_proceeds_if_sold", "total_investment", "liquidity_penalty",
        "opportunity_cost", "mobility_score", "breaks_even",
    ]
    assert len(df) == 10


def test_values(base_results, base_inputs):
    df = compute_liquidity_timeline(base_results, base_inputs)
    first = base_results.yearly_projections[0]
    assert df.loc[0, "total_investment"] == pytest.approx(100000 + first.cumulative_ownership_cost)
    assert df.loc[0, "opportunity_cost"] == pytest.approx(first.rent_net_worth - first.net_proceeds_if_sold)
    assert df["mobility_score"].between(0, 100).all()
    assert (df["liquidity_penalty"] >= 0).all()

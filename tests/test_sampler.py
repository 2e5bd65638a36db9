import numpy as np
import pytest

from core.config import MonteCarloInputs
from distributions.sampler import MonteCarloSampler, box_muller, random_normal


class TestMonteCarloInputs:
    def test_defaults(self):
        mc = MonteCarloInputs()
        assert (mc.home_price_volatility, mc.rent_volatility, mc.stock_market_volatility) == (15.0, 10.0, 20.0)
        assert mc.simulations == 1000

    @pytest.mark.parametrize("simulations", [0, -5])
    def test_invalid_simulations(self, simulations):
        with pytest.raises(ValueError):
            MonteCarloInputs(simulations=simulations)

    def test_negative_volatility(self):
        with pytest.raises(ValueError):
            MonteCarloInputs(rent_volatility=-1.0)


class TestBoxMuller:
    def test_standard_normal_moments(self):
        z = box_muller(np.random.default_rng(0), 20000)
        assert np.all(np.isfinite(z))
        assert abs(z.mean()) < 0.05
        assert abs(z.std() - 1.0) < 0.05

    def test_random_normal_zero_std_returns_mean(self):
        assert random_normal(3.5, 0.0, rng=np.random.default_rng(1)) == 3.5


class TestMonteCarloSampler:
    def test_shapes(self):
        paths = MonteCarloSampler(MonteCarloInputs(simulations=200), seed=42).sample()
        assert paths.n_paths == 200
        assert paths.home_appreciation.shape == (200,)
        assert paths.rent_growth.shape == (200,)
        assert paths.investment_return.shape == (200,)

    def test_seeded_reproducible(self):
        mc = MonteCarloInputs(simulations=100)
        a = MonteCarloSampler(mc, seed=7).sample()
        b = MonteCarloSampler(mc, seed=7).sample()
        np.testing.assert_array_equal(a.home_appreciation, b.home_appreciation)
        np.testing.assert_array_equal(a.investment_return, b.investment_return)

    def test_zero_volatility_gives_no_perturbation(self):
        mc = MonteCarloInputs(home_price_volatility=0, rent_volatility=0, stock_market_volatility=0, simulations=10)
        paths = MonteCarloSampler(mc, seed=3).sample()
        assert not paths.home_appreciation.any()
        assert not paths.rent_growth.any()

    def test_apply_adds_percentage_points(self, base_inputs):
        paths = MonteCarloSampler(MonteCarloInputs(simulations=5), seed=11).sample()
        perturbed = paths.apply(base_inputs, 2)
        assert perturbed.home_appreciation_rate == pytest.approx(3.5 + paths.home_appreciation[2])
        assert perturbed.rent_growth_rate == pytest.approx(3.5 + paths.rent_growth[2])
        assert perturbed.investment_return == pytest.approx(8.0 + paths.investment_return[2])
        assert perturbed.home_price == base_inputs.home_price

    def test_dataframes(self):
        paths = MonteCarloSampler(MonteCarloInputs(simulations=20), seed=5).sample()
        assert list(paths.to_dataframe().columns) == ["path_id", "home_appreciation", "rent_growth", "investment_return"]
        assert len(paths.summary()) == 3

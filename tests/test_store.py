import json

import pytest

from core.config import FinancialInputs, MonteCarloInputs
from scenarios.storage import InMemoryScenarioRepository, JsonFileScenarioRepository
from scenarios.store import SCENARIO_COLORS, ScenarioNotFoundError, ScenarioStore
from scenarios.validators import InvalidInputsError


@pytest.fixture
def store():
    return ScenarioStore(InMemoryScenarioRepository())


class TestWorkingInputs:
    def test_update_input(self, store):
        store.update_input("home_price", 650000.0)
        assert store.inputs.home_price == 650000.0

    def test_update_unknown_input(self, store):
        with pytest.raises(KeyError):
            store.update_input("garage_size", 2)

    def test_calculate(self, store):
        results = store.calculate()
        assert store.results is results
        assert len(results.yearly_projections) == 10

    def test_calculate_rejects_invalid_inputs(self, store):
        store.update_input("loan_term_years", 0)
        with pytest.raises(InvalidInputsError):
            store.calculate()

    def test_reset(self, store):
        store.update_input("current_rent", 4000.0)
        store.calculate()
        store.reset_inputs()
        assert store.inputs == FinancialInputs()
        assert store.results is None


class TestScenarios:
    def test_save_without_results(self, store):
        assert store.save_scenario("Nothing yet") is None
        assert store.scenarios == []

    def test_save_assigns_colors_in_order(self, store):
        store.calculate()
        first = store.save_scenario("Base")
        second = store.save_scenario("Again")
        assert first.color == SCENARIO_COLORS[0]
        assert second.color == SCENARIO_COLORS[1]
        assert first.id != second.id
        assert store.active_scenario_id == second.id

    def test_load_scenario(self, store):
        store.calculate()
        saved = store.save_scenario("Base")
        store.update_input("home_price", 800000.0)
        store.calculate()
        store.load_scenario(saved.id)
        assert store.inputs.home_price == 500000.0
        assert store.results is saved.results

    def test_delete_clears_active(self, store):
        store.calculate()
        saved = store.save_scenario("Base")
        store.delete_scenario(saved.id)
        assert store.scenarios == []
        assert store.active_scenario_id is None

    def test_unknown_scenario(self, store):
        with pytest.raises(ScenarioNotFoundError):
            store.load_scenario("missing")

    def test_rename(self, store):
        store.calculate()
        saved = store.save_scenario("Base")
        store.rename_scenario(saved.id, "Starter home")
        assert store.get_scenario(saved.id).name == "Starter home"


class TestMonteCarloSettings:
    def test_update(self, store):
        store.update_monte_carlo_input("simulations", 250)
        assert store.monte_carlo_inputs.simulations == 250

    def test_update_unknown(self, store):
        with pytest.raises(KeyError):
            store.update_monte_carlo_input("seed", 1)

    def test_toggle(self, store):
        assert store.toggle_monte_carlo() is True
        assert store.toggle_monte_carlo() is False


class TestPersistence:
    def test_load_from_empty_repository(self, store):
        assert store.load() is False

    def test_round_trip(self):
        repo = InMemoryScenarioRepository()
        original = ScenarioStore(repo)
        original.update_input("home_price", 600000.0)
        original.update_monte_carlo_input("rent_volatility", 5.0)
        original.toggle_monte_carlo()
        original.calculate()
        saved = original.save_scenario("Bigger house")
        original.save()

        restored = ScenarioStore(repo)
        assert restored.load() is True
        assert restored.inputs == original.inputs
        assert restored.monte_carlo_inputs == MonteCarloInputs(rent_volatility=5.0)
        assert restored.show_monte_carlo is True
        assert restored.results is None
        assert restored.active_scenario_id == saved.id
        [scenario] = restored.scenarios
        assert scenario.name == "Bigger house"
        assert scenario.color == saved.color
        assert scenario.results.net_worth_difference == pytest.approx(saved.results.net_worth_difference)

    def test_json_file(self, tmp_path):
        path = tmp_path / "nested" / "scenarios.json"
        store = ScenarioStore(JsonFileScenarioRepository(path))
        store.calculate()
        store.save_scenario("Base")
        store.save()

        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["version"] == 1
        assert payload["scenarios"][0]["inputs"]["home_price"] == 500000.0
        assert "yearly_projections" not in path.read_text(encoding="utf-8")

        restored = ScenarioStore(JsonFileScenarioRepository(path))
        assert restored.load() is True
        assert len(restored.scenarios) == 1

    def test_failed_save_keeps_previous_file(self, tmp_path):
        path = tmp_path / "scenarios.json"
        repo = JsonFileScenarioRepository(path)
        store = ScenarioStore(repo)
        store.calculate()
        store.save_scenario("Base")
        store.save()
        before = path.read_text(encoding="utf-8")

        class _UnserializableSnapshot:
            scenarios = []

            def model_dump_json(self, **kwargs):
                raise RuntimeError("serialization failed")

        with pytest.raises(RuntimeError):
            repo.save(_UnserializableSnapshot())

        assert path.read_text(encoding="utf-8") == before
        assert len(repo.load().scenarios) == 1
        assert list(tmp_path.iterdir()) == [path]

    def test_missing_file(self, tmp_path):
        assert ScenarioStore(JsonFileScenarioRepository(tmp_path / "none.json")).load() is False

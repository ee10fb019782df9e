import math

import numpy as np
import pytest

from callcenter_wfm import (
    OperatingHoursTrafficModel,
    PeakHourTrafficModel,
    PlannerConfig,
    StaffingSolver,
)
from callcenter_wfm.erlang_math import service_level


@pytest.fixture
def operating_hours_solver():
    return StaffingSolver(PlannerConfig(traffic_model=OperatingHoursTrafficModel(13)))


@pytest.mark.parametrize("calls, aht", [(0, 300), (-5, 300), (100, 0), (100, -1), (0, 0)])
def test_no_demand_returns_zero(calls, aht):
    res = StaffingSolver().solve(calls, aht, 80)
    assert res.required_agents == 0
    assert res.tve == 0


def test_operating_hours_scenario(operating_hours_solver):
    res = operating_hours_solver.solve(2000, 300, 80)
    assert res.traffic == pytest.approx(12.8205, abs=1e-4)
    assert res.base_agents == 17
    assert res.required_agents == 25
    assert res.service_level == pytest.approx(0.849090, abs=1e-6)
    assert res.converged


def test_peak_hour_scenario_is_default():
    res = StaffingSolver().solve(2000, 300, 80)
    assert res.traffic == pytest.approx(23.3333, abs=1e-4)
    assert res.base_agents == 28
    assert res.required_agents == 40
    assert res.tve == pytest.approx(300 * res.service_level / 28)


def test_solve_is_deterministic(operating_hours_solver):
    first = operating_hours_solver.solve(2000, 300, 80)
    second = operating_hours_solver.solve(2000, 300, 80)
    assert first == second


def test_target_defaults_to_config():
    solver = StaffingSolver(PlannerConfig(target_service_level=90))
    assert solver.solve(500, 240) == solver.solve(500, 240, 90)
    assert solver.solve(500, 240).base_agents == 8


def test_models_give_different_staffing():
    peak = StaffingSolver(PlannerConfig(traffic_model=PeakHourTrafficModel(0.14)))
    spread = StaffingSolver(PlannerConfig(traffic_model=OperatingHoursTrafficModel(13)))
    assert peak.solve(2000, 300, 80).required_agents != spread.solve(2000, 300, 80).required_agents


def test_solution_is_minimal_and_meets_target():
    rng = np.random.default_rng(11)
    solver = StaffingSolver()
    for _ in range(200):
        calls = float(rng.uniform(10, 20000))
        aht = float(rng.uniform(30, 900))
        target = float(rng.uniform(50, 95))
        res = solver.solve(calls, aht, target)
        assert res.converged
        assert service_level(res.traffic, res.base_agents, 20, aht) * 100 >= target
        if res.base_agents - 1 > res.traffic:
            assert service_level(res.traffic, res.base_agents - 1, 20, aht) * 100 < target
        assert res.required_agents == math.ceil(res.base_agents / 0.70)


@pytest.mark.parametrize("availability", [0.5, 0.7, 0.85, 1.0])
def test_shrinkage_inflation(availability):
    solver = StaffingSolver(PlannerConfig(availability_factor=availability))
    res = solver.solve(3000, 280, 80)
    assert res.required_agents == math.ceil(res.base_agents / availability)


def test_iteration_cap_degrades_gracefully(caplog):
    # A 100% target is never reached, so the cap stops the search
    solver = StaffingSolver(PlannerConfig(max_iterations=5))
    res = solver.solve(2000, 300, 100.0)
    assert not res.converged
    assert res.base_agents == math.floor(res.traffic) + 5
    assert res.required_agents == math.ceil(res.base_agents / 0.70)
    assert "iteration cap" in caplog.text


def test_invalid_config_rejected():
    with pytest.raises(ValueError):
        PlannerConfig(availability_factor=0)
    with pytest.raises(ValueError):
        PlannerConfig(max_iterations=0)
    with pytest.raises(ValueError):
        PeakHourTrafficModel(0)
    with pytest.raises(ValueError):
        OperatingHoursTrafficModel(-1)

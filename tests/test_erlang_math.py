import math

import numpy as np
import pytest

from callcenter_wfm.erlang_math import erlang_c, service_level


@pytest.mark.parametrize("traffic", [0.0, 0.5, 3.0, 12.82, 250.0])
def test_erlang_c_saturated_when_agents_do_not_exceed_traffic(traffic):
    for agents in range(0, math.floor(traffic) + 1):
        assert erlang_c(traffic, agents) == 1


def test_erlang_c_textbook_value():
    # A=2, N=3: P(wait) = 4/9
    assert erlang_c(2.0, 3) == pytest.approx(4 / 9)


def test_erlang_c_known_staffing_point():
    assert erlang_c(12.820512820512821, 17) == pytest.approx(0.199400, abs=1e-6)


def test_erlang_c_stays_finite_for_large_traffic():
    # A^N / N! would overflow a float here
    p = erlang_c(400.0, 430)
    assert 0.0 < p < 1.0
    assert math.isfinite(p)


def test_service_level_known_values():
    traffic = 12.820512820512821
    assert service_level(traffic, 16, 20, 300) == pytest.approx(0.750980, abs=1e-6)
    assert service_level(traffic, 17, 20, 300) == pytest.approx(0.849090, abs=1e-6)
    assert service_level(10.0, 12, 20, 180) == pytest.approx(0.640158, abs=1e-6)


def test_service_level_in_unit_interval():
    for agents in range(0, 30):
        sl = service_level(12.5, agents, 20, 300)
        assert 0.0 <= sl <= 1.0


def test_service_level_non_decreasing_in_agents():
    rng = np.random.default_rng(2024)
    for _ in range(500):
        traffic = float(rng.uniform(0.1, 200.0))
        agents = int(rng.integers(0, 260))
        aht = float(rng.uniform(30.0, 900.0))
        answer = float(rng.uniform(0.0, 60.0))
        low = service_level(traffic, agents, answer, aht)
        high = service_level(traffic, agents + 1, answer, aht)
        assert high >= low - 1e-12

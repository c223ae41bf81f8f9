"""
Tests for the wet-bulb solver and the shared bounded root-finder.
"""

import psychrolib
import pytest

from psychrocalc.config import DEFAULT_PRESSURE_KPA, MAX_SOLVER_ITERATIONS
from psychrocalc.engine.moist_air import (
    humidity_ratio_from_vapor_pressure,
    saturation_humidity_ratio,
    vapor_pressure_from_relative_humidity,
)
from psychrocalc.engine.solver import find_root
from psychrocalc.engine.wet_bulb import (
    humidity_ratio_from_wet_bulb,
    solve_wet_bulb,
    solve_wet_bulb_with_iterations,
)

P = DEFAULT_PRESSURE_KPA


def _w(Tdb: float, RH: float, pressure: float = P) -> float:
    return humidity_ratio_from_vapor_pressure(
        vapor_pressure_from_relative_humidity(Tdb, RH), pressure
    )


# ---------------------------------------------------------------------------
# Root finder
# ---------------------------------------------------------------------------

class TestFindRoot:

    def test_simple_root(self):
        root, iterations = find_root(lambda x: x * x - 2.0, 0.0, 2.0, xtol=1e-10)
        assert root == pytest.approx(2.0 ** 0.5, abs=1e-9)
        assert iterations <= MAX_SOLVER_ITERATIONS

    def test_root_at_bound(self):
        assert find_root(lambda x: x - 1.0, 1.0, 3.0) == (1.0, 0)
        assert find_root(lambda x: x - 3.0, 1.0, 3.0) == (3.0, 0)

    def test_not_bracketed(self):
        with pytest.raises(ValueError, match="not bracketed"):
            find_root(lambda x: x * x + 1.0, -1.0, 1.0)

    def test_budget_exhaustion_returns_estimate(self):
        root, iterations = find_root(lambda x: x - 0.3, 0.0, 1.0, xtol=1e-15, max_iter=2)
        assert 0.0 <= root <= 1.0
        assert iterations <= 2


# ---------------------------------------------------------------------------
# Wet-bulb solver
# ---------------------------------------------------------------------------

class TestWetBulb:

    def test_reference_point(self):
        # 25°C, 50% RH at sea level: wet-bulb 17.7-18.0°C
        assert 17.7 <= solve_wet_bulb(25.0, _w(25.0, 50.0), P) <= 18.0

    def test_saturated_air(self):
        W_sat = saturation_humidity_ratio(20.0, P)
        assert solve_wet_bulb(20.0, W_sat, P) == pytest.approx(20.0, abs=1e-3)

    def test_supersaturated_is_clamped(self):
        W_sat = saturation_humidity_ratio(20.0, P)
        assert solve_wet_bulb(20.0, W_sat * 1.2, P) == 20.0

    def test_inverse_of_energy_balance(self):
        W = humidity_ratio_from_wet_bulb(30.0, 22.0, P)
        assert solve_wet_bulb(30.0, W, P) == pytest.approx(22.0, abs=1e-3)

    def test_below_freezing(self):
        Twb = solve_wet_bulb(-5.0, _w(-5.0, 60.0), P)
        assert -10.0 < Twb < -5.0

    @pytest.mark.parametrize("Tdb, RH", [(25.0, 50.0), (30.0, 40.0), (20.0, 70.0), (10.0, 80.0)])
    def test_close_to_psychrolib(self, Tdb, RH):
        # psychrolib adds the liquid-water enthalpy term; the difference stays small
        psychrolib.SetUnitSystem(psychrolib.SI)
        W = _w(Tdb, RH)
        expected = psychrolib.GetTWetBulbFromHumRatio(Tdb, W, P * 1000.0)
        assert solve_wet_bulb(Tdb, W, P) == pytest.approx(expected, abs=0.3)

    def test_lower_at_altitude(self):
        W = 0.008
        assert solve_wet_bulb(25.0, W, 80.0) < solve_wet_bulb(25.0, W, P)

    @pytest.mark.parametrize(
        "Tdb, W",
        [
            (50.0, 0.0),
            (50.0, 1e-7),
            (-10.0, 1e-7),
            (-40.0, 0.0),
            (60.0, None),  # saturated
            (-10.0, None),
            (0.0, None),
            (45.0, 0.03),
        ],
    )
    def test_bounded_iterations_and_upper_bound(self, Tdb, W):
        if W is None:
            W = saturation_humidity_ratio(Tdb, P)
        Twb, iterations = solve_wet_bulb_with_iterations(Tdb, W, P)
        assert iterations <= 100
        assert Twb <= Tdb

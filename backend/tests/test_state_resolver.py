"""
Tests for the state point resolver.

Reference values are from the ASHRAE Fundamentals handbook psychrometric
tables. All tests use standard atmospheric pressure (101.325 kPa) unless
stated otherwise.
"""

import math

import numpy as np
import pytest

from psychrocalc.config import DEFAULT_PRESSURE_KPA, ParameterKind
from psychrocalc.engine.state_resolver import (
    derive_properties_from_pair,
    recompute,
    resolve_state_point,
)

P = DEFAULT_PRESSURE_KPA

PROPERTY_FIELDS = ("Tdb", "RH", "Twb", "Tdp", "W", "W_display", "h", "v", "Pv", "Ps", "mu")


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def approx(value: float, rel_tol: float = 0.01, abs_tol: float = 0.1):
    """
    Approximate comparison helper.
    Default tolerance: 1% relative or 0.1 absolute (whichever is larger).
    """
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Test: Tdb + RH input pair
# ---------------------------------------------------------------------------

class TestTdbRh:
    """Reference conditions: 25°C, 50% RH at sea level."""

    def setup_method(self):
        self.result = resolve_state_point(
            input_pair=("Tdb", "RH"),
            values=(25.0, 50.0),
            pressure=P,
            label="Room",
        )

    def test_dry_bulb(self):
        assert self.result.Tdb == 25.0

    def test_relative_humidity(self):
        assert self.result.RH == approx(50.0, abs_tol=1e-3)

    def test_humidity_ratio(self):
        # ~9.9 g/kg
        assert 9.8 <= self.result.W_display <= 10.0
        assert self.result.W == approx(0.00988, abs_tol=2e-5)

    def test_enthalpy(self):
        assert self.result.h == approx(50.2, abs_tol=0.3)

    def test_wet_bulb(self):
        assert 17.7 <= self.result.Twb <= 18.0

    def test_dew_point(self):
        # ~13.9°C
        assert 13.7 <= self.result.Tdp <= 14.1

    def test_specific_volume(self):
        assert self.result.v == approx(0.858, abs_tol=0.002)

    def test_vapor_pressure(self):
        assert self.result.Pv == approx(1.585, abs_tol=0.002)
        assert self.result.Ps == approx(3.17, abs_tol=0.002)

    def test_degree_of_saturation(self):
        assert 0.49 <= self.result.mu <= 0.5

    def test_label_and_input_echo(self):
        assert self.result.label == "Room"
        assert self.result.input_pair == ("Tdb", "RH")
        assert self.result.input_values == (25.0, 50.0)
        assert self.result.pressure == P

    def test_complete(self):
        assert self.result.is_complete


class TestTdbRhSaturated:
    """Saturated air: 20°C, 100% RH (typical coil leaving condition)."""

    def setup_method(self):
        self.result = resolve_state_point(("Tdb", "RH"), (20.0, 100.0), P)

    def test_tdb_equals_twb_equals_tdp(self):
        assert self.result.Twb == approx(20.0, abs_tol=1e-3)
        assert self.result.Tdp == approx(20.0, abs_tol=0.1)

    def test_degree_of_saturation(self):
        assert self.result.mu == approx(1.0, abs_tol=1e-6)


class TestBoneDryAir:
    """0% RH: no vapor, so the dew point is undefined."""

    def setup_method(self):
        self.result = resolve_state_point(("Tdb", "RH"), (30.0, 0.0), P)

    def test_no_moisture(self):
        assert self.result.W == 0.0
        assert self.result.Pv == 0.0

    def test_dew_point_absent(self):
        assert self.result.Tdp is None

    def test_still_complete(self):
        assert self.result.is_complete
        assert self.result.Twb < 30.0


# ---------------------------------------------------------------------------
# Test: every other supported pair, against the Tdb + RH reference
# ---------------------------------------------------------------------------

class TestCrossConsistency:
    """
    Resolve the same physical state from different input pairs.
    All results should produce the same properties (within tolerance).
    """

    def setup_method(self):
        self.ref = resolve_state_point(("Tdb", "RH"), (25.0, 50.0), P)

    def _check(self, result, rh_tol=0.05):
        assert result.is_complete
        assert result.Tdb == approx(self.ref.Tdb, abs_tol=0.01)
        assert result.RH == approx(self.ref.RH, abs_tol=rh_tol)
        assert result.W == approx(self.ref.W, abs_tol=2e-6)
        assert result.Twb == approx(self.ref.Twb, abs_tol=0.01)
        assert result.h == approx(self.ref.h, abs_tol=0.02)

    def test_tdb_twb(self):
        self._check(resolve_state_point(("Tdb", "Twb"), (self.ref.Tdb, self.ref.Twb), P))

    def test_tdb_tdp(self):
        self._check(resolve_state_point(("Tdb", "Tdp"), (self.ref.Tdb, self.ref.Tdp), P))

    def test_tdb_w(self):
        self._check(resolve_state_point(("Tdb", "W"), (self.ref.Tdb, self.ref.W), P))

    def test_tdb_h(self):
        self._check(resolve_state_point(("Tdb", "h"), (self.ref.Tdb, self.ref.h), P))

    def test_tdb_pv(self):
        self._check(resolve_state_point(("Tdb", "Pv"), (self.ref.Tdb, self.ref.Pv), P))

    def test_tdb_v(self):
        # v carries 5 decimals, so W comes back slightly coarser
        result = resolve_state_point(("Tdb", "v"), (self.ref.Tdb, self.ref.v), P)
        assert result.W == approx(self.ref.W, abs_tol=2e-5)
        assert result.RH == approx(self.ref.RH, abs_tol=0.2)

    def test_twb_rh(self):
        self._check(resolve_state_point(("Twb", "RH"), (self.ref.Twb, self.ref.RH), P))

    def test_tdp_rh(self):
        self._check(resolve_state_point(("Tdp", "RH"), (self.ref.Tdp, self.ref.RH), P))


class TestTwbRh:

    def test_saturated(self):
        result = resolve_state_point(("Twb", "RH"), (18.0, 100.0), P)
        assert result.Tdb == approx(18.0, abs_tol=1e-6)
        assert result.Twb == approx(18.0, abs_tol=1e-3)

    def test_dry_air(self):
        result = resolve_state_point(("Twb", "RH"), (15.0, 10.0), P)
        assert result.Tdb > 25.0
        assert result.RH == approx(10.0, abs_tol=0.01)
        assert result.Twb == approx(15.0, abs_tol=0.01)

    def test_below_freezing(self):
        result = resolve_state_point(("Twb", "RH"), (-5.0, 60.0), P)
        assert result.Tdb > -5.0
        assert result.Twb == approx(-5.0, abs_tol=0.01)

    def test_very_cold_hits_target_rh(self):
        result = resolve_state_point(("Twb", "RH"), (-60.0, 50.0), P)
        assert result.is_complete
        assert result.Tdb > -60.0
        assert result.RH == approx(50.0, abs_tol=0.01)
        assert result.Twb == approx(-60.0, abs_tol=0.01)


class TestTdbEnthalpyClamp:

    def test_enthalpy_above_saturation_clamps_to_saturated(self):
        result = derive_properties_from_pair("Tdb", 25.0, "h", 200.0, P)
        assert result.is_complete
        assert result.RH == approx(100.0, abs_tol=1e-3)

    def test_enthalpy_below_dry_air_clamps_to_bone_dry(self):
        result = derive_properties_from_pair("Tdb", 25.0, "h", 10.0, P)
        assert result.is_complete
        assert result.W == 0.0


# ---------------------------------------------------------------------------
# Test: pair ordering and parameter names
# ---------------------------------------------------------------------------

class TestPairOrdering:

    def test_commutative(self):
        a = derive_properties_from_pair("dryBulb", 25, "rh", 50, 101.325)
        b = derive_properties_from_pair("rh", 50, "dryBulb", 25, 101.325)
        for field in PROPERTY_FIELDS:
            assert getattr(a, field) == getattr(b, field), field

    @pytest.mark.parametrize(
        "pair, values",
        [
            (("Tdb", "Twb"), (30.0, 22.0)),
            (("Tdb", "h"), (30.0, 60.0)),
            (("Twb", "RH"), (20.0, 40.0)),
            (("Tdp", "RH"), (10.0, 40.0)),
        ],
    )
    def test_reversed_pairs_match(self, pair, values):
        a = resolve_state_point(pair, values, P)
        b = resolve_state_point((pair[1], pair[0]), (values[1], values[0]), P)
        for field in PROPERTY_FIELDS:
            assert getattr(a, field) == getattr(b, field), field

    def test_parameter_kinds_accepted(self):
        result = resolve_state_point((ParameterKind.TDB, ParameterKind.RH), (25.0, 50.0), P)
        assert result.input_pair == ("Tdb", "RH")
        assert result.is_complete

    def test_aliases(self):
        assert ParameterKind.parse("dryBulbTemp") is ParameterKind.TDB
        assert ParameterKind.parse("wet_bulb") is ParameterKind.TWB
        assert ParameterKind.parse("Dew Point") is ParameterKind.TDP
        assert ParameterKind.parse("humidityRatio") is ParameterKind.W
        assert ParameterKind.parse("vaporPressure") is ParameterKind.PV
        assert ParameterKind.parse("bogus") is None
        assert ParameterKind.parse(None) is None


# ---------------------------------------------------------------------------
# Test: invalid and unsupported input is a no-op
# ---------------------------------------------------------------------------

class TestNoOp:

    def _assert_given_only(self, state, given: dict):
        assert not state.is_complete
        for field in PROPERTY_FIELDS:
            assert getattr(state, field) == given.get(field), field

    def test_unsupported_pair(self):
        state = derive_properties_from_pair("h", 50.0, "v", 0.86, P)
        self._assert_given_only(state, {"h": 50.0, "v": 0.86})

    def test_unknown_names(self):
        state = derive_properties_from_pair("foo", 1.0, "bar", 2.0, P)
        self._assert_given_only(state, {})
        assert state.input_pair == ("foo", "bar")

    def test_same_kind_twice(self):
        state = derive_properties_from_pair("Tdb", 20.0, "dryBulb", 20.0, P)
        assert not state.is_complete

    def test_wet_bulb_above_dry_bulb(self):
        state = derive_properties_from_pair("Tdb", 25.0, "Twb", 30.0, P)
        self._assert_given_only(state, {"Tdb": 25.0, "Twb": 30.0})

    def test_dew_point_above_dry_bulb(self):
        state = derive_properties_from_pair("Tdb", 25.0, "Tdp", 26.0, P)
        self._assert_given_only(state, {"Tdb": 25.0, "Tdp": 26.0})

    @pytest.mark.parametrize("rh", [-1.0, 100.5, 150.0])
    def test_rh_out_of_range(self, rh):
        state = derive_properties_from_pair("Tdb", 25.0, "RH", rh, P)
        self._assert_given_only(state, {"Tdb": 25.0, "RH": rh})

    def test_vapor_pressure_at_total_pressure(self):
        state = derive_properties_from_pair("Tdb", 25.0, "Pv", P, P)
        assert not state.is_complete

    def test_supersaturated_humidity_ratio(self):
        state = derive_properties_from_pair("Tdb", 20.0, "W", 0.05, P)
        assert not state.is_complete

    def test_negative_humidity_ratio(self):
        state = derive_properties_from_pair("Tdb", 20.0, "W", -0.001, P)
        assert not state.is_complete

    def test_wet_bulb_too_low(self):
        state = derive_properties_from_pair("Tdb", 45.0, "Twb", 5.0, P)
        assert not state.is_complete

    def test_nonpositive_pressure(self):
        assert not derive_properties_from_pair("Tdb", 25.0, "RH", 50.0, 0.0).is_complete

    def test_nan_value(self):
        assert not derive_properties_from_pair("Tdb", math.nan, "RH", 50.0, P).is_complete

    @pytest.mark.parametrize("temp_c", [-300.0, -273.15, -270.0, -268.0])
    def test_temperature_near_absolute_zero(self, temp_c):
        state = derive_properties_from_pair("Tdb", temp_c, "RH", 50.0, P)
        self._assert_given_only(state, {"Tdb": temp_c, "RH": 50.0})

    @pytest.mark.parametrize("pair", [("Tdb", "W"), ("Twb", "RH"), ("Tdp", "RH")])
    def test_other_pairs_near_absolute_zero(self, pair):
        value = 0.0 if pair[1] == "W" else 50.0
        state = derive_properties_from_pair(pair[0], -273.15, pair[1], value, P)
        assert not state.is_complete

    def test_resolve_raises_for_unsupported_pair(self):
        with pytest.raises(ValueError, match="Unsupported input pair"):
            resolve_state_point(("h", "v"), (50.0, 0.86), P)

    def test_resolve_raises_for_invalid_values(self):
        with pytest.raises(ValueError, match="exceeds dry-bulb"):
            resolve_state_point(("Tdb", "Twb"), (25.0, 30.0), P)


# ---------------------------------------------------------------------------
# Test: properties over the working domain
# ---------------------------------------------------------------------------

class TestDomainProperties:

    TEMPS = np.linspace(-10.0, 50.0, 7)
    RHS = (1.0, 25.0, 50.0, 75.0, 100.0)

    def test_round_trip_through_humidity_ratio(self):
        for Tdb in self.TEMPS:
            for RH in self.RHS:
                state = derive_properties_from_pair("Tdb", Tdb, "RH", RH, P)
                again = derive_properties_from_pair("Tdb", state.Tdb, "W", state.W, P)
                assert again.RH == pytest.approx(RH, abs=0.5), (Tdb, RH)

    def test_wet_bulb_and_dew_point_bounded_by_dry_bulb(self):
        for Tdb in self.TEMPS:
            for RH in self.RHS:
                state = derive_properties_from_pair("Tdb", Tdb, "RH", RH, P)
                assert state.Twb <= state.Tdb
                assert state.Tdp <= state.Tdb

    def test_wet_bulb_between_dew_point_and_dry_bulb(self):
        for Tdb in (0.0, 20.0, 40.0):
            state = derive_properties_from_pair("Tdb", Tdb, "RH", 40.0, P)
            assert state.Tdp < state.Twb < state.Tdb


# ---------------------------------------------------------------------------
# Test: recompute
# ---------------------------------------------------------------------------

class TestRecompute:

    def test_recompute_at_new_pressure(self):
        state = derive_properties_from_pair("Tdb", 25.0, "RH", 50.0, P, label="A")
        high = recompute(state, 84.0)
        assert high.pressure == 84.0
        assert high.RH == approx(50.0, abs_tol=1e-3)
        assert high.W > state.W
        assert high.label == "A"

    def test_recompute_keeps_pressure_by_default(self):
        state = derive_properties_from_pair("Tdb", 25.0, "RH", 50.0, P)
        assert recompute(state) == state

    def test_unresolvable_state_returned_unchanged(self):
        state = derive_properties_from_pair("h", 50.0, "v", 0.86, P)
        assert recompute(state, 90.0) is state

    def test_state_that_becomes_invalid_is_kept(self):
        # 95°C saturated air needs ~85 kPa of vapor; at 50 kPa it cannot exist
        state = derive_properties_from_pair("Tdb", 95.0, "RH", 100.0, P)
        assert state.is_complete
        assert recompute(state, 50.0) is state

"""
Core state point resolver.

Given any supported pair of independent psychrometric properties and
barometric pressure, resolves all other properties of the moist air state.

Every input pair is first reduced to dry-bulb temperature + humidity ratio,
which is the canonical resolution path. Pairs without a closed form
(RH + Twb) use the shared bounded root-finder.

Invalid physical input and unsupported pairs are not errors for callers of
derive_properties_from_pair() / recompute(): they get the state back with
only its given values populated. resolve_state_point() raises ValueError
instead, for callers that want the reason.
"""

import logging
import math
from typing import Optional

from psychrocalc.config import (
    ParameterKind,
    SUPPORTED_INPUT_PAIRS,
    MOLAR_MASS_RATIO,
    GRAMS_PER_KG,
    DEW_POINT_UNDEFINED,
    DRY_BULB_SEARCH_SPAN,
    DRY_BULB_TOLERANCE,
    MAX_SEARCH_TEMP_C,
    DEFAULT_PRESSURE_KPA,
)
from psychrocalc.engine.saturation import (
    saturation_vapor_pressure,
    dew_point_from_vapor_pressure,
)
from psychrocalc.engine.moist_air import (
    humidity_ratio_from_vapor_pressure,
    vapor_pressure_from_humidity_ratio,
    vapor_pressure_from_relative_humidity,
    relative_humidity_from_vapor_pressure,
    saturation_humidity_ratio,
    degree_of_saturation,
    moist_air_enthalpy,
    moist_air_volume,
    humidity_ratio_from_enthalpy,
    humidity_ratio_from_specific_volume,
)
from psychrocalc.engine.wet_bulb import solve_wet_bulb, humidity_ratio_from_wet_bulb
from psychrocalc.engine.solver import find_root
from psychrocalc.models.state_point import MoistAirState

logger = logging.getLogger(__name__)

# Relative slack allowed above saturation before W is rejected
_SATURATION_SLACK = 1e-9


def _calc_all_from_tdb_w(Tdb: float, W: float, pressure: float) -> dict:
    """
    Given Tdb and W (humidity ratio), calculate all other properties.
    This is our canonical resolution path — every input pair ultimately
    gets converted to Tdb + W, and then we compute everything else.
    """
    W_sat = _saturated_w(Tdb, pressure)
    if W < 0.0:
        raise ValueError(f"Humidity ratio {W:.6f} is negative")
    if W > W_sat * (1.0 + _SATURATION_SLACK):
        raise ValueError(
            f"Humidity ratio {W:.6f} exceeds saturation ({W_sat:.6f}) at Tdb={Tdb:.2f}°C"
        )
    W = min(W, W_sat)

    Pv = vapor_pressure_from_humidity_ratio(W, pressure)
    Ps = saturation_vapor_pressure(Tdb)
    RH = relative_humidity_from_vapor_pressure(Tdb, Pv)
    Twb = solve_wet_bulb(Tdb, W, pressure)
    Tdp = dew_point_from_vapor_pressure(Pv)
    h = moist_air_enthalpy(Tdb, W)
    v = moist_air_volume(Tdb, W, pressure)
    mu = degree_of_saturation(Tdb, W, pressure)

    return {
        "Tdb": round(Tdb, 4),
        "Twb": round(min(Twb, Tdb), 4),
        "Tdp": None if Tdp == DEW_POINT_UNDEFINED else round(min(Tdp, Tdb), 4),
        "RH": round(min(RH, 100.0), 4),
        "W": round(W, 8),
        "W_display": round(W * GRAMS_PER_KG, 4),
        "h": round(h, 4),
        "v": round(v, 5),
        "Pv": round(Pv, 6),
        "Ps": round(Ps, 6),
        "mu": round(mu, 6),
    }


def _saturated_w(Tdb: float, pressure: float) -> float:
    W_sat = saturation_humidity_ratio(Tdb, pressure)
    if W_sat is None:
        raise ValueError(
            f"Saturation pressure at Tdb={Tdb:.2f}°C exceeds barometric pressure"
        )
    return W_sat


def _check_rh(RH_pct: float) -> None:
    if RH_pct < 0.0 or RH_pct > 100.0:
        raise ValueError(f"Relative humidity {RH_pct}% is outside 0-100%")


def _resolve_tdb_rh(Tdb: float, RH_pct: float, pressure: float) -> dict:
    """Resolve from dry-bulb temperature and relative humidity."""
    _check_rh(RH_pct)
    Pv = vapor_pressure_from_relative_humidity(Tdb, RH_pct)
    W = humidity_ratio_from_vapor_pressure(Pv, pressure)
    if W is None:
        raise ValueError(
            f"Vapor pressure {Pv:.4f} kPa is not below barometric pressure {pressure} kPa"
        )
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdb_twb(Tdb: float, Twb: float, pressure: float) -> dict:
    """
    Resolve from dry-bulb and wet-bulb temperatures.

    The humidity ratio sought is the one for which the wet-bulb solver
    returns Twb. Because that solver inverts the energy balance, evaluating
    the balance at Twb gives the same W directly.
    """
    if Twb > Tdb:
        raise ValueError(f"Wet-bulb {Twb}°C exceeds dry-bulb {Tdb}°C")
    W = humidity_ratio_from_wet_bulb(Tdb, Twb, pressure)
    if W < 0.0:
        raise ValueError(
            f"Wet-bulb {Twb}°C is too low for dry-bulb {Tdb}°C (no moisture left)"
        )
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdb_tdp(Tdb: float, Tdp: float, pressure: float) -> dict:
    """Resolve from dry-bulb and dew point temperatures."""
    if Tdp > Tdb:
        raise ValueError(f"Dew point {Tdp}°C exceeds dry-bulb {Tdb}°C")
    Pv = saturation_vapor_pressure(Tdp)
    W = humidity_ratio_from_vapor_pressure(Pv, pressure)
    if W is None:
        raise ValueError(
            f"Vapor pressure at dew point {Tdp}°C exceeds barometric pressure"
        )
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdb_w(Tdb: float, W: float, pressure: float) -> dict:
    """Resolve from dry-bulb temperature and humidity ratio (kg/kg)."""
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdb_h(Tdb: float, h_target: float, pressure: float) -> dict:
    """
    Resolve from dry-bulb temperature and specific enthalpy.

    The enthalpy equation is linear in W, so W follows algebraically. An
    enthalpy outside what is achievable at this Tdb is clamped to the
    bone-dry or saturated end.
    """
    W_sat = _saturated_w(Tdb, pressure)
    W = humidity_ratio_from_enthalpy(Tdb, h_target)
    W_clamped = min(max(W, 0.0), W_sat)
    if W_clamped != W:
        logger.debug(
            "Enthalpy %.3f kJ/kg unreachable at Tdb=%.2f; W clamped %.6f -> %.6f",
            h_target, Tdb, W, W_clamped,
        )
    return _calc_all_from_tdb_w(Tdb, W_clamped, pressure)


def _resolve_tdb_pv(Tdb: float, Pv: float, pressure: float) -> dict:
    """Resolve from dry-bulb temperature and partial vapor pressure (kPa)."""
    W = humidity_ratio_from_vapor_pressure(Pv, pressure)
    if W is None:
        raise ValueError(
            f"Vapor pressure {Pv} kPa must be in [0, {pressure}) kPa"
        )
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdb_v(Tdb: float, v: float, pressure: float) -> dict:
    """Resolve from dry-bulb temperature and specific volume (m³/kg_da)."""
    W = humidity_ratio_from_specific_volume(Tdb, v, pressure)
    if W < 0.0:
        raise ValueError(
            f"Specific volume {v} m³/kg is below that of dry air at Tdb={Tdb}°C"
        )
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_twb_rh(Twb: float, RH_pct: float, pressure: float) -> dict:
    """
    Resolve from wet-bulb temperature and relative humidity.

    There is no closed form. We find Tdb such that the W implied by
    (Tdb, Twb) has the target RH at Tdb. At Tdb == Twb the air is saturated
    (RH = 100%); RH falls monotonically as Tdb rises along a wet-bulb line.
    """
    _check_rh(RH_pct)
    if RH_pct == 100.0:
        return _calc_all_from_tdb_w(Twb, _saturated_w(Twb, pressure), pressure)

    def objective(Tdb: float) -> float:
        W = humidity_ratio_from_wet_bulb(Tdb, Twb, pressure)
        # Pv stays continuous through W < 0 so the root stays bracketed
        Pv = W * pressure / (MOLAR_MASS_RATIO + W)
        return relative_humidity_from_vapor_pressure(Tdb, Pv) - RH_pct

    Tdb_min = Twb
    Tdb_max = min(Twb + DRY_BULB_SEARCH_SPAN, MAX_SEARCH_TEMP_C)

    # RH is very steep in Tdb along cold wet-bulb lines
    try:
        Tdb, _ = find_root(objective, Tdb_min, Tdb_max, xtol=DRY_BULB_TOLERANCE)
    except ValueError:
        raise ValueError(f"Cannot find a valid Tdb for Twb={Twb}, RH={RH_pct}%")

    W = max(humidity_ratio_from_wet_bulb(Tdb, Twb, pressure), 0.0)
    return _calc_all_from_tdb_w(Tdb, W, pressure)


def _resolve_tdp_rh(Tdp: float, RH_pct: float, pressure: float) -> dict:
    """
    Resolve from dew point temperature and relative humidity.

    Given Tdp, the vapor pressure is fixed: Pv = Ps(Tdp). Given RH,
    Ps(Tdb) = Pv / RH, so Tdb is the dew point of that saturation pressure.
    """
    _check_rh(RH_pct)
    if RH_pct == 0.0:
        raise ValueError("Relative humidity must be positive when the dew point is given")

    Pv = saturation_vapor_pressure(Tdp)
    W = humidity_ratio_from_vapor_pressure(Pv, pressure)
    if W is None:
        raise ValueError(
            f"Vapor pressure at dew point {Tdp}°C exceeds barometric pressure"
        )
    Tdb = dew_point_from_vapor_pressure(Pv * 100.0 / RH_pct)
    return _calc_all_from_tdb_w(Tdb, W, pressure)


# Resolver dispatch table
_RESOLVERS = {
    (ParameterKind.TDB, ParameterKind.RH): _resolve_tdb_rh,
    (ParameterKind.TDB, ParameterKind.TWB): _resolve_tdb_twb,
    (ParameterKind.TDB, ParameterKind.TDP): _resolve_tdb_tdp,
    (ParameterKind.TDB, ParameterKind.W): _resolve_tdb_w,
    (ParameterKind.TDB, ParameterKind.H): _resolve_tdb_h,
    (ParameterKind.TDB, ParameterKind.PV): _resolve_tdb_pv,
    (ParameterKind.TDB, ParameterKind.V): _resolve_tdb_v,
    (ParameterKind.TWB, ParameterKind.RH): _resolve_twb_rh,
    (ParameterKind.TDP, ParameterKind.RH): _resolve_tdp_rh,
}


def _pair_name(param) -> str:
    kind = ParameterKind.parse(param)
    return kind.value if kind is not None else str(param)


def _resolve(input_pair: tuple, values: tuple, pressure: float) -> dict:
    """Pick the resolver for a pair (either order) and run it."""
    kinds = (ParameterKind.parse(input_pair[0]), ParameterKind.parse(input_pair[1]))

    if kinds in _RESOLVERS:
        resolver = _RESOLVERS[kinds]
    elif (kinds[1], kinds[0]) in _RESOLVERS:
        resolver = _RESOLVERS[(kinds[1], kinds[0])]
        values = (values[1], values[0])
    else:
        supported = [f"({a.value}, {b.value})" for a, b in SUPPORTED_INPUT_PAIRS]
        raise ValueError(
            f"Unsupported input pair: {tuple(_pair_name(p) for p in input_pair)}. "
            f"Supported pairs: {', '.join(supported)}"
        )

    if not (math.isfinite(values[0]) and math.isfinite(values[1])):
        raise ValueError(f"Input values must be finite, got {values}")
    if not (math.isfinite(pressure) and pressure > 0.0):
        raise ValueError(f"Barometric pressure must be positive, got {pressure}")

    return resolver(values[0], values[1], pressure)


def _given_state(
    input_pair: tuple, values: tuple, pressure: float, label: str
) -> MoistAirState:
    """A state carrying only the given pair, for input that cannot be resolved."""
    given = {}
    for param, value in zip(input_pair, values):
        kind = ParameterKind.parse(param)
        if kind is not None:
            given[kind.value] = value
    return MoistAirState(
        label=label,
        pressure=pressure,
        input_pair=(_pair_name(input_pair[0]), _pair_name(input_pair[1])),
        input_values=(values[0], values[1]),
        **given,
    )


def resolve_state_point(
    input_pair: tuple,
    values: tuple[float, float],
    pressure: float = DEFAULT_PRESSURE_KPA,
    label: str = "",
) -> MoistAirState:
    """
    Resolves a full state point from any supported input pair.

    Args:
        input_pair: Tuple of two property names or ParameterKinds, e.g. ("Tdb", "RH")
        values: Tuple of two values corresponding to the input pair
        pressure: Barometric pressure in kPa
        label: Optional user label

    Returns:
        MoistAirState with all resolved properties

    Raises:
        ValueError: If the input pair is not supported or values are out of range
    """
    props = _resolve(tuple(input_pair), tuple(values), pressure)
    return MoistAirState(
        label=label,
        pressure=pressure,
        input_pair=(_pair_name(input_pair[0]), _pair_name(input_pair[1])),
        input_values=(values[0], values[1]),
        **props,
    )


def derive_properties_from_pair(
    param_one,
    value_one: float,
    param_two,
    value_two: float,
    pressure: float = DEFAULT_PRESSURE_KPA,
    label: str = "",
) -> MoistAirState:
    """
    Derive every moist air property from two given ones.

    Never raises for physical input. If the pair is unsupported or the values
    are physically impossible, the returned state holds only the given values
    (is_complete is False).
    """
    input_pair = (param_one, param_two)
    values = (value_one, value_two)
    try:
        return resolve_state_point(input_pair, values, pressure, label)
    except ValueError as e:
        logger.debug("State not derivable from %s=%s: %s", input_pair, values, e)
        return _given_state(input_pair, values, pressure, label)


def recompute(state: MoistAirState, pressure: Optional[float] = None) -> MoistAirState:
    """
    Re-derive a state from its own input pair, e.g. after a pressure change.

    Returns a new state, or the original state unchanged when it can no
    longer be derived.
    """
    if pressure is None:
        pressure = state.pressure
    new_state = derive_properties_from_pair(
        state.input_pair[0],
        state.input_values[0],
        state.input_pair[1],
        state.input_values[1],
        pressure,
        label=state.label,
    )
    if not new_state.is_complete:
        return state
    return new_state

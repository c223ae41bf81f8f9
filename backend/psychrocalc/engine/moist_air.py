"""
Closed-form moist air relations (ASHRAE Fundamentals 2017, Ch. 1).

Every function here is algebraic. Out-of-range input (vapor pressure at or
above total pressure, negative humidity) yields None rather than an exception
so that callers can treat it as "not enough valid information".
"""

from typing import Optional

from psychrocalc.config import (
    ZERO_CELSIUS_K,
    MOLAR_MASS_RATIO,
    R_DRY_AIR,
    VOLUME_WATER_FACTOR,
    CP_DRY_AIR,
    CP_WATER_VAPOR,
    H_FG_0C,
)
from psychrocalc.engine.saturation import saturation_vapor_pressure


def humidity_ratio_from_vapor_pressure(
    vapor_pressure: float, pressure: float
) -> Optional[float]:
    """W = 0.621945 · Pv / (p − Pv). Pressures in kPa, result in kg/kg."""
    if vapor_pressure < 0.0 or vapor_pressure >= pressure:
        return None
    return MOLAR_MASS_RATIO * vapor_pressure / (pressure - vapor_pressure)


def vapor_pressure_from_humidity_ratio(
    humidity_ratio: float, pressure: float
) -> Optional[float]:
    """Pv = W · p / (0.621945 + W). Result in kPa."""
    if humidity_ratio < 0.0:
        return None
    return humidity_ratio * pressure / (MOLAR_MASS_RATIO + humidity_ratio)


def saturation_humidity_ratio(temp_c: float, pressure: float) -> Optional[float]:
    """Humidity ratio of saturated air at temp_c. None if Pws >= pressure."""
    return humidity_ratio_from_vapor_pressure(
        saturation_vapor_pressure(temp_c), pressure
    )


def vapor_pressure_from_relative_humidity(temp_c: float, rh_pct: float) -> float:
    """Partial vapor pressure (kPa) from dry-bulb and RH in percent."""
    return saturation_vapor_pressure(temp_c) * rh_pct / 100.0


def relative_humidity_from_vapor_pressure(temp_c: float, vapor_pressure: float) -> float:
    """RH in percent: Pv / Pws(Tdb) × 100."""
    return 100.0 * vapor_pressure / saturation_vapor_pressure(temp_c)


def degree_of_saturation(temp_c: float, humidity_ratio: float, pressure: float) -> float:
    """μ = W / Ws(Tdb). Zero when saturation is not defined at this pressure."""
    W_sat = saturation_humidity_ratio(temp_c, pressure)
    if not W_sat:
        return 0.0
    return humidity_ratio / W_sat


def moist_air_enthalpy(temp_c: float, humidity_ratio: float) -> float:
    """h = 1.006·t + W·(2501 + 1.86·t), kJ/kg_da."""
    return CP_DRY_AIR * temp_c + humidity_ratio * (H_FG_0C + CP_WATER_VAPOR * temp_c)


def humidity_ratio_from_enthalpy(temp_c: float, enthalpy: float) -> float:
    """Algebraic inverse of moist_air_enthalpy() for W. May be negative."""
    return (enthalpy - CP_DRY_AIR * temp_c) / (H_FG_0C + CP_WATER_VAPOR * temp_c)


def dry_bulb_from_enthalpy(enthalpy: float, humidity_ratio: float) -> float:
    """Algebraic inverse of moist_air_enthalpy() for t."""
    return (enthalpy - H_FG_0C * humidity_ratio) / (
        CP_DRY_AIR + CP_WATER_VAPOR * humidity_ratio
    )


def moist_air_volume(temp_c: float, humidity_ratio: float, pressure: float) -> float:
    """v = 0.287042·(t + 273.15)·(1 + 1.607858·W) / p, m³/kg_da with p in kPa."""
    return (
        R_DRY_AIR * (temp_c + ZERO_CELSIUS_K)
        * (1.0 + VOLUME_WATER_FACTOR * humidity_ratio)
        / pressure
    )


def humidity_ratio_from_specific_volume(
    temp_c: float, specific_volume: float, pressure: float
) -> float:
    """Algebraic inverse of moist_air_volume() for W. May be negative."""
    dry_volume = R_DRY_AIR * (temp_c + ZERO_CELSIUS_K) / pressure
    return (specific_volume / dry_volume - 1.0) / VOLUME_WATER_FACTOR

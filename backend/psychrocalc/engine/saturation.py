"""
Saturation vapor pressure and dew point.

Saturation pressure uses the Hyland–Wexler correlations as given in
ASHRAE Fundamentals 2017, Ch. 1, Eq. 5 (over ice, -100 to 0°C) and
Eq. 6 (over liquid water, 0 to 200°C). Both are fits of ln(Pws) in
absolute temperature and agree to within 0.01% at 0°C.

The dew point is the inverse: a Magnus-type closed form supplies the
starting estimate, and a few Newton steps on ln(Pws(T)) = ln(Pv) bring it
onto the Hyland–Wexler curve.
"""

import math

from psychrocalc.config import (
    ZERO_CELSIUS_K,
    DEW_POINT_UNDEFINED,
    DEW_POINT_ICE_THRESHOLD_KPA,
    DEW_POINT_NEWTON_STEPS,
)

# Over ice, Eq. 5 (Pa)
_C1 = -5.6745359e03
_C2 = 6.3925247
_C3 = -9.6778430e-03
_C4 = 6.2215701e-07
_C5 = 2.0747825e-09
_C6 = -9.4840240e-13
_C7 = 4.1635019

# Over liquid water, Eq. 6 (Pa)
_C8 = -5.8002206e03
_C9 = 1.3914993
_C10 = -4.8640239e-02
_C11 = 4.1764768e-05
_C12 = -1.4452093e-08
_C13 = 6.5459673


def _ln_sat_press_pa(temp_c: float) -> float:
    """ln of the saturation pressure in Pa."""
    T = temp_c + ZERO_CELSIUS_K
    if T <= 0.0:
        raise ValueError(f"Temperature {temp_c}°C is at or below absolute zero")
    if temp_c < 0.0:
        return (
            _C1 / T + _C2 + _C3 * T + _C4 * T ** 2
            + _C5 * T ** 3 + _C6 * T ** 4 + _C7 * math.log(T)
        )
    return (
        _C8 / T + _C9 + _C10 * T + _C11 * T ** 2
        + _C12 * T ** 3 + _C13 * math.log(T)
    )


def _d_ln_sat_press(temp_c: float) -> float:
    """d ln(Pws) / dT, per kelvin."""
    T = temp_c + ZERO_CELSIUS_K
    if temp_c < 0.0:
        return (
            -_C1 / T ** 2 + _C3 + 2.0 * _C4 * T
            + 3.0 * _C5 * T ** 2 + 4.0 * _C6 * T ** 3 + _C7 / T
        )
    return (
        -_C8 / T ** 2 + _C10 + 2.0 * _C11 * T
        + 3.0 * _C12 * T ** 2 + _C13 / T
    )


def saturation_vapor_pressure(temp_c: float) -> float:
    """
    Saturation vapor pressure of water at a given temperature.

    Args:
        temp_c: Temperature in °C (over ice below 0°C, over water at or above)

    Returns:
        Saturation vapor pressure in kPa

    Raises:
        ValueError: At or below absolute zero, or where Ps underflows to zero
    """
    Ps = math.exp(_ln_sat_press_pa(temp_c)) / 1000.0
    if Ps == 0.0:
        raise ValueError(f"Saturation pressure underflows at {temp_c}°C")
    return Ps


def saturation_vapor_pressure_derivative(temp_c: float) -> float:
    """Slope of the saturation pressure curve, kPa/K."""
    return saturation_vapor_pressure(temp_c) * _d_ln_sat_press(temp_c)


def _magnus_dew_point(vapor_pressure: float) -> float:
    """Closed-form Magnus estimate of the dew (or frost) point, °C."""
    if vapor_pressure > DEW_POINT_ICE_THRESHOLD_KPA:
        alpha = math.log(vapor_pressure / 0.61094)
        return 243.04 * alpha / (17.625 - alpha)
    alpha = math.log(vapor_pressure / 0.61115)
    return 272.62 * alpha / (22.46 - alpha)


def dew_point_from_vapor_pressure(vapor_pressure: float) -> float:
    """
    Dew point temperature for a given partial vapor pressure.

    Below 0°C this is the frost point, consistent with the ice branch of
    saturation_vapor_pressure().

    Args:
        vapor_pressure: Partial vapor pressure in kPa

    Returns:
        Dew point in °C, or DEW_POINT_UNDEFINED when vapor_pressure <= 0
    """
    if not vapor_pressure > 0.0:
        return DEW_POINT_UNDEFINED

    ln_target = math.log(vapor_pressure * 1000.0)
    Tdp = _magnus_dew_point(vapor_pressure)

    for _ in range(DEW_POINT_NEWTON_STEPS):
        step = (_ln_sat_press_pa(Tdp) - ln_target) / _d_ln_sat_press(Tdp)
        Tdp -= step
        if abs(step) < 1e-9:
            break

    return Tdp

"""
Barometric pressure from altitude (ASHRAE standard atmosphere, via psychrolib).
"""

import psychrolib

from psychrocalc.config import MIN_PRESSURE_KPA, MAX_STANDARD_ATM_ALTITUDE_M


def pressure_from_altitude(altitude: float) -> float:
    """
    Standard atmospheric pressure at an altitude.

    Args:
        altitude: Altitude above sea level in meters

    Returns:
        Barometric pressure in kPa, never below MIN_PRESSURE_KPA
    """
    # The standard-atmosphere fit reaches zero pressure at this altitude
    if altitude >= MAX_STANDARD_ATM_ALTITUDE_M:
        return MIN_PRESSURE_KPA
    psychrolib.SetUnitSystem(psychrolib.SI)
    pressure = psychrolib.GetStandardAtmPressure(altitude) / 1000.0
    return max(pressure, MIN_PRESSURE_KPA)

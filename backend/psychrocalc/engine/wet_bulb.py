"""
Wet-bulb temperature from the psychrometric energy balance.

    W = (c_pa·(Twb − Tdb) + Ws(Twb)·(h_fg0 + c_pv·Twb)) / (h_fg0 + c_pv·Tdb)

Ws(Twb) is the saturation humidity ratio at the trial wet-bulb and increases
monotonically with Twb, so the right-hand side is monotonic and the root is
bracketed between a very cold lower bound and the dry-bulb itself.
"""

import logging

from psychrocalc.config import (
    CP_DRY_AIR,
    CP_WATER_VAPOR,
    H_FG_0C,
    MIN_SEARCH_TEMP_C,
    TEMPERATURE_TOLERANCE,
    MAX_SOLVER_ITERATIONS,
)
from psychrocalc.engine.moist_air import saturation_humidity_ratio
from psychrocalc.engine.solver import find_root

logger = logging.getLogger(__name__)


def humidity_ratio_from_wet_bulb(Tdb: float, Twb: float, pressure: float) -> float:
    """
    Evaluate the energy balance for W given Tdb and Twb.

    This is the exact inverse of solve_wet_bulb(). The result can be
    negative when Twb is too low for the given Tdb; callers validate it.
    """
    W_sat = saturation_humidity_ratio(Twb, pressure)
    if W_sat is None:
        raise ValueError(
            f"Saturation pressure at Twb={Twb:.2f}°C exceeds total pressure {pressure} kPa"
        )
    return (
        CP_DRY_AIR * (Twb - Tdb) + W_sat * (H_FG_0C + CP_WATER_VAPOR * Twb)
    ) / (H_FG_0C + CP_WATER_VAPOR * Tdb)


def solve_wet_bulb_with_iterations(
    Tdb: float, W: float, pressure: float
) -> tuple[float, int]:
    """
    Solve for the wet-bulb temperature and report the iteration count.

    Returns:
        (Twb, iterations). Twb is clamped to Tdb when the air is at or
        beyond saturation.
    """

    def objective(Twb: float) -> float:
        return humidity_ratio_from_wet_bulb(Tdb, Twb, pressure) - W

    lower = min(MIN_SEARCH_TEMP_C, Tdb)

    try:
        return find_root(
            objective,
            lower,
            Tdb,
            xtol=TEMPERATURE_TOLERANCE,
            max_iter=MAX_SOLVER_ITERATIONS,
        )
    except ValueError:
        # No sign change: W is at/above saturation (clamp to Tdb) or below
        # anything reachable from the lower bound.
        if objective(Tdb) < 0.0:
            logger.debug("W=%.6f is supersaturated at Tdb=%.2f; Twb clamped", W, Tdb)
            return Tdb, 0
        return lower, 0


def solve_wet_bulb(Tdb: float, W: float, pressure: float) -> float:
    """
    Wet-bulb temperature (°C) for dry-bulb Tdb (°C), humidity ratio W (kg/kg)
    and pressure (kPa). Never exceeds Tdb.
    """
    Twb, _ = solve_wet_bulb_with_iterations(Tdb, W, pressure)
    return min(Twb, Tdb)

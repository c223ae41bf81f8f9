"""
PsychroCalc configuration and constants.

Physical constants follow ASHRAE Handbook, Fundamentals (2017), Chapter 1.
All engine quantities are SI: °C, %, kg/kg, kJ/kg_da, m³/kg_da, kPa.
"""

from enum import Enum
from typing import Optional


class ParameterKind(str, Enum):
    """The eight moist-air properties that can be given as an input pair."""

    TDB = "Tdb"  # dry-bulb temperature, °C
    RH = "RH"  # relative humidity, %
    TWB = "Twb"  # wet-bulb temperature, °C
    TDP = "Tdp"  # dew point temperature, °C
    W = "W"  # humidity ratio, kg_w/kg_da
    H = "h"  # specific enthalpy, kJ/kg_da
    V = "v"  # specific volume, m³/kg_da
    PV = "Pv"  # partial vapor pressure, kPa

    @classmethod
    def parse(cls, name) -> Optional["ParameterKind"]:
        """Look up a kind by symbol or alias. Returns None for unknown names."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            return None
        key = name.strip().replace("_", "").replace("-", "").replace(" ", "").lower()
        return _PARAMETER_ALIASES.get(key)


_PARAMETER_ALIASES: dict[str, ParameterKind] = {
    "tdb": ParameterKind.TDB,
    "db": ParameterKind.TDB,
    "drybulb": ParameterKind.TDB,
    "drybulbtemp": ParameterKind.TDB,
    "drybulbtemperature": ParameterKind.TDB,
    "rh": ParameterKind.RH,
    "relativehumidity": ParameterKind.RH,
    "twb": ParameterKind.TWB,
    "wb": ParameterKind.TWB,
    "wetbulb": ParameterKind.TWB,
    "wetbulbtemp": ParameterKind.TWB,
    "wetbulbtemperature": ParameterKind.TWB,
    "tdp": ParameterKind.TDP,
    "dp": ParameterKind.TDP,
    "dewpoint": ParameterKind.TDP,
    "dewpointtemp": ParameterKind.TDP,
    "w": ParameterKind.W,
    "humidityratio": ParameterKind.W,
    "h": ParameterKind.H,
    "enthalpy": ParameterKind.H,
    "v": ParameterKind.V,
    "specificvolume": ParameterKind.V,
    "pv": ParameterKind.PV,
    "vaporpressure": ParameterKind.PV,
    "vapourpressure": ParameterKind.PV,
}


# Supported input pair combinations for state point resolution.
# Order inside a pair is irrelevant; the resolver matches either ordering.
SUPPORTED_INPUT_PAIRS: list[tuple[ParameterKind, ParameterKind]] = [
    (ParameterKind.TDB, ParameterKind.RH),
    (ParameterKind.TDB, ParameterKind.TWB),
    (ParameterKind.TDB, ParameterKind.TDP),
    (ParameterKind.TDB, ParameterKind.W),
    (ParameterKind.TDB, ParameterKind.H),
    (ParameterKind.TDB, ParameterKind.PV),
    (ParameterKind.TDB, ParameterKind.V),
    (ParameterKind.TWB, ParameterKind.RH),
    (ParameterKind.TDP, ParameterKind.RH),
]

# ---------------------------------------------------------------------------
# Physical constants (ASHRAE Fundamentals 2017, Ch. 1)
# ---------------------------------------------------------------------------

ZERO_CELSIUS_K = 273.15
MOLAR_MASS_RATIO = 0.621945  # M_water / M_dry_air
R_DRY_AIR = 0.287042  # kJ/(kg·K)
VOLUME_WATER_FACTOR = 1.607858  # 1 / MOLAR_MASS_RATIO
CP_DRY_AIR = 1.006  # kJ/(kg·K)
CP_WATER_VAPOR = 1.86  # kJ/(kg·K)
H_FG_0C = 2501.0  # kJ/kg, latent heat of vaporization at 0°C

# Standard atmosphere
STANDARD_PRESSURE_KPA = 101.325
MIN_PRESSURE_KPA = 10.0
# Altitude (m) where the standard-atmosphere pressure fit reaches zero
MAX_STANDARD_ATM_ALTITUDE_M = 1.0 / 2.25577e-5

# ---------------------------------------------------------------------------
# Solver settings
# ---------------------------------------------------------------------------

MAX_SOLVER_ITERATIONS = 100
TEMPERATURE_TOLERANCE = 1e-4  # °C
# Dry-bulb search from RH + wet-bulb, where RH changes by up to ~1e4 %/K
DRY_BULB_TOLERANCE = 1e-7  # °C
DEW_POINT_NEWTON_STEPS = 4

# Absolute bounds on temperature searches (validity of the Ps correlations)
MIN_SEARCH_TEMP_C = -100.0
MAX_SEARCH_TEMP_C = 200.0
# Span above the wet-bulb searched when solving dry-bulb from RH + wet-bulb
DRY_BULB_SEARCH_SPAN = 150.0

# Returned by the dew point correlation for Pv <= 0
DEW_POINT_UNDEFINED = -999.0

# Vapor pressure threshold splitting the dew point correlation (~0°C)
DEW_POINT_ICE_THRESHOLD_KPA = 0.61

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_PRESSURE_KPA = STANDARD_PRESSURE_KPA
DEFAULT_ALTITUDE_M = 0.0
DEFAULT_MASS_FLOW = 1.0  # kg/s of dry air

# Grams per kilogram, for humidity ratio display
GRAMS_PER_KG = 1000.0

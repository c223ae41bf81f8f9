"""
Pydantic models for state point input/output.
"""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from psychrocalc.config import DEFAULT_PRESSURE_KPA

# Fields that every fully resolved state carries. Tdp is absent only for
# bone-dry air (W = 0), where the dew point is undefined.
DERIVED_FIELDS = ("Tdb", "RH", "Twb", "W", "h", "v", "Pv")


class StatePointInput(BaseModel):
    """Input model for resolving a state point from two known properties."""

    input_pair: tuple[str, str] = Field(
        ...,
        description="Pair of independent properties, e.g. ('Tdb', 'RH')",
        examples=[("Tdb", "RH"), ("Tdb", "Twb")],
    )
    values: tuple[float, float] = Field(
        ...,
        description="Values for the input pair, in order matching input_pair",
        examples=[(25.0, 50.0), (25.0, 18.0)],
    )
    pressure: float = Field(
        default=DEFAULT_PRESSURE_KPA,
        description="Barometric pressure, kPa",
    )
    label: str = Field(
        default="",
        description="Optional user-facing label for this state point",
    )


class MoistAirState(BaseModel):
    """
    A moist air state point.

    Two of the properties are the given input pair; the rest are derived.
    A state that could not be derived keeps only its given values and
    leaves every other property as None.
    """

    # Input echo
    label: str = ""
    pressure: float = DEFAULT_PRESSURE_KPA
    input_pair: tuple[str, str]
    input_values: tuple[float, float]

    # Properties
    Tdb: Optional[float] = Field(None, description="Dry-bulb temperature (°C)")
    RH: Optional[float] = Field(None, description="Relative humidity (0-100%)")
    Twb: Optional[float] = Field(None, description="Wet-bulb temperature (°C)")
    Tdp: Optional[float] = Field(None, description="Dew point temperature (°C)")
    W: Optional[float] = Field(None, description="Humidity ratio (kg_w/kg_da)")
    W_display: Optional[float] = Field(None, description="Humidity ratio (g/kg)")
    h: Optional[float] = Field(None, description="Specific enthalpy (kJ/kg_da)")
    v: Optional[float] = Field(None, description="Specific volume (m³/kg_da)")
    Pv: Optional[float] = Field(None, description="Partial vapor pressure (kPa)")
    Ps: Optional[float] = Field(None, description="Saturation pressure at Tdb (kPa)")
    mu: Optional[float] = Field(None, description="Degree of saturation (0-1)")

    @computed_field
    @property
    def is_complete(self) -> bool:
        """True when every derived property has been populated."""
        return all(getattr(self, name) is not None for name in DERIVED_FIELDS)

"""
Pydantic model for the atmospheric context shared by a calculation session.
"""

from pydantic import BaseModel, Field, computed_field

from psychrocalc.config import DEFAULT_ALTITUDE_M
from psychrocalc.engine.atmosphere import pressure_from_altitude


class AtmosphericContext(BaseModel):
    """Site altitude and the barometric pressure derived from it."""

    model_config = {"frozen": True}

    altitude: float = Field(
        default=DEFAULT_ALTITUDE_M,
        description="Altitude above sea level, m",
    )

    @computed_field
    @property
    def pressure(self) -> float:
        """Standard-atmosphere barometric pressure at this altitude, kPa."""
        return pressure_from_altitude(self.altitude)

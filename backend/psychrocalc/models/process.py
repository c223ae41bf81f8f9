"""
Pydantic models for psychrometric process input/output.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from psychrocalc.config import DEFAULT_PRESSURE_KPA, DEFAULT_MASS_FLOW


class ProcessType(str, Enum):
    HEATING = "heating"
    COOLING = "cooling"
    HUMIDIFICATION = "humidification"
    DEHUMIDIFICATION = "dehumidification"
    MIXING = "mixing"
    CUSTOM = "custom"


class ProcessEnergy(BaseModel):
    """Energy change between two states for a given dry-air mass flow."""

    mass_flow: float = Field(..., description="Dry-air mass flow, kg/s")
    delta_T: float = Field(..., description="Dry-bulb change, K")
    delta_W: float = Field(..., description="Humidity ratio change, kg/kg")
    delta_h: float = Field(..., description="Enthalpy change, kJ/kg_da")
    Q_sensible: float = Field(..., description="Sensible energy change, kW")
    Q_latent: float = Field(..., description="Latent energy change, kW")
    Q_total: float = Field(..., description="Total energy change, kW")
    SHR: Optional[float] = Field(
        None, description="Sensible heat ratio Qs/Qt (None when Qt is zero)"
    )


class ProcessTransition(BaseModel):
    """
    A process between two state points of a session, referenced by id.

    Energy is derived from the current states of the referenced points and
    is None while either point is incomplete.
    """

    id: str
    process_type: ProcessType = ProcessType.CUSTOM
    start_point_id: str
    end_point_id: str
    mass_flow: float = Field(default=DEFAULT_MASS_FLOW, gt=0.0)
    mixing_ratio: Optional[float] = Field(None, ge=0.0, le=1.0)
    sensible_heat_ratio: Optional[float] = Field(None, ge=0.0, le=1.0)
    energy: Optional[ProcessEnergy] = None


class ProcessInput(BaseModel):
    """Input for a psychrometric process calculation."""

    process_type: ProcessType
    pressure: float = DEFAULT_PRESSURE_KPA

    # Start state: resolved from an input pair (reuses existing resolver)
    start_point_pair: tuple[str, str]
    start_point_values: tuple[float, float]

    # End state for heating/cooling/humidification/dehumidification/custom
    end_point_pair: Optional[tuple[str, str]] = None
    end_point_values: Optional[tuple[float, float]] = None

    # Dry-air mass flow (kg/s), or volumetric airflow (m³/s) at the start state
    mass_flow: Optional[float] = None
    airflow: Optional[float] = None

    # Adiabatic mixing parameters
    stream2_point_pair: Optional[tuple[str, str]] = None
    stream2_point_values: Optional[tuple[float, float]] = None
    mixing_fraction: Optional[float] = None  # stream 1 fraction: m1/(m1+m2)


class ProcessOutput(BaseModel):
    """Result of a process calculation."""

    process_type: ProcessType
    pressure: float

    start_point: dict  # Full MoistAirState as dict
    end_point: dict  # Full MoistAirState as dict
    energy: Optional[ProcessEnergy] = None

    metadata: dict = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
